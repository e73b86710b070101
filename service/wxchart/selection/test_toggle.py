from hypothesis import given, settings
from hypothesis import strategies as st
import types
import unittest

from service.wxchart.base import constants as bc

from . import axes
from . import catalog
from . import constraints as cs
from . import toggle as tg
from .state import EMPTY, SelectionState


def _toggles(state: SelectionState, *steps: tuple[str, bool]) -> SelectionState:
    for metric_id, want_visible in steps:
        state = tg.toggle(state, metric_id, want_visible)
    return state


class TestToggle(unittest.TestCase):

    def test_select_appends_category(self):
        s = tg.toggle(EMPTY, bc.TEMPERATURE, True)
        self.assertEqual(s.order, (bc.TEMPERATURE,))
        self.assertTrue(s.is_visible(bc.TEMPERATURE))

    def test_unknown_metric_is_noop(self):
        s = tg.toggle(EMPTY, bc.TEMPERATURE, True)
        self.assertIs(tg.toggle(s, "pressure", True), s)
        self.assertIs(tg.toggle(s, "pressure", False), s)

    def test_select_twice_is_idempotent(self):
        s = _toggles(EMPTY, (bc.HUMIDITY, True), (bc.HUMIDITY, True))
        self.assertEqual(s.order, (bc.HUMIDITY,))

    def test_deselect_removes_category(self):
        s = _toggles(
            EMPTY,
            (bc.TEMPERATURE, True),
            (bc.HUMIDITY, True),
            (bc.PRECIPITATION, True),
            (bc.HUMIDITY, False),
        )
        # Later entries shift left.
        self.assertEqual(s.order, (bc.TEMPERATURE, bc.PRECIPITATION))
        self.assertFalse(s.is_visible(bc.HUMIDITY))

    def test_reselect_appends_at_end(self):
        s = _toggles(
            EMPTY,
            (bc.TEMPERATURE, True),
            (bc.HUMIDITY, True),
            (bc.TEMPERATURE, False),
            (bc.TEMPERATURE, True),
        )
        self.assertEqual(s.order, (bc.HUMIDITY, bc.TEMPERATURE))

    def test_deselect_inactive_metric(self):
        s = tg.toggle(EMPTY, bc.DAYLIGHT, False)
        self.assertEqual(s, EMPTY)

    def test_scenario_three_categories(self):
        s = tg.toggle(EMPTY, bc.TEMPERATURE, True)
        self.assertEqual(s.order, (bc.TEMPERATURE,))
        self.assertEqual(axes.axis_for(s, bc.TEMPERATURE).side, bc.SIDE_LEFT)

        s = tg.toggle(s, bc.HUMIDITY, True)
        self.assertEqual(s.order, (bc.TEMPERATURE, bc.HUMIDITY))
        binding = axes.axis_for(s, bc.HUMIDITY)
        self.assertEqual(binding.axis_key, bc.HUMIDITY)
        self.assertEqual(binding.side, bc.SIDE_RIGHT)

        s = tg.toggle(s, bc.PRECIPITATION, True)
        self.assertEqual(len(s.order), 3)
        binding = axes.axis_for(s, bc.PRECIPITATION)
        self.assertEqual(binding.side, bc.SIDE_RIGHT)
        self.assertFalse(binding.displayed)

        rejected = tg.toggle(s, bc.DAYLIGHT, True)
        self.assertEqual(rejected, s)
        self.assertFalse(rejected.is_visible(bc.DAYLIGHT))

    def test_scenario_wind_group(self):
        s = tg.toggle(EMPTY, bc.WIND_RANGE, True)
        self.assertEqual(s.order, (bc.WIND,))
        self.assertTrue(s.is_visible(bc.WIND_DIRECTION))

        s = tg.toggle(s, bc.WIND_GUST, True)
        self.assertTrue(s.is_visible(bc.WIND_GUST))

        s = tg.toggle(s, bc.WIND_RANGE, False)
        self.assertFalse(s.is_visible(bc.WIND_GUST))
        self.assertFalse(s.is_visible(bc.WIND_DIRECTION))
        self.assertEqual(s.order, ())

    def test_wind_direction_toggles_range(self):
        s = tg.toggle(EMPTY, bc.WIND_DIRECTION, True)
        self.assertTrue(s.is_visible(bc.WIND_RANGE))
        s = tg.toggle(s, bc.WIND_GUST, True)
        s = tg.toggle(s, bc.WIND_DIRECTION, False)
        self.assertEqual(s, EMPTY)

    def test_wind_gust_rejected_without_wind(self):
        s = tg.toggle(EMPTY, bc.TEMPERATURE, True)
        after = tg.toggle(s, bc.WIND_GUST, True)
        # Neither the gust nor the wind category must be added.
        self.assertEqual(after, s)

    def test_wind_gust_deselect_keeps_wind(self):
        s = _toggles(
            EMPTY,
            (bc.PRECIPITATION, True),
            (bc.WIND_RANGE, True),
            (bc.WIND_GUST, True),
            (bc.WIND_GUST, False),
        )
        self.assertEqual(s.order, (bc.PRECIPITATION, bc.WIND))
        self.assertTrue(s.is_visible(bc.WIND_RANGE))
        self.assertFalse(s.is_visible(bc.WIND_GUST))

    def test_wind_rejected_when_full(self):
        s = _toggles(EMPTY, (bc.TEMPERATURE, True), (bc.HUMIDITY, True))
        self.assertEqual(tg.toggle(s, bc.WIND_RANGE, True), s)

    def test_reset(self):
        self.assertEqual(tg.reset(), EMPTY)


class TestSelectionController(unittest.TestCase):

    def test_listeners_are_notified(self):
        seen = []
        ctrl = tg.SelectionController()
        ctrl.add_listener(seen.append)

        ctrl.toggle(bc.HUMIDITY, True)
        ctrl.toggle(bc.WIND_GUST, True)  # rejected, still notified
        ctrl.reset()

        self.assertEqual(len(seen), 3)
        self.assertEqual(seen[0].order, (bc.HUMIDITY,))
        self.assertEqual(seen[1], seen[0])
        self.assertEqual(seen[2], EMPTY)

    def test_queries(self):
        ctrl = tg.SelectionController()
        ctrl.toggle(bc.DAYLIGHT, True)
        ctrl.toggle(bc.WIND_RANGE, True)

        self.assertTrue(ctrl.visibility(bc.WIND_DIRECTION))
        self.assertEqual(ctrl.active_categories_in_order(), [bc.DAYLIGHT, bc.WIND])
        self.assertEqual(ctrl.axis_for(bc.WIND_RANGE).side, bc.SIDE_RIGHT)
        self.assertIsNone(ctrl.axis_for(bc.WIND_DIRECTION))
        self.assertTrue(ctrl.can_select(bc.WIND_GUST))
        self.assertFalse(ctrl.selectable_flags()[bc.WIND_DIRECTION])


############################################################
# Property-based tests over random toggle sequences
############################################################

ALLOWED_SHAPE_COUNTS = {(0, 0), (1, 0), (0, 1), (2, 0), (0, 2), (1, 1), (2, 1), (1, 2)}

TOGGLES = st.lists(
    st.tuples(st.sampled_from(list(catalog.METRICS) + ["pressure"]), st.booleans()),
    max_size=40,
)


def _states(steps):
    """Yields every intermediate state of the given toggle sequence."""
    state = EMPTY
    yield state
    for metric_id, want_visible in steps:
        state = tg.toggle(state, metric_id, want_visible)
        yield state


@settings(max_examples=300)
@given(steps=TOGGLES)
def test_invariants_hold_for_all_toggle_sequences(steps):
    for s in _states(steps):
        assert cs.active_category_count(s) <= bc.MAX_ACTIVE_CATEGORIES
        assert (cs.range_line_count(s), cs.bar_count(s)) in ALLOWED_SHAPE_COUNTS
        assert s.is_visible(bc.WIND_RANGE) == s.is_visible(bc.WIND_DIRECTION)
        if s.is_visible(bc.WIND_GUST):
            assert cs.is_category_active(s, bc.WIND)
        # The order holds exactly the active categories.
        assert set(s.order) == set(cs.active_categories(s))
        for metric_id in s.visible:
            assert catalog.category_of(metric_id) in s.order


@settings(max_examples=200)
@given(steps=TOGGLES)
def test_axis_slots(steps):
    for s in _states(steps):
        for metric_id in catalog.METRICS:
            binding = axes.axis_for(s, metric_id)
            if binding is None:
                continue
            if binding.slot == 0:
                assert binding.side == bc.SIDE_LEFT and binding.displayed
            elif binding.slot == 1:
                assert binding.side == bc.SIDE_RIGHT and binding.displayed
            else:
                assert binding.side == bc.SIDE_RIGHT and not binding.displayed
        active = axes.active_axes(s)
        assert len(active.left) <= 1 and len(active.right) <= 1


@given(steps=TOGGLES)
def test_deactivating_wind_clears_gust(steps):
    for before, after in zip(_states(steps), list(_states(steps))[1:]):
        if cs.is_category_active(before, bc.WIND) and not cs.is_category_active(
            after, bc.WIND
        ):
            assert not after.is_visible(bc.WIND_GUST)
            assert not after.is_visible(bc.WIND_DIRECTION)


class TestPackageExports(unittest.TestCase):

    def test_toggle_submodule_not_shadowed(self):
        from service.wxchart import selection

        self.assertIsInstance(selection.toggle, types.ModuleType)
        self.assertIs(selection.toggle, tg)
        s = selection.toggle.toggle(EMPTY, bc.TEMPERATURE, True)
        self.assertEqual(s.order, (bc.TEMPERATURE,))
        self.assertEqual(selection.toggle.reset(), EMPTY)
