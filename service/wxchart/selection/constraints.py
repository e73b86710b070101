"""Decision functions for the series selection.

All functions are pure functions of a SelectionState snapshot.

The chart has two numeric y-axes and one slot for a bar pair, which
limits selections to at most two categories of one shape class plus one
of the other: (2 range/line + 1 bar) or (1 range/line + 2 bar).
"""

from service.wxchart.base import constants as bc

from . import catalog
from .state import SelectionState


def is_category_active(state: SelectionState, category_id: str) -> bool:
    """True if at least one metric of the category is visible."""
    c = catalog.CATEGORIES.get(category_id)
    if c is None:
        return False
    return any(m in state.visible for m in c.members)


def active_categories(state: SelectionState) -> list[str]:
    """Returns the ids of all active categories, in catalog order."""
    return [c for c in catalog.CATEGORIES if is_category_active(state, c)]


def active_category_count(state: SelectionState) -> int:
    return len(active_categories(state))


def _count_shape_class(state: SelectionState, shape_class: str) -> int:
    return sum(
        1
        for c in active_categories(state)
        if catalog.CATEGORIES[c].shape_class == shape_class
    )


def range_line_count(state: SelectionState) -> int:
    return _count_shape_class(state, bc.SHAPE_CLASS_RANGE_LINE)


def bar_count(state: SelectionState) -> int:
    return _count_shape_class(state, bc.SHAPE_CLASS_BAR)


def capacity_allows(shape_class: str, range_line: int, bars: int) -> bool:
    """The capacity rule for adding a new category of the given shape class.

    Args:
        shape_class: shape class of the candidate category.
        range_line: number of active range/line categories.
        bars: number of active bar categories.
    """
    if shape_class == bc.SHAPE_CLASS_RANGE_LINE:
        return (range_line < 2 and bars <= 1) or (range_line < 1 and bars <= 2)
    elif shape_class == bc.SHAPE_CLASS_BAR:
        return (range_line <= 2 and bars < 1) or (range_line <= 1 and bars < 2)
    raise ValueError(f"Invalid shape class: {shape_class}")


def can_add_category(state: SelectionState, category_id: str) -> bool:
    """True if category_id is active or may become active."""
    if is_category_active(state, category_id):
        return True
    return capacity_allows(
        catalog.shape_class_of(category_id),
        range_line_count(state),
        bar_count(state),
    )


def can_select(state: SelectionState, metric_id: str) -> bool:
    """Returns True if the metric may be toggled in the given state.

    Visible metrics can always be toggled (to deselect them). Directional
    metrics are never independently selectable, dependent metrics only
    while their category is active.
    """
    m = catalog.find_metric(metric_id)
    if m is None:
        return False
    if m.shape == bc.SHAPE_DIRECTIONAL:
        return False
    if state.is_visible(metric_id):
        return True
    category_active = is_category_active(state, m.category)
    if catalog.is_dependent(metric_id):
        return category_active
    if catalog.is_grouped(metric_id) and category_active:
        return True
    return can_add_category(state, m.category)


def selectable_flags(state: SelectionState) -> dict[str, bool]:
    """can_select for every catalog metric, e.g. to enable legend controls."""
    return {m: can_select(state, m) for m in catalog.METRICS}
