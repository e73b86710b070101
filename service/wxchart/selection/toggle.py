"""State transitions of the series selection.

toggle() and reset() are pure: they take a SelectionState and return a new
one. SelectionController owns the current state of a running application
and notifies listeners (i.e. the renderer) after every transition.
"""

import logging
import threading
from typing import Callable

from . import axes
from . import catalog
from . import constraints as cs
from .state import EMPTY, SelectionState

logger = logging.getLogger(__name__)


def reset() -> SelectionState:
    return EMPTY


def _select(state: SelectionState, metric_id: str) -> SelectionState:
    m = catalog.metric(metric_id)
    category = catalog.category(m.category)

    if not cs.is_category_active(state, category.id):
        if catalog.is_dependent(metric_id):
            logger.debug("Rejected %s: %s is not active", metric_id, category.id)
            return state
        if not cs.can_add_category(state, category.id):
            logger.debug(
                "Rejected %s: no capacity for %s (order=%s)",
                metric_id,
                category.id,
                state.order,
            )
            return state
        state = state.with_category(category.id)

    if catalog.is_primary(metric_id):
        # Primary members of a group are toggled together.
        return state.with_visibility(category.primary, True)
    return state.with_visibility([metric_id], True)


def _deselect(state: SelectionState, metric_id: str) -> SelectionState:
    m = catalog.metric(metric_id)
    category = catalog.category(m.category)

    if catalog.is_primary(metric_id):
        # Without a primary member, dependent members cannot stay visible.
        state = state.with_visibility(category.members, False)
    else:
        state = state.with_visibility([metric_id], False)

    if not cs.is_category_active(state, category.id):
        state = state.without_category(category.id)
    return state


def toggle(state: SelectionState, metric_id: str, want_visible: bool) -> SelectionState:
    """Returns the state after the user toggled metric_id on or off.

    Unknown metrics and selections that would violate the capacity rule
    leave the state unchanged.
    """
    if catalog.find_metric(metric_id) is None:
        logger.debug("Ignoring toggle of unknown metric %s", metric_id)
        return state
    if want_visible:
        return _select(state, metric_id)
    return _deselect(state, metric_id)


Listener = Callable[[SelectionState], None]


class SelectionController:
    """Holds the current selection and applies transitions to it.

    Transitions run to completion under a lock. Listeners are called with
    the new state after every transition, also if a toggle was rejected,
    so that controls can be re-synced with the actual state.
    """

    def __init__(self, state: SelectionState = EMPTY):
        self._state = state
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SelectionState:
        return self._state

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _apply(self, transition: Callable[[SelectionState], SelectionState]):
        with self._lock:
            self._state = transition(self._state)
            state = self._state
        for listener in self._listeners:
            listener(state)
        return state

    def toggle(self, metric_id: str, want_visible: bool) -> SelectionState:
        return self._apply(lambda s: toggle(s, metric_id, want_visible))

    def reset(self) -> SelectionState:
        return self._apply(lambda _: reset())

    # Queries used by the rendering side.

    def visibility(self, metric_id: str) -> bool:
        return self._state.is_visible(metric_id)

    def axis_for(self, metric_id: str) -> "axes.AxisBinding | None":
        return axes.axis_for(self._state, metric_id)

    def can_select(self, metric_id: str) -> bool:
        return cs.can_select(self._state, metric_id)

    def selectable_flags(self) -> dict[str, bool]:
        return cs.selectable_flags(self._state)

    def active_categories_in_order(self) -> list[str]:
        return axes.active_categories_in_order(self._state)
