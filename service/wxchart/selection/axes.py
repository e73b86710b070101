"""Axis assignment for the selected categories.

The chart displays at most two numeric y-axes:

* the first selected category (slot 0) uses the left axis,
* the second one (slot 1) uses the right axis,
* a third one (slot 2) is drawn on the right side against its own scale,
  but without an axis of its own.
"""

from pydantic import BaseModel

from service.wxchart.base import constants as bc

from . import catalog
from .state import SelectionState


BASE_MARGINS = {
    "top": 50,
    "bottom": 50,
    "left": 100,
    "right": 180,
}
# Horizontal space per additional axis on the same side.
AXIS_GAP = 60


class AxisBinding(BaseModel):
    axis_key: str
    side: str
    slot: int
    # False if the metric is drawn against a scale without a visible axis.
    displayed: bool


class ActiveAxes(BaseModel):
    left: list[str] = []
    right: list[str] = []


class Margins(BaseModel):
    top: int
    bottom: int
    left: int
    right: int


def category_axis(category_id: str) -> str | None:
    """Returns the scale key shared by the category's axis-bearing metrics."""
    for m in catalog.METRICS.values():
        if m.category == category_id and m.has_axis():
            return m.axis
    return None


def active_categories_in_order(state: SelectionState) -> list[str]:
    return list(state.order)


def axis_for(state: SelectionState, metric_id: str) -> AxisBinding | None:
    """Returns the axis binding of metric_id, or None if it has no axis.

    None is also returned for metrics whose category is not selected.
    """
    m = catalog.find_metric(metric_id)
    if m is None or not m.has_axis():
        return None
    slot = state.slot_of(m.category)
    if slot is None:
        return None

    if slot == 0:
        return AxisBinding(axis_key=m.axis, side=bc.SIDE_LEFT, slot=0, displayed=True)
    if slot == 1:
        return AxisBinding(axis_key=m.axis, side=bc.SIDE_RIGHT, slot=1, displayed=True)

    # Third selection: categories never share a scale key, so the metric
    # keeps its own scale, drawn without an axis.
    return AxisBinding(axis_key=m.axis, side=bc.SIDE_RIGHT, slot=slot, displayed=False)


def should_draw(state: SelectionState, metric_id: str) -> bool:
    """True if metric_id is drawn on the chart in the given state."""
    m = catalog.find_metric(metric_id)
    if m is None or not state.is_visible(metric_id):
        return False
    if m.category not in state.order:
        return False
    if m.shape == bc.SHAPE_DIRECTIONAL:
        # Drawn as an overlay whenever its category holds any slot.
        return True
    return m.has_axis()


def drawn_metrics(state: SelectionState, shape: str | None = None) -> list[str]:
    """Ids of all drawn metrics (optionally of one shape), in catalog order."""
    return [
        m.id
        for m in catalog.METRICS.values()
        if (shape is None or m.shape == shape) and should_draw(state, m.id)
    ]


def active_axes(state: SelectionState) -> ActiveAxes:
    """Returns the scale keys of the displayed left and right axes."""
    axes = ActiveAxes()
    if len(state.order) >= 1 and (key := category_axis(state.order[0])):
        axes.left.append(key)
    if len(state.order) >= 2 and (key := category_axis(state.order[1])):
        axes.right.append(key)
    return axes


def chart_margins(axes: ActiveAxes) -> Margins:
    """Margins around the plot area. Each additional axis on a side adds space."""
    return Margins(
        top=BASE_MARGINS["top"],
        bottom=BASE_MARGINS["bottom"],
        left=BASE_MARGINS["left"] + max(0, len(axes.left) - 1) * AXIS_GAP,
        right=BASE_MARGINS["right"] + max(0, len(axes.right) - 1) * AXIS_GAP,
    )


class ChartLayout(BaseModel):
    active_axes: ActiveAxes
    margins: Margins


def chart_layout(state: SelectionState) -> ChartLayout:
    """Displayed axes and margins of the chart, as needed by renderers."""
    active = active_axes(state)
    return ChartLayout(active_axes=active, margins=chart_margins(active))
