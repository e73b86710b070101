from .state import SelectionState, EMPTY
from .constraints import (
    active_category_count,
    bar_count,
    can_select,
    is_category_active,
    range_line_count,
    selectable_flags,
)
from .axes import (
    ActiveAxes,
    AxisBinding,
    ChartLayout,
    Margins,
    active_axes,
    active_categories_in_order,
    axis_for,
    chart_layout,
    chart_margins,
    should_draw,
)
from .toggle import SelectionController

__all__ = [
    # state
    "SelectionState",
    "EMPTY",
    # constraints
    "active_category_count",
    "bar_count",
    "can_select",
    "is_category_active",
    "range_line_count",
    "selectable_flags",
    # axes
    "ActiveAxes",
    "AxisBinding",
    "ChartLayout",
    "Margins",
    "active_axes",
    "active_categories_in_order",
    "axis_for",
    "chart_layout",
    "chart_margins",
    "should_draw",
    # toggle
    "SelectionController",
]
