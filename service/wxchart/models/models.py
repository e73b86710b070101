import datetime
from pydantic import BaseModel

from service.wxchart.selection import axes
from service.wxchart.selection import catalog
from service.wxchart.selection import constraints as cs
from service.wxchart.selection.state import SelectionState


class MetricInfo(BaseModel):
    id: str
    label: str
    category: str
    shape: str
    units: str
    color: str


class MetricView(BaseModel):
    """Per-metric state, as needed by legend controls and renderers."""

    id: str
    visible: bool
    selectable: bool
    drawn: bool
    axis: axes.AxisBinding | None = None


class SelectionView(BaseModel):
    order: list[str]
    metrics: list[MetricView]
    active_axes: axes.ActiveAxes
    margins: axes.Margins
    active_category_count: int
    range_line_count: int
    bar_count: int

    @classmethod
    def from_state(cls, state: SelectionState) -> "SelectionView":
        layout = axes.chart_layout(state)
        return cls(
            order=axes.active_categories_in_order(state),
            metrics=[
                MetricView(
                    id=m,
                    visible=state.is_visible(m),
                    selectable=cs.can_select(state, m),
                    drawn=axes.should_draw(state, m),
                    axis=axes.axis_for(state, m),
                )
                for m in catalog.METRICS
            ],
            active_axes=layout.active_axes,
            margins=layout.margins,
            active_category_count=cs.active_category_count(state),
            range_line_count=cs.range_line_count(state),
            bar_count=cs.bar_count(state),
        )


class ServerOptions(BaseModel):
    data_source: str
    start_time: datetime.datetime


class ServerStatus(BaseModel):
    current_time_utc: datetime.datetime
    options: ServerOptions
    record_count: int
    first_date: datetime.date | None = None
    last_date: datetime.date | None = None
    load_error: str | None = None
