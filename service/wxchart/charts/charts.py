"""Altair charts for the selected weather series.

Which series are drawn, and against which axis, is decided by the
selection package. This module only translates those decisions into
Vega-Lite layers.

Missing values are left to Vega-Lite's default handling of invalid data,
which breaks line and area paths at null values.
"""

from typing import TypeAlias, Union
import altair as alt
import pandas as pd

from service.wxchart.base import constants as bc
from service.wxchart.data import transform as tf
from service.wxchart.selection import axes
from service.wxchart.selection import catalog
from service.wxchart.selection.state import SelectionState

from . import colors

AltairChart: TypeAlias = Union[alt.Chart, alt.LayerChart]

# Used for HTML exports.
VEGA_VERSION = "5.33.0"
VEGA_LITE_VERSION = "5.23.0"
VEGA_EMBED_VERSION = "6.29.0"

VARIANT_PRIMARY = "primary"
VARIANT_GRADIENT = "gradient"
VARIANTS = [VARIANT_PRIMARY, VARIANT_GRADIENT]

CHART_HEIGHT = 600
# Nominal width, used to size bars. Charts themselves fill their container.
CHART_WIDTH = 960

# Wind direction markers are drawn this many pixels above the plot area.
WIND_DIRECTION_Y = -20

TITLES = {
    VARIANT_PRIMARY: "Historical weather metrics",
    VARIANT_GRADIENT: "Historical weather metrics with gradient visualisation",
}


def variant_height(variant: str) -> int:
    if variant == VARIANT_GRADIENT:
        return max(360, round(CHART_HEIGHT * 0.75))
    return CHART_HEIGHT


def _chart_data(df: pd.DataFrame) -> pd.DataFrame:
    data = df.reset_index()
    data[bc.DATE] = pd.to_datetime(data[bc.DATE])
    return data


def _x() -> alt.X:
    return alt.X(f"{bc.DATE}:T", title=None).axis(
        format="%b %Y", labelAngle=-35, tickCount=12
    )


def _y(
    column: str,
    binding: axes.AxisBinding,
    domain: tuple[float, float],
    show_axis: bool,
) -> alt.Y:
    """Returns the y encoding of a column drawn against binding's scale."""
    category = catalog.category(binding.axis_key)
    y = alt.Y(f"{column}:Q", title=None).scale(domain=list(domain), nice=True)
    if not (show_axis and binding.displayed):
        return y.axis(None)
    return y.axis(
        orient=binding.side,
        tickCount=category.ticks,
        labelExpr=f"datum.label + '{category.tick_suffix}'",
    )


def _range_layer(
    data: pd.DataFrame,
    metric: catalog.Metric,
    binding: axes.AxisBinding,
    domain: tuple[float, float],
    show_axis: bool,
    variant: str,
) -> alt.LayerChart:
    col_min, col_mean, col_max = (metric.columns[k] for k in ("min", "mean", "max"))
    base = alt.Chart(data)
    x = _x()

    if variant == VARIANT_GRADIENT:
        band = base.mark_area(color=colors.range_gradient(metric.id, metric.color))
    else:
        band = base.mark_area(color=metric.color, opacity=0.07)
    band = band.encode(
        x=x,
        y=_y(col_min, binding, domain, show_axis=False),
        y2=alt.Y2(col_max),
    )

    def bound_line(column: str) -> alt.Chart:
        return base.mark_line(
            color=metric.color, strokeWidth=1.2, strokeDash=[3, 2]
        ).encode(x=x, y=_y(column, binding, domain, show_axis=False))

    mean_line = base.mark_line(color=metric.color, strokeWidth=2).encode(
        x=x,
        y=_y(col_mean, binding, domain, show_axis=show_axis),
        tooltip=[
            alt.Tooltip(f"{bc.DATE}:T", title="Date", format="%d %b %Y"),
            alt.Tooltip(f"{col_min}:Q", title=f"{metric.label} min", format=".1f"),
            alt.Tooltip(f"{col_mean}:Q", title=f"{metric.label} mean", format=".1f"),
            alt.Tooltip(f"{col_max}:Q", title=f"{metric.label} max", format=".1f"),
        ],
    )
    return alt.layer(band, bound_line(col_min), bound_line(col_max), mean_line)


def _line_layer(
    data: pd.DataFrame,
    metric: catalog.Metric,
    binding: axes.AxisBinding,
    domain: tuple[float, float],
    show_axis: bool,
) -> alt.Chart:
    column = metric.columns["value"]
    return (
        alt.Chart(data)
        .mark_line(
            color=metric.color,
            strokeWidth=1.5,
            strokeDash=list(metric.stroke_dash or []),
        )
        .encode(
            x=_x(),
            y=_y(column, binding, domain, show_axis),
            tooltip=[
                alt.Tooltip(f"{bc.DATE}:T", title="Date", format="%d %b %Y"),
                alt.Tooltip(f"{column}:Q", title=metric.label, format=".1f"),
            ],
        )
    )


def _bar_layer(
    data: pd.DataFrame,
    metric: catalog.Metric,
    binding: axes.AxisBinding,
    domain: tuple[float, float],
    index: int,
    bar_width: float,
) -> alt.Chart:
    """Bars of one metric. Two bar metrics are drawn side by side."""
    column = metric.columns["value"]
    offset = -bar_width / 4 if index == 0 else bar_width / 4
    return (
        alt.Chart(data)
        .mark_bar(color=metric.color, opacity=0.7, width=bar_width / 2, xOffset=offset)
        .encode(
            x=_x(),
            y=_y(column, binding, domain, show_axis=True),
            tooltip=[
                alt.Tooltip(f"{bc.DATE}:T", title="Date", format="%d %b %Y"),
                alt.Tooltip(f"{column}:Q", title=metric.label, format=".1f"),
            ],
        )
    )


def _direction_layer(data: pd.DataFrame, metric: catalog.Metric) -> alt.Chart:
    """Arrows along the top edge, rotated by the wind direction."""
    column = metric.columns["value"]
    return (
        alt.Chart(data)
        .transform_filter(f"isValid(datum['{column}'])")
        .mark_point(
            shape="arrow",
            filled=True,
            size=120,
            color=colors.WIND_DIRECTION_FILL,
            opacity=0.8,
        )
        .encode(
            x=_x(),
            y=alt.value(WIND_DIRECTION_Y),
            angle=alt.Angle(f"{column}:Q").scale(domain=[0, 360], range=[0, 360]),
            tooltip=[
                alt.Tooltip(f"{bc.DATE}:T", title="Date", format="%d %b %Y"),
                alt.Tooltip(f"{column}:Q", title=metric.label, format=".0f"),
            ],
        )
    )


def _empty_chart(data: pd.DataFrame) -> alt.Chart:
    return alt.Chart(data).mark_point(opacity=0).encode(x=_x())


def weather_chart(
    df: pd.DataFrame, state: SelectionState, variant: str = VARIANT_PRIMARY
) -> alt.LayerChart:
    """Returns the chart of all series drawn in the given selection state.

    Args:
        df: per-day records as returned by transform.daily_records.
        state: the current selection.
        variant: VARIANT_PRIMARY or VARIANT_GRADIENT (gradient-filled ranges).
    """
    if variant not in VARIANTS:
        raise ValueError(f"Invalid chart variant: {variant}")

    data = _chart_data(df)
    domains = tf.group_domains(df)
    margins = axes.chart_layout(state).margins
    inner_width = CHART_WIDTH - margins.left - margins.right
    bar_width = max(1.0, inner_width / max(len(data), 1) * 0.7)

    # Only the first drawn metric of a category shows the category's axis.
    axis_shown: set[str] = set()

    def show_axis(binding: axes.AxisBinding) -> bool:
        if binding.axis_key in axis_shown:
            return False
        axis_shown.add(binding.axis_key)
        return True

    layers = []
    # Bars first, so lines are drawn on top of them.
    for i, metric_id in enumerate(axes.drawn_metrics(state, bc.SHAPE_BAR)):
        m = catalog.metric(metric_id)
        binding = axes.axis_for(state, metric_id)
        show_axis(binding)
        layers.append(
            _bar_layer(data, m, binding, domains[binding.axis_key], i, bar_width)
        )
    for metric_id in axes.drawn_metrics(state, bc.SHAPE_RANGE):
        m = catalog.metric(metric_id)
        binding = axes.axis_for(state, metric_id)
        layers.append(
            _range_layer(
                data,
                m,
                binding,
                domains[binding.axis_key],
                show_axis(binding),
                variant,
            )
        )
    for metric_id in axes.drawn_metrics(state, bc.SHAPE_LINE):
        m = catalog.metric(metric_id)
        binding = axes.axis_for(state, metric_id)
        layers.append(
            _line_layer(data, m, binding, domains[binding.axis_key], show_axis(binding))
        )
    for metric_id in axes.drawn_metrics(state, bc.SHAPE_DIRECTIONAL):
        layers.append(_direction_layer(data, catalog.metric(metric_id)))

    if not layers:
        layers.append(_empty_chart(data))

    return (
        alt.layer(*layers)
        .resolve_scale(y="independent")
        .properties(
            width="container",
            height=variant_height(variant),
            padding=margins.model_dump(),
            autosize={"type": "fit", "contains": "padding"},
            title=TITLES[variant],
        )
    )
