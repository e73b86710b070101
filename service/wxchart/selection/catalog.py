"""Static registry of the chart's categories and metrics.

A category is what the user picks (max. three at a time). A metric is a
single drawable series belonging to exactly one category. Categories declare
their members as a toggle group: "primary" members drive category membership
and are toggled together, "dependent" members can only be shown while a
primary member is visible.
"""

from pydantic import BaseModel, ConfigDict

from service.wxchart.base import constants as bc
from service.wxchart.base.errors import UnknownMetricError


class Category(BaseModel):
    id: str
    label: str
    shape_class: str
    axis_label: str
    # Tick count and tick label suffix of the category's y-axis.
    ticks: int
    tick_suffix: str
    # Domain to use if the data has no values for this category.
    default_domain: tuple[float, float]
    primary: tuple[str, ...]
    dependent: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def members(self) -> tuple[str, ...]:
        return self.primary + self.dependent


class Metric(BaseModel):
    id: str
    label: str
    category: str
    shape: str
    # Scale key of the numeric y-axis. None for metrics without an axis.
    axis: str | None
    units: str
    color: str
    # Record columns, keyed by role ("min", "mean", "max" or "value").
    columns: dict[str, str]
    stroke_dash: tuple[int, ...] | None = None

    model_config = ConfigDict(frozen=True)

    def has_axis(self) -> bool:
        return self.axis is not None


CATEGORIES: dict[str, Category] = {
    c.id: c
    for c in [
        Category(
            id=bc.TEMPERATURE,
            label="Temperature",
            shape_class=bc.SHAPE_CLASS_RANGE_LINE,
            axis_label="Temperature (°C)",
            ticks=6,
            tick_suffix="°C",
            default_domain=(-10, 45),
            primary=(bc.TEMPERATURE,),
        ),
        Category(
            id=bc.HUMIDITY,
            label="Humidity",
            shape_class=bc.SHAPE_CLASS_RANGE_LINE,
            axis_label="Humidity (%)",
            ticks=5,
            tick_suffix="%",
            default_domain=(0, 100),
            primary=(bc.HUMIDITY,),
        ),
        Category(
            id=bc.WIND,
            label="Wind",
            shape_class=bc.SHAPE_CLASS_RANGE_LINE,
            axis_label="Wind Speed (km/h)",
            ticks=5,
            tick_suffix=" km/h",
            default_domain=(0, 60),
            primary=(bc.WIND_RANGE, bc.WIND_DIRECTION),
            dependent=(bc.WIND_GUST,),
        ),
        Category(
            id=bc.PRECIPITATION,
            label="Precipitation",
            shape_class=bc.SHAPE_CLASS_BAR,
            axis_label="Precipitation (mm)",
            ticks=5,
            tick_suffix=" mm",
            default_domain=(0, 60),
            primary=(bc.PRECIPITATION,),
        ),
        Category(
            id=bc.DAYLIGHT,
            label="Daylight",
            shape_class=bc.SHAPE_CLASS_BAR,
            axis_label="Daylight (hours)",
            ticks=5,
            tick_suffix=" h",
            default_domain=(0, 18),
            primary=(bc.DAYLIGHT,),
        ),
    ]
}

# Order matters: it is the legend order and the drawing order within a shape.
METRICS: dict[str, Metric] = {
    m.id: m
    for m in [
        Metric(
            id=bc.TEMPERATURE,
            label="Temperature",
            category=bc.TEMPERATURE,
            shape=bc.SHAPE_RANGE,
            axis=bc.TEMPERATURE,
            units="°C",
            color="#E16A01",
            columns={"min": bc.TEMP_MIN, "mean": bc.TEMP_MEAN, "max": bc.TEMP_MAX},
        ),
        Metric(
            id=bc.HUMIDITY,
            label="Humidity",
            category=bc.HUMIDITY,
            shape=bc.SHAPE_RANGE,
            axis=bc.HUMIDITY,
            units="%",
            color="#1E7D1E",
            columns={
                "min": bc.HUMIDITY_MIN,
                "mean": bc.HUMIDITY_MEAN,
                "max": bc.HUMIDITY_MAX,
            },
        ),
        Metric(
            id=bc.WIND_RANGE,
            label="Wind",
            category=bc.WIND,
            shape=bc.SHAPE_RANGE,
            axis=bc.WIND,
            units=" km/h",
            color="#8e44ad",
            columns={"min": bc.WIND_MIN, "mean": bc.WIND_MEAN, "max": bc.WIND_MAX},
        ),
        Metric(
            id=bc.WIND_GUST,
            label="Wind Gust",
            category=bc.WIND,
            shape=bc.SHAPE_LINE,
            axis=bc.WIND,
            units=" km/h",
            color="#BC70DD",
            columns={"value": bc.WIND_GUST_MAX},
            stroke_dash=(6, 6),
        ),
        Metric(
            id=bc.PRECIPITATION,
            label="Precipitation",
            category=bc.PRECIPITATION,
            shape=bc.SHAPE_BAR,
            axis=bc.PRECIPITATION,
            units=" mm",
            color="#055991",
            columns={"value": bc.PRECIP_MM},
        ),
        Metric(
            id=bc.DAYLIGHT,
            label="Daylight",
            category=bc.DAYLIGHT,
            shape=bc.SHAPE_BAR,
            axis=bc.DAYLIGHT,
            units=" h",
            color="#E5B300",
            columns={"value": bc.DAYLIGHT_HOURS},
        ),
        Metric(
            id=bc.WIND_DIRECTION,
            label="Wind Direction",
            category=bc.WIND,
            shape=bc.SHAPE_DIRECTIONAL,
            axis=None,
            units="°",
            color="#BBBBBB",
            columns={"value": bc.WIND_DIRECTION_MEAN},
        ),
    ]
}


def find_metric(metric_id: str) -> Metric | None:
    return METRICS.get(metric_id)


def metric(metric_id: str) -> Metric:
    """Returns the metric with the given id.

    Raises:
        UnknownMetricError if the id is not in the catalog.
    """
    m = METRICS.get(metric_id)
    if m is None:
        raise UnknownMetricError(f"Unknown metric: {metric_id}")
    return m


def category(category_id: str) -> Category:
    c = CATEGORIES.get(category_id)
    if c is None:
        raise UnknownMetricError(f"Unknown category: {category_id}")
    return c


def category_of(metric_id: str) -> str | None:
    """Returns the id of the category owning metric_id, or None if unknown."""
    m = METRICS.get(metric_id)
    return m.category if m else None


def shape_class_of(category_id: str) -> str:
    return category(category_id).shape_class


def is_primary(metric_id: str) -> bool:
    """True if metric_id drives its category's membership."""
    m = METRICS.get(metric_id)
    return m is not None and metric_id in CATEGORIES[m.category].primary


def is_dependent(metric_id: str) -> bool:
    m = METRICS.get(metric_id)
    return m is not None and metric_id in CATEGORIES[m.category].dependent


def is_grouped(metric_id: str) -> bool:
    """True if metric_id belongs to a category with more than one member."""
    m = METRICS.get(metric_id)
    return m is not None and len(CATEGORIES[m.category].members) > 1


def legend_metrics() -> list[Metric]:
    """Metrics that get a legend control.

    Directional metrics are toggled together with their category's
    range and are never shown as separate controls.
    """
    return [m for m in METRICS.values() if m.shape != bc.SHAPE_DIRECTIONAL]
