import altair as alt

from service.wxchart.base import constants as bc


# Vertical gradients (bottom to top) used to fill range bands in the
# gradient chart variant. Offsets are in [0, 1].
RANGE_GRADIENTS = {
    bc.TEMPERATURE: [
        {"offset": 0, "color": "#1b4f72", "opacity": 0.25},
        {"offset": 0.5, "color": "#f39c12", "opacity": 0.45},
        {"offset": 1, "color": "#ff7043", "opacity": 0.75},
    ],
    bc.HUMIDITY: [
        {"offset": 0, "color": "#8c564b", "opacity": 0.3},
        {"offset": 1, "color": "#2ca02c", "opacity": 0.7},
    ],
    bc.WIND_RANGE: [
        {"offset": 0, "color": "#d2b4de", "opacity": 0.25},
        {"offset": 1, "color": "#8e44ad", "opacity": 0.55},
    ],
}

WIND_DIRECTION_FILL = "#C5C5C5"


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Convert a #rrggbb hex color to an (r, g, b) tuple in [0, 255]."""
    if len(color) != 7 or not color.startswith("#"):
        raise ValueError(f"Not a #rrggbb color: {color}")
    return (int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16))


def rgba(color: str, opacity: float) -> str:
    """Returns a CSS rgba() color for the given hex color and opacity."""
    r, g, b = hex_to_rgb(color)
    return f"rgba({r},{g},{b},{opacity:g})"


def range_gradient(metric_id: str, fallback_color: str) -> alt.Gradient:
    """Returns a bottom-to-top linear gradient for metric_id's range band.

    Metrics without a defined gradient fade from transparent to fallback_color.
    """
    stops = RANGE_GRADIENTS.get(
        metric_id,
        [
            {"offset": 0, "color": fallback_color, "opacity": 0.1},
            {"offset": 1, "color": fallback_color, "opacity": 0.5},
        ],
    )
    return alt.Gradient(
        # Coordinates are relative to the bounding box of the area:
        # y=1 is the bottom, y=0 the top.
        x1=1,
        y1=1,
        x2=1,
        y2=0,
        gradient="linear",
        stops=[
            alt.GradientStop(offset=s["offset"], color=rgba(s["color"], s["opacity"]))
            for s in stops
        ],
    )
