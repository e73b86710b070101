"""File for widely used constants."""

# Category ids.
TEMPERATURE = "temperature"
HUMIDITY = "humidity"
WIND = "wind"
PRECIPITATION = "precipitation"
DAYLIGHT = "daylight"

# Metric ids. Single-metric categories use the category id as metric id.
WIND_RANGE = "windRange"
WIND_GUST = "windGust"
WIND_DIRECTION = "windDirection"

# Shape classes of categories.
SHAPE_CLASS_RANGE_LINE = "range_line"
SHAPE_CLASS_BAR = "bar"

# Display shapes of metrics.
SHAPE_RANGE = "range"
SHAPE_LINE = "line"
SHAPE_BAR = "bar"
SHAPE_DIRECTIONAL = "directional"

# Axis sides.
SIDE_LEFT = "left"
SIDE_RIGHT = "right"

# Max. number of categories that can be selected at the same time.
MAX_ACTIVE_CATEGORIES = 3

# Column names of the per-day records.
DATE = "date"
TEMP_MIN = "temperature_min"
TEMP_MEAN = "temperature_mean"
TEMP_MAX = "temperature_max"
HUMIDITY_MIN = "humidity_min"
HUMIDITY_MEAN = "humidity_mean"
HUMIDITY_MAX = "humidity_max"
WIND_MIN = "wind_min"
WIND_MEAN = "wind_mean"
WIND_MAX = "wind_max"
WIND_GUST_MAX = "wind_gust"
WIND_DIRECTION_MEAN = "wind_direction"
PRECIP_MM = "precipitation"
DAYLIGHT_HOURS = "daylight_hours"

DAILY_COLUMNS = [
    TEMP_MIN,
    TEMP_MEAN,
    TEMP_MAX,
    HUMIDITY_MIN,
    HUMIDITY_MEAN,
    HUMIDITY_MAX,
    WIND_MIN,
    WIND_MEAN,
    WIND_MAX,
    WIND_GUST_MAX,
    WIND_DIRECTION_MEAN,
    PRECIP_MM,
    DAYLIGHT_HOURS,
]
