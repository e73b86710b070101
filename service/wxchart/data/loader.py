"""Loading of the daily weather CSV files.

Each source file can start with a block of metadata lines (location,
units, ...) before the actual CSV header. Only the data section is parsed.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from io import StringIO
import logging
from pathlib import Path

import numpy as np
import pandas as pd
from pydantic import BaseModel
import requests

from service.wxchart.base.errors import CsvFormatError, DataLoadError
from service.wxchart.env import DataSourceConfig

logger = logging.getLogger(__name__)


class CsvSource(BaseModel):
    name: str
    filename: str
    # Prefix of the CSV header line, used to skip metadata lines.
    header_prefix: str
    date_column: str
    # Source column name -> output column name.
    columns: dict[str, str]


HUMIDITY = "humidity"
WEATHER = "weather"
WIND_DAILY = "wind_daily"
WIND_DIRECTION = "wind_direction"

# Raw column names used before the transformation into daily records.
RAW_MIN = "min"
RAW_MEAN = "mean"
RAW_MAX = "max"
RAW_TEMP_MIN = "temperature_min"
RAW_TEMP_MAX = "temperature_max"
RAW_SUNSHINE_SECONDS = "sunshine_seconds"
RAW_PRECIP_SUM = "precipitation_sum"
RAW_WIND_GUST_MAX = "wind_gust_max"

CSV_SOURCES: dict[str, CsvSource] = {
    s.name: s
    for s in [
        CsvSource(
            name=HUMIDITY,
            filename="humidity-daily.csv",
            header_prefix="date,",
            date_column="date",
            columns={"min": RAW_MIN, "max": RAW_MAX, "mean": RAW_MEAN},
        ),
        CsvSource(
            name=WEATHER,
            filename="weather-day.csv",
            header_prefix="time,",
            date_column="time",
            columns={
                "temperature_2m_max (°C)": RAW_TEMP_MAX,
                "temperature_2m_min (°C)": RAW_TEMP_MIN,
                "sunshine_duration (s)": RAW_SUNSHINE_SECONDS,
                "precipitation_sum (mm)": RAW_PRECIP_SUM,
                "wind_gusts_10m_max (km/h)": RAW_WIND_GUST_MAX,
            },
        ),
        CsvSource(
            name=WIND_DAILY,
            filename="wind-daily.csv",
            header_prefix="date,",
            date_column="date",
            columns={
                "wind_speed_min_km_h": RAW_MIN,
                "wind_speed_max_km_h": RAW_MAX,
                "wind_speed_mean_km_h": RAW_MEAN,
            },
        ),
        CsvSource(
            name=WIND_DIRECTION,
            filename="wind-direction-daily.csv",
            header_prefix="date,",
            date_column="date",
            columns={"wind_direction_mean_10m (°)": RAW_MEAN},
        ),
    ]
}


def extract_data_section(text: str, header_prefix: str) -> str:
    """Returns text starting at the first line that starts with header_prefix.

    Raises:
        CsvFormatError if there is no such line.
    """
    lines = text.splitlines()
    for i, line in enumerate(lines):
        if line.startswith(header_prefix):
            return "\n".join(lines[i:])
    raise CsvFormatError(f'CSV header starting with "{header_prefix}" not found')


def parse_numbers(ser: pd.Series) -> pd.Series:
    """Converts ser to floats. Empty, unparseable and infinite values become NaN."""
    nums = pd.to_numeric(ser, errors="coerce").astype(float)
    return nums.where(np.isfinite(nums))


def parse_csv(text: str, source: CsvSource) -> pd.DataFrame:
    """Parses the data section of a source CSV file.

    Returns:
        A DataFrame with a "date" DatetimeIndex and one float column
        per output column of source. Duplicate dates keep the last row.
    """
    section = extract_data_section(text, source.header_prefix)
    # Read everything as str so that number parsing is under our control.
    df = pd.read_csv(StringIO(section), dtype=str, keep_default_na=False)
    df.columns = [c.strip() for c in df.columns]

    missing = [c for c in [source.date_column, *source.columns] if c not in df.columns]
    if missing:
        raise CsvFormatError(
            "CSV data section lacks expected columns",
            resource=source.filename,
            missing_columns=missing,
        )

    result = pd.DataFrame(
        {out: parse_numbers(df[col]) for col, out in source.columns.items()}
    )
    result.index = pd.DatetimeIndex(pd.to_datetime(df[source.date_column]), name="date")
    result = result[~result.index.duplicated(keep="last")]
    return result.sort_index()


def read_text(config: DataSourceConfig, filename: str) -> str:
    """Reads a source file from the configured URL or directory."""
    location = config.location(filename)
    if config.base_url:
        resp = requests.get(location, timeout=config.timeout)
        resp.raise_for_status()
        # Headers contain units such as "°C".
        resp.encoding = "utf-8"
        return resp.text
    return Path(location).read_text(encoding="utf-8")


def load_source(config: DataSourceConfig, source: CsvSource) -> pd.DataFrame:
    try:
        text = read_text(config, source.filename)
    except (requests.RequestException, OSError, UnicodeDecodeError) as e:
        raise DataLoadError(
            f"Failed to load {source.name} data: {e}", resource=source.filename
        ) from e
    try:
        return parse_csv(text, source)
    except (CsvFormatError, ValueError) as e:
        raise DataLoadError(
            f"Failed to parse {source.name} data: {e}", resource=source.filename
        ) from e


def load_all(
    config: DataSourceConfig, sources: dict[str, CsvSource] | None = None
) -> dict[str, pd.DataFrame]:
    """Loads all sources concurrently.

    Loading is all-or-nothing: the first failing source aborts the load.

    Raises:
        DataLoadError if any source could not be loaded or parsed.
    """
    sources = sources or CSV_SOURCES
    logger.info("Loading %d CSV files from %s", len(sources), config.describe())

    results = {}
    with ThreadPoolExecutor(max_workers=len(sources)) as executor:
        futures = {
            executor.submit(load_source, config, source): name
            for name, source in sources.items()
        }
        try:
            for future in as_completed(futures):
                name = futures[future]
                results[name] = future.result()
                logger.debug("Loaded %s: %d rows", name, len(results[name]))
        except DataLoadError:
            for f in futures:
                f.cancel()
            raise

    return results
