from pathlib import Path
from typing import Any
import math
import pandas as pd
from pandas.testing import assert_series_equal
import unittest


class PandasTestCase(unittest.TestCase):
    def assertSeriesValuesEqual(self, series: pd.Series, expected_values: list[Any]):
        """Check only the values of a Series. Missing values compare equal to None."""
        values = [
            None if isinstance(v, float) and math.isnan(v) else v
            for v in series.tolist()
        ]
        self.assertEqual(values, expected_values)

    def assertSeriesClose(self, actual: pd.Series, expected: list[float]):
        """Compare values approximately, ignoring index, dtype and name."""
        assert_series_equal(
            actual.reset_index(drop=True),
            pd.Series(expected, dtype=float),
            check_names=False,
            check_exact=False,
        )

    def assertColumnNames(self, df: pd.DataFrame, expected_names):
        self.assertEqual(df.columns.to_list(), expected_names)


# Small versions of the CSV sources, including the metadata lines
# that precede the data section in the real files.
SAMPLE_CSVS = {
    "weather-day.csv": (
        "latitude,longitude,elevation,utc_offset_seconds,timezone,timezone_abbreviation\n"
        "37.98,23.72,95.0,7200,Europe/Athens,EET\n"
        "\n"
        "time,temperature_2m_max (°C),temperature_2m_min (°C),sunshine_duration (s),"
        "precipitation_sum (mm),wind_gusts_10m_max (km/h)\n"
        "2024-06-02,31.5,21.1,39600,2.4,\n"
        "2024-06-01,30.1,20.3,43200,0.0,35.2\n"
        "2024-06-03,,19.0,,1.2,40.0\n"
    ),
    "humidity-daily.csv": (
        "date,min,max,mean\n"
        "2024-06-01,40,80,60\n"
        "2024-06-03,35,,55\n"
    ),
    "wind-daily.csv": (
        "# Daily wind speed aggregates\n"
        "date,wind_speed_min_km_h,wind_speed_max_km_h,wind_speed_mean_km_h\n"
        "2024-06-01,5,25,12\n"
        "2024-06-02,3,30,14\n"
        "2024-06-03,4,22,n/a\n"
    ),
    "wind-direction-daily.csv": (
        "date,wind_direction_mean_10m (°)\n"
        "2024-06-01,350\n"
        "2024-06-02,10\n"
    ),
}


def write_sample_csvs(data_dir: Path, exclude: tuple[str, ...] = ()) -> Path:
    """Writes SAMPLE_CSVS (except the excluded file names) to data_dir."""
    for filename, text in SAMPLE_CSVS.items():
        if filename not in exclude:
            data_dir.joinpath(filename).write_text(text, encoding="utf-8")
    return data_dir
