import pandas as pd

from service.wxchart.base import constants as bc
from service.wxchart.base.errors import NoDataError
from service.wxchart.testhelpers import PandasTestCase, SAMPLE_CSVS

from . import loader as ld
from . import transform as tf


def _raw_samples(*names: str) -> dict[str, pd.DataFrame]:
    names = names or tuple(ld.CSV_SOURCES)
    return {
        name: ld.parse_csv(SAMPLE_CSVS[ld.CSV_SOURCES[name].filename], ld.CSV_SOURCES[name])
        for name in names
    }


class TestDailyRecords(PandasTestCase):

    def test_columns_and_days(self):
        df = tf.daily_records(_raw_samples())
        self.assertColumnNames(df, bc.DAILY_COLUMNS)
        self.assertEqual(df.index.name, bc.DATE)
        self.assertSeriesValuesEqual(
            df.index.strftime("%Y-%m-%d").to_series(),
            ["2024-06-01", "2024-06-02", "2024-06-03"],
        )

    def test_derived_values(self):
        df = tf.daily_records(_raw_samples())
        self.assertSeriesClose(df[bc.TEMP_MEAN], [25.2, 26.3, 19.0])
        self.assertSeriesValuesEqual(df[bc.DAYLIGHT_HOURS], [12.0, 11.0, None])

    def test_missing_values_stay_null(self):
        df = tf.daily_records(_raw_samples())
        # Not coerced to zero.
        self.assertSeriesValuesEqual(df[bc.WIND_GUST_MAX], [35.2, None, 40.0])
        self.assertSeriesValuesEqual(df[bc.WIND_MEAN], [12.0, 14.0, None])

    def test_left_join_keeps_days(self):
        df = tf.daily_records(_raw_samples())
        # 2024-06-02 is missing in the humidity source.
        self.assertSeriesValuesEqual(df[bc.HUMIDITY_MEAN], [60.0, None, 55.0])
        # 2024-06-03 is missing in the wind direction source.
        self.assertSeriesValuesEqual(df[bc.WIND_DIRECTION_MEAN], [350.0, 10.0, None])

    def test_missing_secondary_source(self):
        df = tf.daily_records(_raw_samples(ld.WEATHER))
        self.assertEqual(len(df), 3)
        self.assertTrue(df[bc.HUMIDITY_MIN].isna().all())

    def test_no_weather_data(self):
        with self.assertRaises(NoDataError):
            tf.daily_records(_raw_samples(ld.HUMIDITY))

    def test_records(self):
        df = tf.daily_records(_raw_samples())
        recs = tf.records(df)
        self.assertEqual(len(recs), 3)
        self.assertEqual(recs[0][bc.DATE], "2024-06-01")
        self.assertIsNone(recs[1][bc.HUMIDITY_MIN])
        self.assertEqual(recs[0][bc.WIND_DIRECTION_MEAN], 350.0)


class TestDomains(PandasTestCase):

    def test_compute_extent(self):
        self.assertEqual(tf.compute_extent([3, None, float("nan"), -1], (0, 1)), (-1, 3))
        self.assertEqual(tf.compute_extent([None, float("nan")], (0, 100)), (0, 100))
        self.assertEqual(tf.compute_extent([5, 5.0], (0, 1)), (4, 6))

    def test_group_domains(self):
        domains = tf.group_domains(tf.daily_records(_raw_samples()))
        self.assertEqual(domains[bc.TEMPERATURE], (19.0, 31.5))
        # Wind covers speeds and gusts.
        self.assertEqual(domains[bc.WIND], (3.0, 40.0))
        self.assertEqual(domains[bc.HUMIDITY], (35.0, 80.0))
        self.assertEqual(domains[bc.PRECIPITATION], (0.0, 2.4))
        self.assertEqual(domains[bc.DAYLIGHT], (11.0, 12.0))

    def test_group_domains_defaults(self):
        domains = tf.group_domains(tf.daily_records(_raw_samples(ld.WEATHER)))
        self.assertEqual(domains[bc.HUMIDITY], (0, 100))
