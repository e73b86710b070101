import math
from typing import Any, Iterable

import pandas as pd

from service.wxchart.base import constants as bc
from service.wxchart.base.errors import NoDataError
from service.wxchart.selection import catalog

from . import loader as ld


def _secondary(raw: dict[str, pd.DataFrame], name: str, columns: dict[str, str]):
    """Returns the renamed columns of a secondary source (possibly empty)."""
    df = raw.get(name)
    if df is None:
        return pd.DataFrame(
            columns=list(columns.values()),
            index=pd.DatetimeIndex([], name=bc.DATE),
            dtype=float,
        )
    return df[list(columns)].rename(columns=columns)


def daily_records(raw: dict[str, pd.DataFrame]) -> pd.DataFrame:
    """Merges the raw source frames into one row per day.

    The weather source defines the days. The other sources are joined on
    the date; days missing in a secondary source keep NaN values for its
    columns and are never dropped.

    Returns:
        A DataFrame with a "date" DatetimeIndex and bc.DAILY_COLUMNS.

    Raises:
        NoDataError if the weather source has no rows.
    """
    weather = raw.get(ld.WEATHER)
    if weather is None or weather.empty:
        raise NoDataError("No daily weather data available")

    df = pd.DataFrame(index=weather.index)
    df[bc.TEMP_MIN] = weather[ld.RAW_TEMP_MIN]
    df[bc.TEMP_MAX] = weather[ld.RAW_TEMP_MAX]
    # Mean of whatever is available; NaN if both are missing.
    df[bc.TEMP_MEAN] = weather[[ld.RAW_TEMP_MIN, ld.RAW_TEMP_MAX]].mean(axis=1)
    df[bc.WIND_GUST_MAX] = weather[ld.RAW_WIND_GUST_MAX]
    df[bc.PRECIP_MM] = weather[ld.RAW_PRECIP_SUM]
    df[bc.DAYLIGHT_HOURS] = weather[ld.RAW_SUNSHINE_SECONDS] / 3600

    secondaries = [
        _secondary(
            raw,
            ld.HUMIDITY,
            {
                ld.RAW_MIN: bc.HUMIDITY_MIN,
                ld.RAW_MEAN: bc.HUMIDITY_MEAN,
                ld.RAW_MAX: bc.HUMIDITY_MAX,
            },
        ),
        _secondary(
            raw,
            ld.WIND_DAILY,
            {ld.RAW_MIN: bc.WIND_MIN, ld.RAW_MEAN: bc.WIND_MEAN, ld.RAW_MAX: bc.WIND_MAX},
        ),
        _secondary(raw, ld.WIND_DIRECTION, {ld.RAW_MEAN: bc.WIND_DIRECTION_MEAN}),
    ]
    for sec in secondaries:
        df = df.join(sec, how="left")

    df.index.name = bc.DATE
    return df[bc.DAILY_COLUMNS].sort_index().astype(float)


def compute_extent(
    values: Iterable[Any], default: tuple[float, float]
) -> tuple[float, float]:
    """Returns (min, max) of the finite values, or default if there are none.

    A degenerate extent (min == max) is widened by 1 in both directions.
    """
    nums = [
        float(v)
        for v in values
        if v is not None and isinstance(v, (int, float)) and math.isfinite(v)
    ]
    if not nums:
        return default
    lo, hi = min(nums), max(nums)
    if lo == hi:
        return (lo - 1, hi + 1)
    return (lo, hi)


def group_domains(df: pd.DataFrame) -> dict[str, tuple[float, float]]:
    """Returns the y-scale domain of each category.

    All metrics of a category share one scale, e.g. the wind domain covers
    both the wind speed range and the gusts.
    """
    domains = {}
    for c in catalog.CATEGORIES.values():
        cols = [
            col
            for m in catalog.METRICS.values()
            if m.category == c.id and m.has_axis()
            for col in m.columns.values()
        ]
        values = df[cols].to_numpy().ravel().tolist() if not df.empty else []
        domains[c.id] = compute_extent(values, c.default_domain)
    return domains


def records(df: pd.DataFrame) -> list[dict[str, Any]]:
    """Returns df as a list of JSON-friendly dicts. NaN becomes None."""
    out = df.reset_index()
    out[bc.DATE] = out[bc.DATE].dt.strftime("%Y-%m-%d")
    out = out.astype(object).where(out.notna(), None)
    return out.to_dict(orient="records")
