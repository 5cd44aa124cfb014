from __future__ import annotations

from enum import Enum
from typing import Any

import pandas as pd

from ...constants import OutputColumns
from ...exceptions import SchemaError

_CALENDAR_INFERRED = frozenset({"date", "datetime", "datetime64"})
_ONE_DAY = pd.Timedelta(days=1)


class TemporalFamily(Enum):
    CALENDAR = "calendar"
    ELAPSED = "elapsed"

    @property
    def relative_suffix(self) -> str:
        if self is TemporalFamily.CALENDAR:
            return OutputColumns.CALENDAR_SUFFIX
        return OutputColumns.ELAPSED_SUFFIX

    def relative_column(self, base: str) -> str:
        return f"{base}{self.relative_suffix}"


def detect_temporal_family(series: pd.Series[Any]) -> TemporalFamily | None:
    if pd.api.types.is_datetime64_any_dtype(series):
        return TemporalFamily.CALENDAR
    if pd.api.types.is_timedelta64_dtype(series):
        return TemporalFamily.ELAPSED
    if pd.api.types.is_bool_dtype(series):
        return None
    if pd.api.types.is_numeric_dtype(series):
        return TemporalFamily.ELAPSED
    if pd.api.types.is_object_dtype(series):
        inferred = pd.api.types.infer_dtype(series, skipna=True)
        if inferred in _CALENDAR_INFERRED:
            return TemporalFamily.CALENDAR
    return None


def require_temporal_family(series: pd.Series[Any], column: str) -> TemporalFamily:
    family = detect_temporal_family(series)
    if family is None:
        raise SchemaError(
            f"Column '{column}' has dtype {series.dtype} which is neither a calendar "
            "date nor an elapsed-time quantity"
        )
    return family


def calendar_timezone(series: pd.Series[Any]) -> str | None:
    """Timezone name of a calendar column, ``None`` when naive."""
    tz = getattr(series.dtype, "tz", None)
    if tz is None and pd.api.types.is_object_dtype(series):
        observed = series.dropna()
        if not observed.empty:
            tz = getattr(observed.iloc[0], "tzinfo", None)
    return None if tz is None else str(tz)


def to_canonical(series: pd.Series[Any], family: TemporalFamily) -> pd.Series[Any]:
    """Return ``series`` in the representation used for arithmetic.

    Calendar columns become ``datetime64``; elapsed columns are left as
    numbers or timedeltas.
    """
    if family is TemporalFamily.CALENDAR and not pd.api.types.is_datetime64_any_dtype(
        series
    ):
        return pd.to_datetime(series)
    return series


def relative_axis(
    values: pd.Series[Any], anchors: pd.Series[Any], family: TemporalFamily
) -> pd.Series[Any]:
    """Elapsed time from each row's subject anchor.

    Calendar inputs give whole calendar days as nullable integers,
    timedelta inputs give fractional days, plain numbers keep their unit.
    """
    if family is TemporalFamily.CALENDAR:
        days = (values.dt.normalize() - anchors.dt.normalize()).dt.days
        return days.astype("Int64")
    if pd.api.types.is_timedelta64_dtype(values):
        return (values - anchors) / _ONE_DAY
    return values - anchors
