from __future__ import annotations

from typing import Any, cast

import pandas as pd

from .constants import MissingValues, TimeTypes
from .exceptions import ConfigurationError


def ensure_series(value: object, index: pd.Index[Any] | None = None) -> pd.Series[Any]:
    if isinstance(value, pd.Series):
        return cast("pd.Series[Any]", value)
    if isinstance(value, pd.DataFrame):
        if value.shape[1] == 0:
            return pd.Series(index=value.index, dtype="object")
        return value.iloc[:, 0]
    return pd.Series(cast("Any", value), index=index)


def is_missing_scalar(value: object) -> bool:
    try:
        return bool(pd.isna(cast("Any", value)))
    except (TypeError, ValueError):
        return False


def normalize_missing_strings(
    value: object, *, markers: set[str] | None = None
) -> pd.Series[Any]:
    series = ensure_series(value)
    if not (
        pd.api.types.is_object_dtype(series) or pd.api.types.is_string_dtype(series)
    ):
        return series
    stripped = series.astype("string").str.strip()
    marker_set = {m.upper() for m in markers or MissingValues.STRING_MARKERS}
    mask = stripped.str.upper().isin(marker_set) | stripped.eq("")
    return series.mask(mask.fillna(False).astype(bool), pd.NA)


def coerce_temporal(value: object, kind: str = TimeTypes.AUTO) -> pd.Series[Any]:
    """Convert a text column read from disk into numbers or timestamps.

    ``number`` and ``date`` force the target type; ``auto`` keeps the
    numeric reading when every non-missing value parses as a number and
    falls back to dates otherwise. Values that cannot be parsed become
    missing. Columns that already carry a temporal or numeric dtype are
    returned unchanged.
    """
    if kind not in TimeTypes.ALL:
        raise ConfigurationError(
            f"time type must be one of {list(TimeTypes.ALL)}, got {kind!r}"
        )
    series = ensure_series(value)
    if (
        pd.api.types.is_datetime64_any_dtype(series)
        or pd.api.types.is_timedelta64_dtype(series)
        or (
            pd.api.types.is_numeric_dtype(series)
            and not pd.api.types.is_bool_dtype(series)
        )
    ):
        return series
    cleaned = normalize_missing_strings(series)
    if kind == TimeTypes.NUMBER:
        return pd.to_numeric(cleaned, errors="coerce")
    if kind == TimeTypes.DATE:
        return pd.to_datetime(cleaned, errors="coerce", format="mixed")
    numeric = pd.to_numeric(cleaned, errors="coerce")
    if int(numeric.isna().sum()) == int(cleaned.isna().sum()):
        return numeric
    return pd.to_datetime(cleaned, errors="coerce", format="mixed")


def coerce_ordinal(value: object) -> pd.Series[Any]:
    """Return ``value`` as numbers when every non-missing entry is numeric.

    Episode numbers read as text would otherwise sort lexically
    (``"10" < "2"``).
    """
    series = ensure_series(value)
    if pd.api.types.is_numeric_dtype(series):
        return series
    cleaned = normalize_missing_strings(series)
    numeric = pd.to_numeric(cleaned, errors="coerce")
    if int(numeric.isna().sum()) == int(cleaned.isna().sum()):
        return numeric
    return series
