"""Cleanup of transitions that share a time but disagree on the state.

Augmented tables can hold two rows for one subject at the same relative
time, for instance an episode that starts on the day the previous one
ended. Where those rows carry different states a multi-state model sees
an instantaneous transition; polishing keeps one of them.
"""

from __future__ import annotations

from typing import Any

import pandas as pd

from ...constants import Defaults, OutputColumns, PolishModes
from ...exceptions import ConfigurationError, SchemaError
from ..entities.temporal import TemporalFamily

GROUP_SIZE_COLUMN = "group_size"


def locate_time_column(frame: pd.DataFrame, base: str = Defaults.TIME_COLUMN) -> str:
    """Return the relative time column derived from ``base``."""
    candidates = [family.relative_column(base) for family in TemporalFamily]
    present = [name for name in candidates if name in frame.columns]
    if not present:
        raise SchemaError(
            f"No relative time column found; expected one of {candidates}"
        )
    if len(present) > 1:
        raise SchemaError(
            f"Ambiguous relative time columns {present}; drop one before polishing"
        )
    return present[0]


def find_coincident_transitions(
    frame: pd.DataFrame,
    subject: str,
    *,
    time_column: str = Defaults.TIME_COLUMN,
    status_column: str = OutputColumns.STATUS,
) -> pd.DataFrame:
    """Rows whose subject and relative time are shared by another state.

    The rows come back in their original order with a ``group_size``
    column giving the number of rows at that subject and time.
    """
    relative = locate_time_column(frame, time_column)
    _require(frame, subject, status_column)
    divergent, sizes = _divergent_groups(frame, subject, relative, status_column)
    report = frame.loc[divergent].copy()
    report[GROUP_SIZE_COLUMN] = sizes[divergent].astype("int64")
    return report


def polish(
    frame: pd.DataFrame,
    subject: str,
    *,
    keep: str = Defaults.POLISH_KEEP,
    time_column: str = Defaults.TIME_COLUMN,
    status_column: str = OutputColumns.STATUS,
) -> pd.DataFrame:
    """Collapse each same-time group with differing states to one row.

    ``keep="last"`` or ``"first"`` picks a row by emission order,
    ``keep="none"`` drops the whole group. Same-time rows that agree on
    the state are left untouched.
    """
    if keep not in PolishModes.ALL:
        raise ConfigurationError(
            f"keep must be one of {list(PolishModes.ALL)}, got {keep!r}"
        )
    relative = locate_time_column(frame, time_column)
    _require(frame, subject, status_column)
    divergent, _ = _divergent_groups(frame, subject, relative, status_column)
    if keep == PolishModes.NONE:
        dropped = divergent
    else:
        repeated = frame.duplicated([subject, relative], keep=keep)
        dropped = divergent & repeated
    return frame.loc[~dropped].reset_index(drop=True)


def _divergent_groups(
    frame: pd.DataFrame, subject: str, relative: str, status_column: str
) -> tuple[pd.Series[Any], pd.Series[Any]]:
    grouped = frame.groupby([subject, relative], sort=False, dropna=False)[
        status_column
    ]
    distinct = grouped.transform("nunique")
    sizes = grouped.transform("size")
    return (distinct > 1).astype(bool), sizes


def _require(frame: pd.DataFrame, *columns: str) -> None:
    missing = [column for column in columns if column not in frame.columns]
    if missing:
        raise SchemaError(f"Augmented table is missing column(s): {missing}")
