"""Fail-fast checks run before any row is expanded.

Each check either returns a resolved value object or raises; nothing here
repairs, imputes or drops data.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import pandas as pd

from ...exceptions import DataQualityError, SchemaError
from ..entities.temporal import (
    TemporalFamily,
    calendar_timezone,
    require_temporal_family,
)
from ..entities.terminal import TerminalCoding

if TYPE_CHECKING:
    from ..entities.column_roles import ColumnRoles

SUBJECT_SAMPLE_LIMIT = 5


@dataclass(frozen=True, slots=True)
class ValidatedInput:
    roles: ColumnRoles
    terminal: TerminalCoding
    family: TemporalFamily


def check_output_collisions(roles: ColumnRoles, output_columns: Iterable[str]) -> None:
    derived = set(output_columns)
    clashes = [name for name in roles.all_columns if name in derived]
    if clashes:
        raise SchemaError(
            f"Role column(s) {clashes} share a name with derived output columns; "
            "rename them or choose another time column name"
        )


def check_missing(frame: pd.DataFrame, roles: ColumnRoles) -> None:
    for column in roles.missing_value_scan:
        missing = int(frame[column].isna().sum())
        if missing:
            raise DataQualityError(
                f"Column '{column}' contains {missing} missing value(s)",
                column=column,
                count=missing,
            )


def check_constant_per_subject(
    frame: pd.DataFrame, subject: str, columns: Iterable[str]
) -> None:
    grouped = frame.groupby(subject, sort=False, dropna=False)
    for column in columns:
        distinct = grouped[column].nunique(dropna=False)
        varying = distinct[distinct > 1]
        if not varying.empty:
            sample = [str(s) for s in varying.index[:SUBJECT_SAMPLE_LIMIT]]
            raise SchemaError(
                f"Column '{column}' must be constant within each subject; "
                f"{len(varying)} subject(s) vary, e.g. {sample}"
            )


def resolve_terminal_coding(frame: pd.DataFrame, roles: ColumnRoles) -> TerminalCoding:
    return TerminalCoding.infer(frame[roles.terminal], column=roles.terminal)


def resolve_temporal_family(frame: pd.DataFrame, roles: ColumnRoles) -> TemporalFamily:
    start = frame[roles.start]
    start_family = require_temporal_family(start, roles.start)
    for column in (roles.end, roles.censoring):
        series = frame[column]
        family = require_temporal_family(series, column)
        if family is not start_family:
            raise SchemaError(
                f"Columns '{roles.start}' ({start_family.value}) and '{column}' "
                f"({family.value}) must share the same temporal representation"
            )
        if family is TemporalFamily.ELAPSED and _is_timedelta(series) != _is_timedelta(
            start
        ):
            raise SchemaError(
                f"Columns '{roles.start}' ({start.dtype}) and '{column}' "
                f"({series.dtype}) mix numeric and timedelta elapsed times"
            )
        if family is TemporalFamily.CALENDAR:
            start_tz = calendar_timezone(start)
            tz = calendar_timezone(series)
            if tz != start_tz:
                raise SchemaError(
                    f"Columns '{roles.start}' (timezone {start_tz or 'naive'}) and "
                    f"'{column}' (timezone {tz or 'naive'}) must share a timezone"
                )
    return start_family


def validate_input(
    frame: pd.DataFrame,
    roles: ColumnRoles,
    *,
    validate_missing: bool,
    output_columns: Iterable[str] = (),
) -> ValidatedInput:
    roles.ensure_present(frame)
    check_output_collisions(roles, output_columns)
    if validate_missing:
        check_missing(frame, roles)
    terminal = resolve_terminal_coding(frame, roles)
    check_constant_per_subject(frame, roles.subject, (roles.terminal, roles.censoring))
    family = resolve_temporal_family(frame, roles)
    return ValidatedInput(roles=roles, terminal=terminal, family=family)


def _is_timedelta(series: pd.Series[Any]) -> bool:
    return bool(pd.api.types.is_timedelta64_dtype(series))
