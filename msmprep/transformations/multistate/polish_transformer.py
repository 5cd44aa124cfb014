"""Transformer collapsing coincident transitions of an augmented table."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from ...constants import Defaults, OutputColumns, PolishModes
from ...domain.services.polish_service import (
    find_coincident_transitions,
    locate_time_column,
    polish,
)
from ...exceptions import ConfigurationError, SchemaError
from ..base import TransformationContext, TransformationResult

if TYPE_CHECKING:
    from ...domain.entities import ColumnRoles


class PolishTransformer:
    def __init__(
        self,
        keep: str = Defaults.POLISH_KEEP,
        time_column: str = Defaults.TIME_COLUMN,
        status_column: str = OutputColumns.STATUS,
    ):
        if keep not in PolishModes.ALL:
            raise ConfigurationError(
                f"keep must be one of {list(PolishModes.ALL)}, got {keep!r}"
            )
        self.keep = keep
        self.time_column = time_column
        self.status_column = status_column

    def can_transform(self, df: pd.DataFrame, roles: ColumnRoles) -> bool:
        if roles.subject not in df.columns or self.status_column not in df.columns:
            return False
        try:
            locate_time_column(df, self.time_column)
        except SchemaError:
            return False
        return True

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        subject = context.roles.subject
        if not self.can_transform(df, context.roles):
            return TransformationResult(
                data=df,
                applied=False,
                message="Table has no augmented time and status columns",
            )

        coincident = find_coincident_transitions(
            df,
            subject,
            time_column=self.time_column,
            status_column=self.status_column,
        )
        polished = polish(
            df,
            subject,
            keep=self.keep,
            time_column=self.time_column,
            status_column=self.status_column,
        )
        removed = len(df) - len(polished)
        result = TransformationResult(
            data=polished,
            applied=True,
            message=f"Removed {removed} coincident transition rows (keep={self.keep})",
            metadata={
                "input_rows": len(df),
                "output_rows": len(polished),
                "coincident_rows": len(coincident),
                "affected_subjects": int(coincident[subject].nunique()),
                "removed_rows": removed,
            },
        )
        if removed:
            result.add_warning(
                f"{removed} rows shared a subject and time with a different state"
            )
        return result
