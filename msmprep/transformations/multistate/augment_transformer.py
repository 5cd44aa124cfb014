"""Transformer wrapping :class:`~msmprep.domain.services.Augmenter`."""

from __future__ import annotations

from typing import TYPE_CHECKING
import warnings

import pandas as pd

from ...config import AugmentConfig
from ...constants import OutputColumns
from ...domain.services.augmenter import Augmenter
from ...exceptions import AugmentWarning
from ..base import TransformationContext, TransformationResult

if TYPE_CHECKING:
    from ...application.ports.services import LoggerPort
    from ...domain.entities import ColumnRoles


class AugmentTransformer:
    """Expands an episode table into transition rows.

    Applies to tables that carry every role column and have not been
    augmented yet. Warnings raised while augmenting are returned in the
    result instead of being emitted.
    """

    def __init__(
        self, config: AugmentConfig | None = None, logger: LoggerPort | None = None
    ):
        self.config = config or AugmentConfig()
        self.augmenter = Augmenter(self.config, logger)

    def can_transform(self, df: pd.DataFrame, roles: ColumnRoles) -> bool:
        if roles.missing_from(df):
            return False
        return self.config.time_column not in df.columns

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        roles = context.roles
        if not self.can_transform(df, roles):
            return TransformationResult(
                data=df,
                applied=False,
                message="Table lacks role columns or is already augmented",
            )

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", AugmentWarning)
            augmented = self.augmenter.augment_frame(df, roles)

        status_counts = augmented[OutputColumns.STATUS].value_counts(sort=False)
        return TransformationResult(
            data=augmented,
            applied=True,
            message=f"Expanded {len(df)} episodes to {len(augmented)} transitions",
            warnings=[
                str(w.message) for w in caught if issubclass(w.category, AugmentWarning)
            ],
            metadata={
                "input_rows": len(df),
                "output_rows": len(augmented),
                "subjects": int(df[roles.subject].nunique(dropna=False)),
                "status_counts": {
                    str(label): int(count) for label, count in status_counts.items()
                },
                "expanded": roles.secondary is not None,
            },
        )
