"""Derived status columns for augmented rows."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from ...constants import Defaults, OutputColumns
from ...pandas_utils import is_missing_scalar
from ..entities.status import (
    ExpandedStatusCategories,
    StatusVocabulary,
    compose_expanded_label,
    compose_sequence_label,
)


@dataclass(frozen=True, slots=True)
class StatusEncoder:
    vocabulary: StatusVocabulary
    default_secondary: str = Defaults.DEFAULT_SECONDARY
    expanded_separator: str = Defaults.EXPANDED_SEPARATOR
    sequence_separator: str = Defaults.SEQUENCE_SEPARATOR

    def output_columns(self, *, expanded: bool) -> tuple[str, ...]:
        if expanded:
            return OutputColumns.BASE + OutputColumns.EXPANDED
        return OutputColumns.BASE

    def encode(
        self,
        codes: np.ndarray[Any, Any],
        counts: np.ndarray[Any, Any],
        secondary: pd.Series[Any] | None = None,
    ) -> dict[str, Any]:
        """Build status columns from per-row state codes and episode counts.

        ``secondary`` holds the raw secondary value of the source episode
        for each row; when given, the expanded columns are added too.
        """
        codes = np.asarray(codes, dtype="int64")
        counts = np.asarray(counts, dtype="int64")
        labels = self.vocabulary.labels
        columns: dict[str, Any] = {
            OutputColumns.STATUS: pd.Categorical.from_codes(
                codes, categories=list(labels), ordered=True
            ),
            OutputColumns.STATUS_NUM: codes,
            OutputColumns.N_STATUS: self._sequence(
                [labels[code] for code in codes], codes, counts
            ),
        }
        if secondary is None:
            return columns

        keys = [self.secondary_key(value) for value in secondary]
        pairs = list(zip(codes.tolist(), keys, strict=True))
        categories = ExpandedStatusCategories.build(
            pairs, self.vocabulary, self.expanded_separator
        )
        index = {label: i for i, label in enumerate(categories.labels)}
        expanded = [
            compose_expanded_label(labels[code], key, self.expanded_separator)
            for code, key in pairs
        ]
        expanded_codes = np.array([index[label] for label in expanded], dtype="int64")
        columns[OutputColumns.STATUS_EXP] = pd.Categorical.from_codes(
            expanded_codes, categories=list(categories.labels), ordered=True
        )
        columns[OutputColumns.STATUS_EXP_NUM] = expanded_codes
        columns[OutputColumns.N_STATUS_EXP] = self._sequence(
            expanded, expanded_codes, counts
        )
        return columns

    def secondary_key(self, value: object) -> str | None:
        """Secondary text appended to a label, or ``None`` for the plain label."""
        if is_missing_scalar(value):
            return None
        text = str(value)
        if text == self.default_secondary:
            return None
        return text

    def _sequence(
        self,
        labels: Sequence[str],
        codes: np.ndarray[Any, Any],
        counts: np.ndarray[Any, Any],
    ) -> pd.Categorical:
        values = [
            compose_sequence_label(label, int(count), self.sequence_separator)
            for label, count in zip(labels, counts, strict=True)
        ]
        order: dict[str, tuple[int, int]] = {}
        for value, code, count in zip(values, codes, counts, strict=True):
            order.setdefault(value, (int(count), int(code)))
        categories = sorted(order, key=order.__getitem__)
        return pd.Categorical(values, categories=categories, ordered=True)
