"""Interface shared by table transformers.

A transformer looks at an episode or transition table, decides whether it
applies, and returns a :class:`TransformationResult` describing what it
did. Transformers are composed by :class:`~.pipeline.TransformationPipeline`.

Example:
    >>> class DropEmptyRows:
    ...     def can_transform(self, df: pd.DataFrame, roles: ColumnRoles) -> bool:
    ...         return roles.subject in df.columns
    ...
    ...     def transform(
    ...         self, df: pd.DataFrame, context: TransformationContext
    ...     ) -> TransformationResult:
    ...         kept = df.dropna(subset=[context.roles.subject])
    ...         return TransformationResult(
    ...             data=kept, message=f"Dropped {len(df) - len(kept)} rows"
    ...         )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

import pandas as pd

if TYPE_CHECKING:
    from ..domain.entities import ColumnRoles


def _empty_str_list() -> list[str]:
    return []


def _empty_metadata() -> dict[str, object]:
    return {}


@dataclass
class TransformationContext:
    """What a transformer knows about the table besides its rows.

    Attributes:
        roles: Column names playing the subject, episode, terminal and
            time roles.
        dataset: Short name of the table, used in messages.
        source_file: Path the table was read from, if any.
        metadata: Free-form values passed between transformers.
    """

    roles: ColumnRoles
    dataset: str | None = None
    source_file: str | None = None
    metadata: dict[str, object] = field(default_factory=_empty_metadata)

    def with_metadata(self, **kwargs: object) -> TransformationContext:
        """Return a copy of this context with ``kwargs`` merged into metadata."""
        return TransformationContext(
            roles=self.roles,
            dataset=self.dataset,
            source_file=self.source_file,
            metadata={**self.metadata, **kwargs},
        )


@dataclass
class TransformationResult:
    """Outcome of one transformer, or of a whole pipeline.

    Attributes:
        data: The resulting table.
        applied: Whether the transformer changed anything.
        message: One-line description of what happened.
        warnings: Non-fatal issues found along the way.
        errors: Issues that make ``data`` unusable.
        metadata: Row counts and transformer-specific details.
    """

    data: pd.DataFrame
    applied: bool = True
    message: str = ""
    warnings: list[str] = field(default_factory=_empty_str_list)
    errors: list[str] = field(default_factory=_empty_str_list)
    metadata: dict[str, object] = field(default_factory=_empty_metadata)

    @property
    def success(self) -> bool:
        return self.applied and not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def add_error(self, error: str) -> None:
        self.errors.append(error)

    def summary(self) -> str:
        lines: list[str] = []
        if self.message:
            status = "applied" if self.applied else "skipped"
            lines.append(f"Transformation {status}: {self.message}")
        if self.warnings:
            lines.append(f"Warnings ({len(self.warnings)}): {', '.join(self.warnings)}")
        if self.errors:
            lines.append(f"Errors ({len(self.errors)}): {', '.join(self.errors)}")
        return "\n".join(lines) if lines else "No transformation applied"


class TransformerPort(Protocol):
    """Structural interface for transformers.

    Classes do not need to inherit from this protocol; having both
    methods is enough.
    """

    def can_transform(self, df: pd.DataFrame, roles: ColumnRoles) -> bool:
        """Whether this transformer applies to ``df`` under ``roles``."""
        ...

    def transform(
        self, df: pd.DataFrame, context: TransformationContext
    ) -> TransformationResult:
        """Transform ``df``.

        Invalid input raises one of the :mod:`msmprep.exceptions` errors;
        the pipeline turns those into ``TransformationResult.errors``.
        """
        ...


def is_transformer(obj: object) -> bool:
    can_transform = getattr(obj, "can_transform", None)
    transform = getattr(obj, "transform", None)
    return callable(can_transform) and callable(transform)
