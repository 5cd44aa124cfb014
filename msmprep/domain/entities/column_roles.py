from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ...exceptions import SchemaError

if TYPE_CHECKING:
    import pandas as pd


class ColumnRoles(BaseModel):
    """Names of the input columns playing each role in an augmentation.

    Resolved once per call; the expansion works on the positions these
    names point to and never looks columns up by name again.
    """

    model_config = ConfigDict(frozen=True)

    subject: str = Field(min_length=1)
    episode: str = Field(min_length=1)
    terminal: str = Field(min_length=1)
    start: str = Field(min_length=1)
    end: str = Field(min_length=1)
    censoring: str = Field(min_length=1)
    secondary: str | None = None

    @property
    def required(self) -> tuple[str, ...]:
        return (
            self.subject,
            self.episode,
            self.terminal,
            self.start,
            self.end,
            self.censoring,
        )

    @property
    def all_columns(self) -> tuple[str, ...]:
        if self.secondary is None:
            return self.required
        return (*self.required, self.secondary)

    @property
    def missing_value_scan(self) -> tuple[str, ...]:
        """Columns scanned when missing-value validation is requested."""
        return (self.subject, self.episode, self.terminal, self.start, self.end)

    def missing_from(self, frame: pd.DataFrame) -> list[str]:
        present = set(map(str, frame.columns))
        return [column for column in self.all_columns if column not in present]

    def ensure_present(self, frame: pd.DataFrame) -> None:
        missing = self.missing_from(frame)
        if missing:
            raise SchemaError(
                f"Input table is missing required column(s): {missing}; "
                f"available: {[str(c) for c in frame.columns]}"
            )
