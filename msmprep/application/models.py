from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..config import AugmentConfig
from ..constants import Defaults, OutputColumns, TimeTypes

if TYPE_CHECKING:
    from pathlib import Path

    import pandas as pd

    from ..domain.entities.column_roles import ColumnRoles


def _empty_str_list() -> list[str]:
    return []


def _empty_counts() -> dict[str, int]:
    return {}


@dataclass(slots=True)
class AugmentRequest:
    input_path: Path
    roles: ColumnRoles
    config: AugmentConfig = field(default_factory=AugmentConfig)
    time_type: str = TimeTypes.AUTO
    polish: bool = False
    polish_keep: str = Defaults.POLISH_KEEP
    output_path: Path | None = None
    verbose: int = 0


@dataclass(slots=True)
class AugmentResponse:
    success: bool = True
    input_rows: int = 0
    output_rows: int = 0
    subjects: int = 0
    removed_rows: int = 0
    status_counts: dict[str, int] = field(default_factory=_empty_counts)
    augmented: pd.DataFrame | None = None
    output_path: Path | None = None
    warnings: list[str] = field(default_factory=_empty_str_list)
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "input_rows": self.input_rows,
            "output_rows": self.output_rows,
            "subjects": self.subjects,
            "removed_rows": self.removed_rows,
            "status_counts": dict(self.status_counts),
            "output_path": self.output_path,
            "warnings": list(self.warnings),
            "error": self.error,
        }


@dataclass(slots=True)
class PolishRequest:
    input_path: Path
    subject: str
    status_column: str = OutputColumns.STATUS
    time_column: str = Defaults.TIME_COLUMN
    keep: str = Defaults.POLISH_KEEP
    report_only: bool = False
    output_path: Path | None = None
    verbose: int = 0


@dataclass(slots=True)
class PolishResponse:
    success: bool = True
    input_rows: int = 0
    output_rows: int = 0
    coincident_rows: int = 0
    affected_subjects: int = 0
    report: pd.DataFrame | None = None
    polished: pd.DataFrame | None = None
    output_path: Path | None = None
    error: str | None = None
