from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_dataset_loaded(
        self, source: str, row_count: int, column_count: int | None = None
    ) -> None: ...

    def log_transformation(
        self,
        transform_type: str,
        input_rows: int,
        output_rows: int,
        *,
        details: str | None = None,
    ) -> None: ...

    def log_subject_plan(self, subject: object, episodes: int, rows: int, state: str) -> None: ...

    def log_final_stats(self) -> None: ...
