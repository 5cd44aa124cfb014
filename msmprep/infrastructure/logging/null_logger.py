from typing_extensions import override

from ...application.ports.services import LoggerPort


class NullLogger(LoggerPort):
    pass

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_dataset_loaded(
        self, source: str, row_count: int, column_count: int | None = None
    ) -> None:
        return None

    @override
    def log_transformation(
        self,
        transform_type: str,
        input_rows: int,
        output_rows: int,
        *,
        details: str | None = None,
    ) -> None:
        return None

    @override
    def log_subject_plan(
        self, subject: object, episodes: int, rows: int, state: str
    ) -> None:
        return None

    @override
    def log_final_stats(self) -> None:
        return None
