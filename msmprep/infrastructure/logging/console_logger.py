"""Rich console logger with verbosity levels and run statistics."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from enum import IntEnum
from typing_extensions import override

from rich.console import Console
from rich.markup import escape

from ...application.ports.services import LoggerPort


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    dataset: str = ""
    subject: str = ""
    operation: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000

    def label(self) -> str:
        return ":".join(part for part in (self.dataset, self.subject) if part)


@dataclass(slots=True)
class ProcessingStats:
    datasets_loaded: int = 0
    subjects_processed: int = 0
    input_rows: int = 0
    output_rows: int = 0
    warnings: int = 0
    errors: int = 0

    def reset(self) -> None:
        for item in fields(self):
            setattr(self, item.name, 0)


class ConsoleLogger(LoggerPort):
    """Writes progress to a rich console.

    ``warning``, ``error`` and ``success`` always print. ``verbose``
    output needs ``-v`` and ``debug`` output, including per-subject plans
    and the context prefix, needs ``-vv``.
    """

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats = ProcessingStats()

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if key in LogContext.__dataclass_fields__:
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        self._emit(message, level=level)

    @override
    def verbose(self, message: str) -> None:
        self._emit(message, level=LogLevel.VERBOSE, style="dim")

    @override
    def debug(self, message: str) -> None:
        self._emit(message, level=LogLevel.DEBUG, style="dim cyan")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._stats.warnings += 1
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._stats.errors += 1
        self.console.print(f"[red]✗[/red] {message}")

    @override
    def log_dataset_loaded(
        self, source: str, row_count: int, column_count: int | None = None
    ) -> None:
        self.set_context(dataset=source)
        self._stats.datasets_loaded += 1
        shape = ""
        if column_count is not None and self.verbosity >= LogLevel.DEBUG:
            shape = f" ({column_count} columns)"
        self.verbose(f"Loaded {row_count:,} rows from {source}{shape}")

    @override
    def log_transformation(
        self,
        transform_type: str,
        input_rows: int,
        output_rows: int,
        *,
        details: str | None = None,
    ) -> None:
        self._stats.input_rows += input_rows
        self._stats.output_rows += output_rows
        suffix = f" ({details})" if details else ""
        self.verbose(
            f"{transform_type.capitalize()}: {input_rows:,} → {output_rows:,} rows{suffix}"
        )
        if input_rows > 0:
            self.debug(f"  Expansion ratio: {output_rows / input_rows:.2f}x")

    @override
    def log_subject_plan(
        self, subject: object, episodes: int, rows: int, state: str
    ) -> None:
        self._stats.subjects_processed += 1
        self.debug(f"  Subject {subject}: {episodes} episode(s) → {rows} row(s), {state}")

    @override
    def log_final_stats(self) -> None:
        if self.verbosity < LogLevel.VERBOSE:
            return
        stats = self._stats
        lines = [
            "Processing Statistics:",
            f"  Datasets loaded: {stats.datasets_loaded}",
            f"  Subjects processed: {stats.subjects_processed:,}",
            f"  Rows: {stats.input_rows:,} → {stats.output_rows:,}",
        ]
        if self._context is not None:
            lines.append(f"  Elapsed: {self._context.elapsed_ms():,.0f} ms")
        self.console.print()
        for line in lines:
            self.console.print(f"[dim]{line}[/dim]")
        if stats.warnings:
            self.console.print(f"[dim yellow]  Warnings: {stats.warnings}[/dim yellow]")
        if stats.errors:
            self.console.print(f"[dim red]  Errors: {stats.errors}[/dim red]")

    def get_stats(self) -> dict[str, int]:
        return asdict(self._stats)

    def reset_stats(self) -> None:
        self._stats.reset()

    def _emit(self, message: str, *, level: int, style: str | None = None) -> None:
        if self.verbosity < level:
            return
        text = f"{self._get_prefix()}{message}"
        self.console.print(f"[{style}]{text}[/{style}]" if style else text)

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        label = self._context.label()
        return escape(f"[{label}] ") if label else ""
