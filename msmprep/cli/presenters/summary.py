from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.table import Table

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from ...application.models import AugmentResponse, PolishResponse

REPORT_PREVIEW_ROWS = 20


@dataclass(frozen=True, slots=True)
class SummaryRequest:
    response: AugmentResponse
    input_path: Path
    state_labels: tuple[str, ...]
    polished: bool = False


class SummaryPresenter:
    pass

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def present(self, request: SummaryRequest) -> None:
        response = request.response
        self.console.print()
        if response.success:
            self.console.print(self._build_status_table(request))
            self.console.print()
        self._print_status_summary(request)

    def present_polish(self, response: PolishResponse, subject: str) -> None:
        self.console.print()
        if response.success and response.report is not None:
            self.console.print(self._build_report_table(response, subject))
            self.console.print()
        if not response.success:
            self.console.print(f"[bold red]✗ Polish failed:[/bold red] {response.error}")
            return
        self.console.print(
            f"[bold]Coincident rows:[/bold] {response.coincident_rows:,} "
            f"across {response.affected_subjects:,} subjects"
        )
        if response.polished is not None:
            removed = response.input_rows - response.output_rows
            self.console.print(
                f"[green]✓[/green] Kept {response.output_rows:,} of "
                f"{response.input_rows:,} rows ({removed:,} removed)"
            )
        if response.output_path is not None:
            self.console.print(f"[bold]Output:[/bold] [cyan]{response.output_path}[/cyan]")

    def _build_status_table(self, request: SummaryRequest) -> Table:
        response = request.response
        table = Table(
            title=f"📊 Transition Summary: {request.input_path.name}",
            show_header=True,
            header_style="bold cyan",
            border_style="bright_blue",
            title_style="bold magenta",
        )
        table.add_column("Code", justify="right", style="dim", no_wrap=True)
        table.add_column("Status", style="cyan", no_wrap=True)
        table.add_column("Rows", justify="right", style="yellow", no_wrap=True)
        for code, label in enumerate(request.state_labels):
            count = response.status_counts.get(label, 0)
            table.add_row(str(code), label, f"{count:,}")
        table.add_section()
        table.add_row(
            "",
            "[bold]Total[/bold]",
            f"[bold yellow]{response.output_rows:,}[/bold yellow]",
        )
        return table

    def _build_report_table(self, response: PolishResponse, subject: str) -> Table:
        report = response.report
        table = Table(
            title="🔍 Coincident Transitions",
            show_header=True,
            header_style="bold cyan",
            border_style="bright_blue",
            title_style="bold magenta",
        )
        if report is None or report.empty:
            table.add_column("Result", style="green")
            table.add_row("No coincident transitions found")
            return table
        columns = [subject, *[c for c in report.columns if c != subject]]
        for column in columns:
            table.add_column(str(column), overflow="fold")
        for _, row in report[columns].head(REPORT_PREVIEW_ROWS).iterrows():
            table.add_row(*(str(value) for value in row.tolist()))
        if len(report) > REPORT_PREVIEW_ROWS:
            table.caption = f"showing {REPORT_PREVIEW_ROWS} of {len(report):,} rows"
        return table

    def _print_status_summary(self, request: SummaryRequest) -> None:
        response = request.response
        if not response.success:
            self.console.print(
                f"[bold red]✗ Augmentation failed:[/bold red] {response.error}"
            )
            return
        self.console.print(
            f"[green]✓[/green] {response.input_rows:,} episodes from "
            f"{response.subjects:,} subjects expanded to "
            f"{response.output_rows:,} transition rows"
        )
        if request.polished:
            self.console.print(
                f"[bold]Polish:[/bold] removed {response.removed_rows:,} coincident rows"
            )
        if response.warnings:
            self.console.print(
                f"[yellow]⚠[/yellow] {len(response.warnings)} warning(s) reported"
            )
        if response.output_path is not None:
            self.console.print(f"[bold]Output:[/bold] [cyan]{response.output_path}[/cyan]")
