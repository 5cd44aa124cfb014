from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from ...application.models import PolishRequest
from ...constants import Defaults, OutputColumns, PolishModes
from ...infrastructure.container import DependencyContainer
from ..presenters.summary import SummaryPresenter

console = Console()


@click.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("--subject", required=True, help="Column identifying the subject")
@click.option(
    "--status",
    "status_column",
    default=OutputColumns.STATUS,
    show_default=True,
    help="Status column compared within each same-time group",
)
@click.option(
    "--time-column",
    default=Defaults.TIME_COLUMN,
    show_default=True,
    help="Base name of the augmented time columns",
)
@click.option(
    "--keep",
    type=click.Choice(PolishModes.ALL),
    default=PolishModes.LAST,
    show_default=True,
    help="Row kept from each coincident group",
)
@click.option(
    "--report",
    "report_only",
    is_flag=True,
    help="Only list coincident transitions, do not remove any",
)
@click.option(
    "--output",
    type=click.Path(path_type=Path),
    help="Output .csv or .tsv file for the polished table or the report",
)
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
def polish_command(
    input_file: Path,
    subject: str,
    status_column: str,
    time_column: str,
    keep: str,
    report_only: bool,
    output: Path | None,
    verbose: int,
) -> None:
    """Report or collapse same-time transitions of an augmented file."""
    request = PolishRequest(
        input_path=input_file,
        subject=subject,
        status_column=status_column,
        time_column=time_column,
        keep=keep,
        report_only=report_only,
        output_path=output,
        verbose=verbose,
    )
    container = DependencyContainer(verbose=verbose, console=console)
    response = container.create_polish_use_case().execute(request)
    SummaryPresenter(console).present_polish(response, subject)
    if not response.success:
        raise click.ClickException("Polish completed with errors")
