"""Augment command - expand an episode file into multi-state transition rows.

Thin adapter between click and :class:`AugmentUseCase`: it parses options,
merges them over the loaded configuration, runs the use case and renders
the response.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import cast

import click
from pydantic import ValidationError
from rich.console import Console

from ...application.models import AugmentRequest
from ...config import ConfigLoader
from ...constants import PolishModes, TimeTypes
from ...domain.entities import ColumnRoles
from ...exceptions import ConfigurationError
from ...infrastructure.container import DependencyContainer
from ..presenters.summary import SummaryPresenter, SummaryRequest

console = Console()

DEFAULT_OUTPUT_SUFFIX = "_augmented.csv"


@dataclass(frozen=True)
class AugmentCommandOptions:
    subject: str
    episode: str
    terminal: str
    start: str
    end: str
    censoring: str
    secondary: str | None
    states: str | None
    time_type: str
    time_column: str | None
    check_missing: bool | None
    polish: bool
    keep: str
    workers: int | None
    output: Path | None
    config_file: Path | None
    verbose: int

    @classmethod
    def from_kwargs(cls, options: dict[str, object]) -> AugmentCommandOptions:
        return cls(
            subject=cast("str", options["subject"]),
            episode=cast("str", options["episode"]),
            terminal=cast("str", options["terminal"]),
            start=cast("str", options["start"]),
            end=cast("str", options["end"]),
            censoring=cast("str", options["censoring"]),
            secondary=cast("str | None", options.get("secondary")),
            states=cast("str | None", options.get("states")),
            time_type=cast("str", options["time_type"]),
            time_column=cast("str | None", options.get("time_column")),
            check_missing=cast("bool | None", options.get("check_missing")),
            polish=cast("bool", options["polish"]),
            keep=cast("str", options["keep"]),
            workers=cast("int | None", options.get("workers")),
            output=cast("Path | None", options.get("output")),
            config_file=cast("Path | None", options.get("config_file")),
            verbose=cast("int", options["verbose"]),
        )

    def state_labels(self) -> tuple[str, ...] | None:
        if self.states is None:
            return None
        return tuple(part.strip() for part in self.states.split(","))


@click.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("--subject", required=True, help="Column identifying the subject")
@click.option("--episode", required=True, help="Column ordering a subject's episodes")
@click.option(
    "--terminal",
    required=True,
    help="Column coding how follow-up ended (2 or 3 levels)",
)
@click.option("--start", required=True, help="Column with the episode start time")
@click.option("--end", required=True, help="Column with the episode end time")
@click.option(
    "--censoring", required=True, help="Column with the subject's end of follow-up"
)
@click.option("--secondary", help="Optional column refining each state")
@click.option(
    "--states",
    help="Comma-separated labels for entry, release and absorbing states (e.g. IN,OUT,DEAD)",
)
@click.option(
    "--time-type",
    type=click.Choice(TimeTypes.ALL),
    default=TimeTypes.AUTO,
    show_default=True,
    help="How to read text time columns",
)
@click.option("--time-column", help="Name of the absolute time output column")
@click.option(
    "--check-missing/--no-check-missing",
    "check_missing",
    default=None,
    help="Reject input with missing values in the key columns",
)
@click.option(
    "--polish",
    is_flag=True,
    help="Collapse same-time transitions with differing states",
)
@click.option(
    "--keep",
    type=click.Choice(PolishModes.ALL),
    default=PolishModes.LAST,
    show_default=True,
    help="Row kept from each coincident group when polishing",
)
@click.option("--workers", type=click.IntRange(min=1), help="Threads used to plan subjects")
@click.option(
    "--output",
    type=click.Path(path_type=Path),
    help="Output .csv or .tsv file (default: <input>_augmented.csv)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a msmprep.toml config file (default: ./msmprep.toml)",
)
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
def augment_command(input_file: Path, **options: object) -> None:
    """Expand an episode file into IN/OUT/DEAD transition rows.

    Every episode becomes an entry and a release row; the last episode of
    each subject closes with the censoring time or a death.

    Examples:

    \b
        msmprep augment hosp.csv --subject subj --episode adm_number \\
            --terminal label_3 --start input_date --end output_date \\
            --censoring dateCensored

    \b
        # Split states by ward, polish coincident transitions
        msmprep augment hosp.csv ... --secondary ward --polish --keep first
    """
    command_options = AugmentCommandOptions.from_kwargs(dict(options))

    try:
        runtime_config = ConfigLoader.load(
            config_file=command_options.config_file
        ).with_overrides(
            state_labels=command_options.state_labels(),
            time_column=command_options.time_column,
            validate_missing=command_options.check_missing,
            max_workers=command_options.workers,
            verbosity=command_options.verbose or None,
        )
        roles = ColumnRoles(
            subject=command_options.subject,
            episode=command_options.episode,
            terminal=command_options.terminal,
            start=command_options.start,
            end=command_options.end,
            censoring=command_options.censoring,
            secondary=command_options.secondary,
        )
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    except ValidationError as e:
        raise click.ClickException(f"Invalid column names: {e}") from e

    output = command_options.output or input_file.with_name(
        f"{input_file.stem}{DEFAULT_OUTPUT_SUFFIX}"
    )
    request = AugmentRequest(
        input_path=input_file,
        roles=roles,
        config=runtime_config,
        time_type=command_options.time_type,
        polish=command_options.polish,
        polish_keep=command_options.keep,
        output_path=output,
        verbose=runtime_config.verbosity,
    )

    container = DependencyContainer(verbose=runtime_config.verbosity, console=console)
    use_case = container.create_augment_use_case()
    response = use_case.execute(request)

    SummaryPresenter(console).present(
        SummaryRequest(
            response=response,
            input_path=input_file,
            state_labels=runtime_config.state_labels,
            polished=command_options.polish,
        )
    )
    container.create_logger().log_final_stats()

    if not response.success:
        raise click.ClickException("Augmentation completed with errors")
