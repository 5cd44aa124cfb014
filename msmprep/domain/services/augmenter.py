"""Expansion of episode records into multi-state transition rows.

Every episode row of a subject becomes one or two transition rows. All
episodes but the last emit an entry row at their start and a release row
at their end. The last episode's rows depend on how follow-up closed:

* alive: entry at start, release at the censoring time when follow-up
  continues past the episode, otherwise at the episode end;
* dead inside the episode: a single terminal row at the episode end;
* dead outside all episodes: entry at start, terminal row at the
  censoring time.

Output rows carry every input column of their source episode plus the
absolute transition time, the time relative to the subject's first entry,
and the status columns built by :class:`StatusEncoder`.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import IntEnum
from functools import partial
from typing import TYPE_CHECKING, Any
import warnings

import numpy as np
import pandas as pd
from pydantic import ValidationError

from ...config import AugmentConfig
from ...constants import Defaults, OutputFormats
from ...exceptions import AugmentWarning, ConfigurationError
from ...pandas_utils import is_missing_scalar
from ..entities.column_roles import ColumnRoles
from ..entities.status import StatusRole, StatusVocabulary
from ..entities.temporal import TemporalFamily, relative_axis, to_canonical
from ..entities.terminal import TerminalCoding, TerminalState
from .input_validator import SUBJECT_SAMPLE_LIMIT, validate_input
from .status_encoder import StatusEncoder

if TYPE_CHECKING:
    from ...application.ports.services import LoggerPort


class TimeAnchor(IntEnum):
    START = 0
    END = 1
    CENSORING = 2


@dataclass(frozen=True, slots=True)
class SubjectEpisodes:
    """One subject's episode rows, already in episode order."""

    subject: Any
    positions: tuple[int, ...]
    terminal_value: Any
    last_end: Any
    censoring: Any


@dataclass(frozen=True, slots=True)
class SubjectPlan:
    """Transition rows planned for one subject.

    The tuples run in parallel, one entry per output row: the source row
    position, the state emitted, which time column it is stamped from and
    the 1-based position of the source episode.
    """

    subject: Any
    state: TerminalState
    positions: tuple[int, ...]
    roles: tuple[StatusRole, ...]
    anchors: tuple[TimeAnchor, ...]
    counts: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.positions)


def plan_subject(episodes: SubjectEpisodes, coding: TerminalCoding) -> SubjectPlan:
    reaches = _not_before(episodes.last_end, episodes.censoring)
    state = coding.resolve(episodes.terminal_value, last_end_reaches_censoring=reaches)

    rows: list[tuple[int, StatusRole, TimeAnchor, int]] = []
    *earlier, last = episodes.positions
    for count, position in enumerate(earlier, start=1):
        rows.append((position, StatusRole.ENTERED, TimeAnchor.START, count))
        rows.append((position, StatusRole.RELEASED, TimeAnchor.END, count))

    count = len(episodes.positions)
    if state is TerminalState.DEAD_INSIDE:
        rows.append((last, StatusRole.TERMINAL, TimeAnchor.END, count))
    elif state is TerminalState.DEAD_OUTSIDE:
        rows.append((last, StatusRole.ENTERED, TimeAnchor.START, count))
        rows.append((last, StatusRole.TERMINAL, TimeAnchor.CENSORING, count))
    else:
        if _after(episodes.censoring, episodes.last_end):
            closing = TimeAnchor.CENSORING
        else:
            closing = TimeAnchor.END
        rows.append((last, StatusRole.ENTERED, TimeAnchor.START, count))
        rows.append((last, StatusRole.RELEASED, closing, count))

    positions, roles, anchors, counts = zip(*rows, strict=True)
    return SubjectPlan(
        subject=episodes.subject,
        state=state,
        positions=positions,
        roles=roles,
        anchors=anchors,
        counts=counts,
    )


class Augmenter:
    """Turns an episode table into a multi-state transition table.

    A single instance can be reused across tables; it holds configuration
    only, never data from a previous call.
    """

    def __init__(
        self, config: AugmentConfig | None = None, logger: LoggerPort | None = None
    ):
        super().__init__()
        self.config = config or AugmentConfig()
        self.logger = logger
        self.vocabulary = StatusVocabulary.from_labels(self.config.state_labels)
        self.encoder = StatusEncoder(
            vocabulary=self.vocabulary,
            default_secondary=self.config.default_secondary,
            expanded_separator=self.config.expanded_separator,
            sequence_separator=self.config.sequence_separator,
        )

    def augment(
        self, data: pd.DataFrame, roles: ColumnRoles, *, stacklevel: int = 1
    ) -> pd.DataFrame | list[dict[str, Any]]:
        augmented = self.augment_frame(data, roles, stacklevel=stacklevel + 1)
        if self.config.output_format == OutputFormats.RECORDS:
            return augmented.to_dict(orient="records")
        return augmented

    def augment_frame(
        self, data: pd.DataFrame, roles: ColumnRoles, *, stacklevel: int = 1
    ) -> pd.DataFrame:
        """Augment ``data`` and always return a frame.

        ``stacklevel`` counts frames above this call; warnings are reported
        at the frame it points to.
        """
        time_column = self.config.time_column
        expanded = roles.secondary is not None
        validated = validate_input(
            data,
            roles,
            validate_missing=self.config.validate_missing,
            output_columns=self.output_columns(roles),
        )
        family = validated.family
        replaced = [
            name for name in self.output_columns(roles, family) if name in data.columns
        ]
        if replaced:
            self._warn(
                f"Input column(s) {replaced} are replaced by derived columns",
                stacklevel=stacklevel + 2,
            )
        start = to_canonical(data[roles.start], family).reset_index(drop=True)
        end = to_canonical(data[roles.end], family).reset_index(drop=True)
        censoring = to_canonical(data[roles.censoring], family).reset_index(drop=True)

        groups = self._group_subjects(data, roles, end, censoring)
        plans = self._plan(groups, validated.terminal)

        positions = np.fromiter(
            (p for plan in plans for p in plan.positions), dtype="int64"
        )
        anchors = np.fromiter((a for plan in plans for a in plan.anchors), dtype="int64")
        codes = np.fromiter((r for plan in plans for r in plan.roles), dtype="int64")
        counts = np.fromiter((c for plan in plans for c in plan.counts), dtype="int64")
        first_positions = np.repeat(
            [group.positions[0] for group in groups], [len(plan) for plan in plans]
        ).astype("int64")
        subject_index = np.repeat(np.arange(len(plans)), [len(plan) for plan in plans])

        start_taken = start.iloc[positions].reset_index(drop=True)
        end_taken = end.iloc[positions].reset_index(drop=True)
        censoring_taken = censoring.iloc[positions].reset_index(drop=True)
        absolute = start_taken.where(
            anchors == TimeAnchor.START,
            end_taken.where(anchors == TimeAnchor.END, censoring_taken),
        )
        origin = start.iloc[first_positions].reset_index(drop=True)
        relative = relative_axis(absolute, origin, family)

        result = data.iloc[positions].reset_index(drop=True)
        result[time_column] = absolute
        result[family.relative_column(time_column)] = relative
        secondary = result[roles.secondary] if expanded else None
        for name, values in self.encoder.encode(codes, counts, secondary).items():
            result[name] = values

        self._check_monotonic(
            relative, subject_index, plans, stacklevel=stacklevel + 3
        )
        if self.logger is not None:
            self.logger.log_transformation(
                "augment",
                len(data),
                len(result),
                details=f"{len(plans)} subjects, {family.value} time",
            )
        return result

    def output_columns(
        self, roles: ColumnRoles, family: TemporalFamily | None = None
    ) -> tuple[str, ...]:
        """Names of the columns augmentation adds to the input columns.

        Without ``family`` both relative time names are listed.
        """
        time_column = self.config.time_column
        families = list(TemporalFamily) if family is None else [family]
        return (
            time_column,
            *(f.relative_column(time_column) for f in families),
            *self.encoder.output_columns(expanded=roles.secondary is not None),
        )

    def _group_subjects(
        self,
        data: pd.DataFrame,
        roles: ColumnRoles,
        end: pd.Series[Any],
        censoring: pd.Series[Any],
    ) -> list[SubjectEpisodes]:
        subject_codes, subjects = pd.factorize(data[roles.subject], use_na_sentinel=False)
        keys = pd.DataFrame(
            {
                "subject": subject_codes,
                "episode": data[roles.episode].to_numpy(),
                "position": np.arange(len(data)),
            }
        )
        ordered = keys.sort_values(
            ["subject", "episode"], kind="stable", na_position="last"
        )
        order = ordered["position"].to_numpy()
        boundaries = np.flatnonzero(np.diff(ordered["subject"].to_numpy())) + 1
        terminal = data[roles.terminal].reset_index(drop=True)

        groups: list[SubjectEpisodes] = []
        for chunk in np.split(order, boundaries):
            if chunk.size == 0:
                continue
            first, last = int(chunk[0]), int(chunk[-1])
            groups.append(
                SubjectEpisodes(
                    subject=subjects[subject_codes[first]],
                    positions=tuple(int(p) for p in chunk),
                    terminal_value=terminal.iloc[first],
                    last_end=end.iloc[last],
                    censoring=censoring.iloc[last],
                )
            )
        return groups

    def _plan(
        self, groups: Sequence[SubjectEpisodes], coding: TerminalCoding
    ) -> list[SubjectPlan]:
        planner = partial(plan_subject, coding=coding)
        if self.config.max_workers > 1 and len(groups) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                plans = list(pool.map(planner, groups))
        else:
            plans = [planner(group) for group in groups]

        if self.logger is not None:
            for plan in plans:
                self.logger.log_subject_plan(
                    str(plan.subject),
                    len(set(plan.positions)),
                    len(plan),
                    plan.state.name.lower(),
                )
        return plans

    def _check_monotonic(
        self,
        relative: pd.Series[Any],
        subject_index: np.ndarray[Any, Any],
        plans: Sequence[SubjectPlan],
        *,
        stacklevel: int,
    ) -> None:
        steps = pd.Series(relative.to_numpy(dtype="float64", na_value=np.nan)).groupby(
            subject_index
        ).diff()
        decreasing = np.unique(subject_index[(steps < 0).to_numpy()])
        if decreasing.size == 0:
            return
        sample = [str(plans[i].subject) for i in decreasing[:SUBJECT_SAMPLE_LIMIT]]
        message = (
            f"Relative time decreases within {decreasing.size} subject(s), e.g. "
            f"{sample}; check for overlapping episodes or censoring before "
            "the last episode"
        )
        self._warn(message, stacklevel=stacklevel)

    def _warn(self, message: str, *, stacklevel: int) -> None:
        if self.logger is not None:
            self.logger.warning(message)
        warnings.warn(message, AugmentWarning, stacklevel=stacklevel)


def augment(
    data: pd.DataFrame,
    subject: str,
    episode: str,
    terminal: str,
    start: str,
    end: str,
    censoring: str,
    *,
    state_labels: Sequence[str] = Defaults.STATE_LABELS,
    secondary: str | None = None,
    validate_missing: bool = False,
    output_format: str = Defaults.OUTPUT_FORMAT,
    time_column: str = Defaults.TIME_COLUMN,
    default_secondary: str = Defaults.DEFAULT_SECONDARY,
    max_workers: int = Defaults.MAX_WORKERS,
    logger: LoggerPort | None = None,
) -> pd.DataFrame | list[dict[str, Any]]:
    """Expand an episode table into IN/OUT/DEAD transition rows.

    Args:
        data: One row per subject episode.
        subject: Column identifying the subject.
        episode: Column ordering a subject's episodes.
        terminal: Column coding how follow-up ended, with two levels
            (alive, dead) or three (alive, dead inside, dead outside).
        start: Column with the episode start time.
        end: Column with the episode end time.
        censoring: Column with the subject's end of follow-up.
        state_labels: Labels for entering, leaving and the absorbing state.
        secondary: Optional column whose values split the states further.
        validate_missing: Reject tables with missing values in the key
            columns.
        output_format: ``"frame"`` or ``"records"``.
        time_column: Name of the absolute time output column.
        default_secondary: Secondary value that keeps the plain label.
        max_workers: Threads used to plan subjects.
        logger: Optional logger for progress and warnings.

    Returns:
        The augmented table, or a list of row dicts for ``"records"``.

    Raises:
        ConfigurationError: Invalid labels or options.
        SchemaError: Missing columns or unusable column contents.
        DataQualityError: Missing values when ``validate_missing`` is set.
    """
    vocabulary = StatusVocabulary.from_labels(state_labels)
    config = AugmentConfig(
        state_labels=vocabulary.labels,
        default_secondary=default_secondary,
        time_column=time_column,
        validate_missing=validate_missing,
        output_format=output_format,
        max_workers=max_workers,
    )
    try:
        roles = ColumnRoles(
            subject=subject,
            episode=episode,
            terminal=terminal,
            start=start,
            end=end,
            censoring=censoring,
            secondary=secondary,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid column names: {e}") from e
    return Augmenter(config, logger).augment(data, roles, stacklevel=2)


def _not_before(value: Any, reference: Any) -> bool:
    if is_missing_scalar(value) or is_missing_scalar(reference):
        return False
    return bool(value >= reference)


def _after(value: Any, reference: Any) -> bool:
    if is_missing_scalar(value) or is_missing_scalar(reference):
        return False
    return bool(value > reference)
