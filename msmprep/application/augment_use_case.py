from __future__ import annotations

from dataclasses import dataclass
import traceback
from typing import TYPE_CHECKING

import pandas as pd

from ..constants import OutputColumns
from ..domain.services.polish_service import (
    find_coincident_transitions,
    locate_time_column,
    polish,
)
from ..pandas_utils import coerce_ordinal, coerce_temporal
from ..transformations import (
    AugmentTransformer,
    PolishTransformer,
    TransformationContext,
    TransformationPipeline,
)
from .models import AugmentResponse, PolishResponse

if TYPE_CHECKING:
    from ..domain.entities.column_roles import ColumnRoles
    from .models import AugmentRequest, PolishRequest
    from .ports.repositories import LongitudinalDataRepositoryPort
    from .ports.services import LoggerPort

VERBOSE_TRACEBACK_LEVEL = 2


@dataclass(slots=True)
class AugmentDependencies:
    logger: LoggerPort
    repository: LongitudinalDataRepositoryPort


def prepare_episode_frame(
    frame: pd.DataFrame, roles: ColumnRoles, time_type: str
) -> pd.DataFrame:
    """Give text columns read from disk the types augmentation expects."""
    prepared = frame.copy()
    for column in (roles.start, roles.end, roles.censoring):
        if column in prepared.columns:
            prepared[column] = coerce_temporal(prepared[column], time_type)
    for column in (roles.episode, roles.terminal):
        if column in prepared.columns:
            prepared[column] = coerce_ordinal(prepared[column])
    return prepared


class AugmentUseCase:
    """Read an episode table, augment it, optionally polish it, and write it."""

    def __init__(self, dependencies: AugmentDependencies) -> None:
        super().__init__()
        self.logger = dependencies.logger
        self._repository = dependencies.repository

    def execute(self, request: AugmentRequest) -> AugmentResponse:
        response = AugmentResponse()
        name = request.input_path.name
        try:
            frame = self._repository.read_dataset(request.input_path)
            self.logger.log_dataset_loaded(name, len(frame), len(frame.columns))
            response.input_rows = len(frame)

            request.roles.ensure_present(frame)
            frame = prepare_episode_frame(frame, request.roles, request.time_type)
            pipeline = self._build_pipeline(request)
            context = TransformationContext(
                roles=request.roles,
                dataset=request.input_path.stem,
                source_file=str(request.input_path),
            )
            result = pipeline.execute(frame, context)
            response.warnings.extend(result.warnings)
            for warning in result.warnings:
                self.logger.warning(warning)
            if not result.success:
                raise RuntimeError(
                    "; ".join(result.errors) or result.message or "Augmentation failed"
                )

            augmented = result.data
            response.augmented = augmented
            response.output_rows = len(augmented)
            response.subjects = int(augmented[request.roles.subject].nunique(dropna=False))
            response.removed_rows = self._removed_rows(result.metadata)
            counts = augmented[OutputColumns.STATUS].value_counts(sort=False)
            response.status_counts = {str(k): int(v) for k, v in counts.items()}

            if request.output_path is not None:
                response.output_path = self._repository.write_dataset(
                    augmented, request.output_path
                )
                self.logger.success(
                    f"Wrote {len(augmented):,} rows to {response.output_path}"
                )
        except Exception as exc:
            response.success = False
            response.error = str(exc)
            self.logger.error(f"{name}: {exc}")
            if request.verbose >= VERBOSE_TRACEBACK_LEVEL:
                self.logger.error(traceback.format_exc())
        return response

    def _build_pipeline(self, request: AugmentRequest) -> TransformationPipeline:
        pipeline = TransformationPipeline()
        pipeline.add_transformer(AugmentTransformer(request.config, self.logger))
        if request.polish:
            pipeline.add_transformer(
                PolishTransformer(
                    keep=request.polish_keep, time_column=request.config.time_column
                )
            )
        return pipeline

    @staticmethod
    def _removed_rows(metadata: dict[str, object]) -> int:
        applied = metadata.get("applied_transformers", [])
        removed = 0
        if isinstance(applied, list):
            for entry in applied:
                if entry.get("name") == PolishTransformer.__name__:
                    removed += int(entry["input_rows"]) - int(entry["output_rows"])
        return removed


class PolishUseCase:
    """Report or collapse coincident transitions in an augmented table."""

    def __init__(self, dependencies: AugmentDependencies) -> None:
        super().__init__()
        self.logger = dependencies.logger
        self._repository = dependencies.repository

    def execute(self, request: PolishRequest) -> PolishResponse:
        response = PolishResponse()
        name = request.input_path.name
        try:
            frame = self._repository.read_dataset(request.input_path)
            self.logger.log_dataset_loaded(name, len(frame), len(frame.columns))
            response.input_rows = len(frame)

            relative = locate_time_column(frame, request.time_column)
            frame[relative] = pd.to_numeric(frame[relative], errors="coerce")
            report = find_coincident_transitions(
                frame,
                request.subject,
                time_column=request.time_column,
                status_column=request.status_column,
            )
            response.report = report
            response.coincident_rows = len(report)
            response.affected_subjects = int(report[request.subject].nunique())
            if request.report_only:
                response.output_rows = len(frame)
                if request.output_path is not None:
                    response.output_path = self._repository.write_dataset(
                        report, request.output_path
                    )
                return response

            polished = polish(
                frame,
                request.subject,
                keep=request.keep,
                time_column=request.time_column,
                status_column=request.status_column,
            )
            self.logger.log_transformation(
                "polish", len(frame), len(polished), details=f"keep={request.keep}"
            )
            response.polished = polished
            response.output_rows = len(polished)
            if request.output_path is not None:
                response.output_path = self._repository.write_dataset(
                    polished, request.output_path
                )
                self.logger.success(
                    f"Wrote {len(polished):,} rows to {response.output_path}"
                )
        except Exception as exc:
            response.success = False
            response.error = str(exc)
            self.logger.error(f"{name}: {exc}")
            if request.verbose >= VERBOSE_TRACEBACK_LEVEL:
                self.logger.error(traceback.format_exc())
        return response
