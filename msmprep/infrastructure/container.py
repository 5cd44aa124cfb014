from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from ..application.augment_use_case import (
    AugmentDependencies,
    AugmentUseCase,
    PolishUseCase,
)
from .io.csv_reader import CSVReader
from .logging.console_logger import ConsoleLogger
from .logging.null_logger import NullLogger
from .repositories.longitudinal_data_repository import LongitudinalDataRepository

if TYPE_CHECKING:
    from ..application.ports.repositories import LongitudinalDataRepositoryPort
    from ..application.ports.services import LoggerPort


class DependencyContainer:
    pass

    def __init__(
        self,
        verbose: int = 0,
        console: Console | None = None,
        use_null_logger: bool = False,
    ) -> None:
        super().__init__()
        self.verbose = verbose
        self.console = console or Console()
        self.use_null_logger = use_null_logger
        self._logger_instance: LoggerPort | None = None
        self._csv_reader_instance: CSVReader | None = None
        self._repository_instance: LongitudinalDataRepositoryPort | None = None

    def create_logger(self) -> LoggerPort:
        if self._logger_instance is None:
            if self.use_null_logger:
                self._logger_instance = NullLogger()
            else:
                self._logger_instance = ConsoleLogger(
                    console=self.console, verbosity=self.verbose
                )
        return self._logger_instance

    def create_csv_reader(self) -> CSVReader:
        if self._csv_reader_instance is None:
            self._csv_reader_instance = CSVReader()
        return self._csv_reader_instance

    def create_repository(self) -> LongitudinalDataRepositoryPort:
        if self._repository_instance is None:
            self._repository_instance = LongitudinalDataRepository(
                csv_reader=self.create_csv_reader()
            )
        return self._repository_instance

    def _dependencies(self) -> AugmentDependencies:
        return AugmentDependencies(
            logger=self.create_logger(), repository=self.create_repository()
        )

    def create_augment_use_case(self) -> AugmentUseCase:
        return AugmentUseCase(self._dependencies())

    def create_polish_use_case(self) -> PolishUseCase:
        return PolishUseCase(self._dependencies())

    def reset_singletons(self) -> None:
        self._logger_instance = None
        self._csv_reader_instance = None
        self._repository_instance = None

    def override_logger(self, logger: LoggerPort) -> None:
        self._logger_instance = logger

    def override_repository(self, repository: LongitudinalDataRepositoryPort) -> None:
        self._repository_instance = repository


def create_default_container(verbose: int = 0) -> DependencyContainer:
    return DependencyContainer(verbose=verbose)
