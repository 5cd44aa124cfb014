from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    import pandas as pd


@runtime_checkable
class LongitudinalDataRepositoryPort(Protocol):
    pass

    def read_dataset(self, file_path: str | Path) -> pd.DataFrame: ...

    def write_dataset(self, frame: pd.DataFrame, file_path: str | Path) -> Path: ...
