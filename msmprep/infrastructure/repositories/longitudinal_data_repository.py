"""File access for episode tables and augmented outputs.

Delimited text goes through :class:`CSVReader` and arrives as strings;
Excel and SAS files keep the types stored in the file.
"""

from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pyreadstat

from ..io.csv_reader import CSVReader, CSVReadOptions
from ..io.exceptions import DataParseError, DataSourceNotFoundError, DataWriteError

DELIMITED_SUFFIXES = (".csv", ".tsv", ".txt")
EXCEL_SUFFIXES = (".xls", ".xlsx")
SAS_SUFFIXES = (".sas7bdat",)
READ_SUFFIXES = DELIMITED_SUFFIXES + EXCEL_SUFFIXES + SAS_SUFFIXES
WRITE_SEPARATORS = {".csv": ",", ".tsv": "\t"}


class LongitudinalDataRepository:
    pass

    def __init__(self, csv_reader: CSVReader | None = None) -> None:
        super().__init__()
        self._csv_reader = csv_reader or CSVReader()
        self._readers: dict[str, Callable[[Path], pd.DataFrame]] = {}
        for suffix in DELIMITED_SUFFIXES:
            self._readers[suffix] = self._read_delimited
        for suffix in EXCEL_SUFFIXES:
            self._readers[suffix] = self._read_excel
        for suffix in SAS_SUFFIXES:
            self._readers[suffix] = self._read_sas

    def read_dataset(self, file_path: str | Path) -> pd.DataFrame:
        path = Path(file_path)
        if not path.is_file():
            reason = "Not a file" if path.exists() else "File not found"
            raise DataSourceNotFoundError(f"{reason}: {path}")
        reader = self._readers.get(path.suffix.lower())
        if reader is None:
            raise DataParseError(
                f"Unsupported format '{path.suffix.lower()}'. "
                f"Supported: {', '.join(READ_SUFFIXES)}"
            )
        return reader(path)

    def write_dataset(self, frame: pd.DataFrame, file_path: str | Path) -> Path:
        """Write ``frame`` as delimited text and return the path written."""
        path = Path(file_path)
        separator = WRITE_SEPARATORS.get(path.suffix.lower())
        if separator is None:
            raise DataWriteError(
                f"Unsupported output format '{path.suffix.lower()}'. "
                f"Supported: {', '.join(WRITE_SEPARATORS)}"
            )
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            frame.to_csv(path, sep=separator, index=False)
        except OSError as e:
            raise DataWriteError(f"Failed to write {path}: {e}") from e
        return path

    def _read_delimited(self, path: Path) -> pd.DataFrame:
        return self._csv_reader.read(path, CSVReadOptions())

    @staticmethod
    def _read_excel(path: Path) -> pd.DataFrame:
        try:
            return pd.read_excel(path)
        except Exception as e:
            raise DataParseError(f"Failed to read Excel file {path}: {e}") from e

    @staticmethod
    def _read_sas(path: Path) -> pd.DataFrame:
        try:
            frame, _metadata = pyreadstat.read_sas7bdat(str(path))
        except Exception as e:
            raise DataParseError(f"Failed to read SAS file {path}: {e}") from e
        return frame
