"""Delimited text reader for episode and augmented tables.

Everything is read as text so that subject identifiers keep leading zeros
and times can be typed later by the use case, which knows the column roles.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import pandas as pd

from .exceptions import DataParseError, DataSourceNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

TAB_SEPARATED_SUFFIXES = frozenset({".tsv", ".tab"})


@dataclass(slots=True)
class CSVReadOptions:
    normalize_headers: bool = True
    strict_na_handling: bool = True
    dtype: Any = str
    encoding: str = "utf-8"
    separator: str | None = None

    def read_csv_kwargs(self, path: Path) -> dict[str, Any]:
        """Keyword arguments for :func:`pandas.read_csv`.

        With ``strict_na_handling`` only empty fields are missing; the
        literal text ``NA`` is kept and resolved later against the
        configured missing markers.
        """
        separator = self.separator
        if separator is None:
            separator = "\t" if path.suffix.lower() in TAB_SEPARATED_SUFFIXES else ","
        kwargs: dict[str, Any] = {
            "sep": separator,
            "dtype": self.dtype,
            "encoding": self.encoding,
        }
        if self.strict_na_handling:
            kwargs.update(keep_default_na=False, na_values=[""])
        return kwargs


class CSVReader:
    pass

    def read(self, path: Path, options: CSVReadOptions | None = None) -> pd.DataFrame:
        options = options or CSVReadOptions()
        if not path.exists():
            raise DataSourceNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise DataSourceNotFoundError(f"Not a file: {path}")
        try:
            frame = pd.read_csv(path, **options.read_csv_kwargs(path))
        except pd.errors.EmptyDataError as e:
            raise DataParseError(f"File is empty: {path}") from e
        except pd.errors.ParserError as e:
            raise DataParseError(f"Failed to parse {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise DataParseError(
                f"Encoding error reading {path}. Try a different encoding: {e}"
            ) from e
        if frame.shape[1] == 0:
            raise DataParseError(f"File has no columns: {path}")
        if options.normalize_headers:
            frame.columns = _trimmed_headers(frame.columns, path)
        return frame


def _trimmed_headers(columns: pd.Index[Any], path: Path) -> list[str]:
    trimmed = [str(column).strip() for column in columns]
    duplicated = sorted(name for name, count in Counter(trimmed).items() if count > 1)
    if duplicated:
        raise DataParseError(
            f"Duplicate column names after trimming in {path}: {duplicated}"
        )
    return trimmed
