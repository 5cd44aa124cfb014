"""File readers and I/O errors."""

from .csv_reader import CSVReader, CSVReadOptions
from .exceptions import (
    DataParseError,
    DataSourceError,
    DataSourceNotFoundError,
    DataWriteError,
)

__all__ = [
    "CSVReadOptions",
    "CSVReader",
    "DataParseError",
    "DataSourceError",
    "DataSourceNotFoundError",
    "DataWriteError",
]
