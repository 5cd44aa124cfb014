"""Terminal condition coding.

Subjects end follow-up alive, dead inside one of their recorded episodes,
or dead outside all of them. Source tables carry this as integers, ordered
categoricals or plain strings, and sometimes only as alive/dead. The raw
column is read once into a :class:`TerminalCoding`; everything downstream
works with :class:`TerminalState`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from ...exceptions import SchemaError
from ...pandas_utils import is_missing_scalar

if TYPE_CHECKING:
    from collections.abc import Hashable

TWO_LEVELS = 2
THREE_LEVELS = 3


class TerminalState(IntEnum):
    ALIVE = 0
    DEAD_INSIDE = 1
    DEAD_OUTSIDE = 2

    @property
    def is_dead(self) -> bool:
        return self is not TerminalState.ALIVE


class TerminalEncoding(Enum):
    INTEGER = "integer"
    ORDERED_CATEGORICAL = "ordered_categorical"
    ALPHABETICAL = "alphabetical"
    BOOLEAN = "boolean"


@dataclass(frozen=True, slots=True)
class TerminalCoding:
    column: str
    encoding: TerminalEncoding
    levels: tuple[Any, ...]

    @property
    def is_two_level(self) -> bool:
        return len(self.levels) == TWO_LEVELS

    def level_of(self, value: object) -> int:
        for position, level in enumerate(self.levels):
            if _same_value(level, value):
                return position
        raise SchemaError(
            f"Terminal column '{self.column}' has unrecognised value {value!r}; "
            f"expected one of {list(self.levels)}"
        )

    def resolve(self, value: object, *, last_end_reaches_censoring: bool) -> TerminalState:
        """Map a raw terminal value to a :class:`TerminalState`.

        Three-level codes map by position. Two-level codes only say
        alive or dead; a death is placed inside the last episode when
        that episode's end is not before the censoring time, and outside
        all episodes otherwise.
        """
        level = self.level_of(value)
        if not self.is_two_level:
            return TerminalState(level)
        if level == 0:
            return TerminalState.ALIVE
        if last_end_reaches_censoring:
            return TerminalState.DEAD_INSIDE
        return TerminalState.DEAD_OUTSIDE

    @classmethod
    def infer(cls, series: pd.Series[Any], column: str | None = None) -> TerminalCoding:
        name = column or str(series.name)
        observed = series.dropna()
        distinct = pd.unique(observed)
        count = len(distinct)
        if count not in (TWO_LEVELS, THREE_LEVELS):
            shown = sorted(map(str, distinct))[:10]
            raise SchemaError(
                f"Terminal column '{name}' must contain 2 or 3 distinct values, "
                f"found {count}: {shown}"
            )

        if isinstance(series.dtype, pd.CategoricalDtype):
            if series.dtype.ordered:
                declared = tuple(series.dtype.categories)
                if len(declared) == THREE_LEVELS:
                    return cls(name, TerminalEncoding.ORDERED_CATEGORICAL, declared)
                present = set(distinct.tolist())
                levels = tuple(c for c in series.dtype.categories if c in present)
                return cls(name, TerminalEncoding.ORDERED_CATEGORICAL, levels)
            return cls._alphabetical(name, distinct.tolist())

        if pd.api.types.is_bool_dtype(series):
            return cls(name, TerminalEncoding.BOOLEAN, (False, True))

        if pd.api.types.is_numeric_dtype(series):
            return cls._integer(name, distinct.tolist())

        values = distinct.tolist()
        if all(isinstance(v, (bool, np.bool_)) for v in values):
            return cls(name, TerminalEncoding.BOOLEAN, (False, True))
        if all(
            isinstance(v, (int, float, np.integer, np.floating))
            and not isinstance(v, (bool, np.bool_))
            for v in values
        ):
            return cls._integer(name, values)
        if all(isinstance(v, str) for v in values):
            return cls._alphabetical(name, values)
        raise SchemaError(
            f"Terminal column '{name}' mixes value types "
            f"{sorted({type(v).__name__ for v in values})}; use integers, an ordered "
            "categorical or strings"
        )

    @classmethod
    def _integer(cls, name: str, values: list[Any]) -> TerminalCoding:
        """Integer codes are ``0, 1`` (alive/dead) or drawn from ``0, 1, 2``.

        Two observed codes other than ``0, 1`` are read on the three-level
        scheme, so ``{0, 2}`` means alive or dead outside every episode.
        """
        if not all(float(v).is_integer() for v in values):
            raise SchemaError(
                f"Terminal column '{name}' has non-integer codes {sorted(values)}"
            )
        codes = sorted(int(v) for v in values)
        two_level = list(range(TWO_LEVELS))
        three_level = list(range(THREE_LEVELS))
        if codes == two_level:
            return cls(name, TerminalEncoding.INTEGER, tuple(two_level))
        if set(codes) <= set(three_level):
            return cls(name, TerminalEncoding.INTEGER, tuple(three_level))
        raise SchemaError(
            f"Terminal column '{name}' must be coded {two_level} or within "
            f"{three_level}, found {codes}"
        )

    @classmethod
    def _alphabetical(cls, name: str, values: list[Any]) -> TerminalCoding:
        ordered = sorted(values, key=str)
        return cls(name, TerminalEncoding.ALPHABETICAL, tuple(ordered))


def _same_value(level: Hashable, value: object) -> bool:
    if is_missing_scalar(value):
        return False
    if isinstance(level, bool):
        return isinstance(value, (bool, np.bool_)) and bool(value) is level
    try:
        return bool(level == value)
    except (TypeError, ValueError):
        return False
