"""Status vocabulary for augmented transition rows.

The vocabulary is an ordered triple of labels. Position carries the
meaning: the first label marks entering an episode, the second marks
leaving it, the third is the absorbing state. Codes are the positions,
so ``status_num`` is always 0, 1 or 2 whatever text the caller picks.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import IntEnum

from ...constants import Defaults
from ...exceptions import ConfigurationError


class StatusRole(IntEnum):
    ENTERED = 0
    RELEASED = 1
    TERMINAL = 2


@dataclass(frozen=True, slots=True)
class StatusVocabulary:
    labels: tuple[str, str, str]

    @classmethod
    def from_labels(cls, labels: Sequence[object] | None = None) -> StatusVocabulary:
        if labels is None:
            labels = Defaults.STATE_LABELS
        if isinstance(labels, str):
            raise ConfigurationError(
                f"State labels must be a sequence of 3 labels, got the string {labels!r}"
            )
        items = list(labels)
        if len(items) != len(StatusRole):
            raise ConfigurationError(
                f"State labels must have exactly {len(StatusRole)} elements, "
                f"got {len(items)}: {items}"
            )
        text = [str(item).strip() for item in items]
        if any(not label for label in text):
            raise ConfigurationError(f"State labels must be non-empty, got {items}")
        if len(set(text)) != len(text):
            raise ConfigurationError(f"State labels must be distinct, got {items}")
        return cls(labels=(text[0], text[1], text[2]))

    def code(self, label: str) -> int:
        try:
            return self.labels.index(label)
        except ValueError:
            raise ConfigurationError(
                f"Unknown state label {label!r}; expected one of {list(self.labels)}"
            ) from None


@dataclass(frozen=True, slots=True)
class ExpandedStatusCategories:
    """Ordered categories of the expanded status and their base codes.

    Categories are sorted by base code first, then the plain label, then
    the secondary values alphabetically, so ``base_codes[i]`` recovers the
    ``status_num`` behind expanded code ``i``.
    """

    labels: tuple[str, ...]
    base_codes: tuple[int, ...]

    @classmethod
    def build(
        cls,
        pairs: Iterable[tuple[int, str | None]],
        vocabulary: StatusVocabulary,
        separator: str,
    ) -> ExpandedStatusCategories:
        unique = sorted(
            set(pairs),
            key=lambda pair: (pair[0], pair[1] is not None, pair[1] or ""),
        )
        labels = tuple(
            compose_expanded_label(vocabulary.labels[code], secondary, separator)
            for code, secondary in unique
        )
        clashes = sorted(label for label, n in Counter(labels).items() if n > 1)
        if clashes:
            raise ConfigurationError(
                f"Expanded status labels {clashes} are ambiguous: a state label in "
                f"{list(vocabulary.labels)} equals another joined to a secondary "
                f"value with {separator!r}"
            )
        return cls(labels=labels, base_codes=tuple(code for code, _ in unique))


def compose_expanded_label(label: str, secondary: str | None, separator: str) -> str:
    if secondary is None:
        return label
    return f"{label}{separator}{secondary}"


def compose_sequence_label(label: str, count: int, separator: str) -> str:
    return f"{label}{separator}{count}"
