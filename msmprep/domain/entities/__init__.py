"""Value objects for the augmentation domain."""

from .column_roles import ColumnRoles
from .status import (
    ExpandedStatusCategories,
    StatusRole,
    StatusVocabulary,
    compose_expanded_label,
    compose_sequence_label,
)
from .temporal import TemporalFamily, detect_temporal_family
from .terminal import TerminalCoding, TerminalEncoding, TerminalState

__all__ = [
    "ColumnRoles",
    "ExpandedStatusCategories",
    "StatusRole",
    "StatusVocabulary",
    "TemporalFamily",
    "TerminalCoding",
    "TerminalEncoding",
    "TerminalState",
    "compose_expanded_label",
    "compose_sequence_label",
    "detect_temporal_family",
]
