"""Domain services: validation, expansion, status encoding and polishing."""

from .augmenter import Augmenter, SubjectEpisodes, SubjectPlan, augment, plan_subject
from .input_validator import ValidatedInput, validate_input
from .polish_service import find_coincident_transitions, locate_time_column, polish
from .status_encoder import StatusEncoder

__all__ = [
    "Augmenter",
    "StatusEncoder",
    "SubjectEpisodes",
    "SubjectPlan",
    "ValidatedInput",
    "augment",
    "find_coincident_transitions",
    "locate_time_column",
    "plan_subject",
    "polish",
    "validate_input",
]
