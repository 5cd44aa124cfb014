"""msmprep package.

Prepares longitudinal episode data for multi-state survival models. Each
subject's episodes are expanded into transition rows with an entry state,
a release state and an absorbing state, stamped with absolute and relative
times.

Features:
- Expansion of episode tables into IN/OUT/DEAD transition rows
- Two- and three-level terminal codings, calendar or elapsed time
- Optional secondary status refinement
- Cleanup of coincident transitions
- CSV, Excel and SAS input through the ``msmprep`` command line
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("msmprep")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

from msmprep.config import AugmentConfig, ConfigLoader
from msmprep.domain.entities import ColumnRoles
from msmprep.domain.services import (
    Augmenter,
    augment,
    find_coincident_transitions,
    locate_time_column,
    polish,
)
from msmprep.exceptions import (
    AugmentWarning,
    ConfigurationError,
    DataQualityError,
    MsmPrepError,
    SchemaError,
)

__all__ = [
    "__version__",
    # Augmentation
    "Augmenter",
    "augment",
    # Polish
    "find_coincident_transitions",
    "locate_time_column",
    "polish",
    # Configuration
    "AugmentConfig",
    "ColumnRoles",
    "ConfigLoader",
    # Errors
    "AugmentWarning",
    "ConfigurationError",
    "DataQualityError",
    "MsmPrepError",
    "SchemaError",
]
