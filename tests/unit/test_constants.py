"""Unit tests for constants and the package surface.

Tests validate that constants stay consistent with each other and with
the names the augmenter derives.
"""

import msmprep
from msmprep.constants import (
    Defaults,
    MissingValues,
    OutputColumns,
    OutputFormats,
    PolishModes,
    TimeTypes,
)


class TestDefaults:
    """Test suite for Defaults class."""

    def test_state_labels(self):
        """Default vocabulary has three distinct labels."""
        assert len(Defaults.STATE_LABELS) == 3
        assert len(set(Defaults.STATE_LABELS)) == 3

    def test_output_format_is_known(self):
        assert Defaults.OUTPUT_FORMAT in OutputFormats.ALL

    def test_polish_keep_is_known(self):
        assert Defaults.POLISH_KEEP in PolishModes.ALL

    def test_workers_positive(self):
        assert Defaults.MAX_WORKERS > 0


class TestOutputColumns:
    def test_column_groups_do_not_overlap(self):
        assert not set(OutputColumns.BASE) & set(OutputColumns.EXPANDED)

    def test_relative_suffixes_differ(self):
        assert OutputColumns.CALENDAR_SUFFIX != OutputColumns.ELAPSED_SUFFIX


def test_time_types():
    assert TimeTypes.AUTO in TimeTypes.ALL


def test_missing_markers_are_uppercase():
    assert all(marker == marker.upper() for marker in MissingValues.STRING_MARKERS)


def test_public_api():
    """Top-level package exposes the augmentation entry points."""
    for name in ("augment", "Augmenter", "polish", "ColumnRoles", "AugmentConfig"):
        assert name in msmprep.__all__
        assert hasattr(msmprep, name)
    assert isinstance(msmprep.__version__, str)
