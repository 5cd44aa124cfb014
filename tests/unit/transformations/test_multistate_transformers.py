"""Unit tests for AugmentTransformer and PolishTransformer."""

from __future__ import annotations

import warnings

import pandas as pd
import pytest

from msmprep.config import AugmentConfig
from msmprep.exceptions import AugmentWarning, ConfigurationError
from msmprep.transformations import (
    AugmentTransformer,
    PolishTransformer,
    TransformationContext,
)


@pytest.fixture
def context(roles) -> TransformationContext:
    return TransformationContext(roles=roles)


class TestAugmentTransformer:
    def test_can_transform_episode_table(self, hospital_episodes, roles):
        assert AugmentTransformer().can_transform(hospital_episodes, roles)

    def test_cannot_transform_without_roles(self, hospital_episodes, roles):
        frame = hospital_episodes.drop(columns=["adm_number"])
        assert not AugmentTransformer().can_transform(frame, roles)

    def test_cannot_transform_twice(self, hospital_episodes, roles, context):
        augmented = AugmentTransformer().transform(hospital_episodes, context).data
        assert not AugmentTransformer().can_transform(augmented, roles)

    def test_metadata(self, hospital_episodes, context):
        result = AugmentTransformer().transform(hospital_episodes, context)
        assert result.applied
        assert result.message == "Expanded 4 episodes to 7 transitions"
        assert result.metadata["subjects"] == 3
        assert result.metadata["status_counts"] == {"IN": 3, "OUT": 2, "DEAD": 2}
        assert result.metadata["expanded"] is False

    def test_custom_labels(self, hospital_episodes, context):
        config = AugmentConfig(state_labels=("ADM", "DIS", "DTH"))
        result = AugmentTransformer(config).transform(hospital_episodes, context)
        assert set(result.metadata["status_counts"]) == {"ADM", "DIS", "DTH"}

    def test_warnings_are_captured(self, context):
        frame = pd.DataFrame(
            {
                "subj": ["A", "A", "B"],
                "adm_number": [1, 2, 1],
                "label_3": [0, 0, 1],
                "input_time": [0, 5, 0],
                "output_time": [10, 12, 3],
                "censoring_time": [12, 12, 3],
            }
        )
        with warnings.catch_warnings(record=True) as escaped:
            warnings.simplefilter("always")
            result = AugmentTransformer().transform(frame, context)
        assert not [w for w in escaped if issubclass(w.category, AugmentWarning)]
        assert len(result.warnings) == 1
        assert "decreases" in result.warnings[0]

    def test_not_applied_on_augmented_table(self, hospital_episodes, context):
        frame = hospital_episodes.assign(augmented=0)
        result = AugmentTransformer().transform(frame, context)
        assert not result.applied
        assert result.data is frame


class TestPolishTransformer:
    @pytest.fixture
    def augmented(self, hospital_episodes, context):
        return AugmentTransformer().transform(hospital_episodes, context).data

    def test_invalid_keep(self):
        with pytest.raises(ConfigurationError, match="keep"):
            PolishTransformer(keep="random")

    def test_needs_augmented_columns(self, hospital_episodes, roles):
        assert not PolishTransformer().can_transform(hospital_episodes, roles)

    def test_metadata(self, augmented, context):
        result = PolishTransformer(keep="none").transform(augmented, context)
        assert result.metadata["coincident_rows"] == 2
        assert result.metadata["affected_subjects"] == 1
        assert result.metadata["removed_rows"] == 2
        assert len(result.data) == 5
        assert result.message == "Removed 2 coincident transition rows (keep=none)"

    def test_clean_table_has_no_warning(self, augmented, context):
        once = PolishTransformer().transform(augmented, context).data
        result = PolishTransformer().transform(once, context)
        assert result.metadata["removed_rows"] == 0
        assert not result.has_warnings
