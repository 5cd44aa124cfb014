"""Unit tests for coincident transition detection and polishing."""

from __future__ import annotations

import pandas as pd
import pytest

from msmprep.domain.services.augmenter import augment
from msmprep.domain.services.polish_service import (
    GROUP_SIZE_COLUMN,
    find_coincident_transitions,
    locate_time_column,
    polish,
)
from msmprep.exceptions import ConfigurationError, SchemaError


@pytest.fixture
def augmented(hospital_episodes: pd.DataFrame, role_kwargs) -> pd.DataFrame:
    return augment(hospital_episodes, **role_kwargs)


def _statuses(frame: pd.DataFrame, subject: str) -> list[str]:
    return frame.loc[frame["subj"] == subject, "status"].astype(str).tolist()


class TestLocateTimeColumn:
    def test_numeric_relative_column(self, augmented):
        assert locate_time_column(augmented) == "augmented_num"

    def test_calendar_relative_column(self, calendar_episodes, role_kwargs):
        frame = augment(calendar_episodes, **role_kwargs)
        assert locate_time_column(frame) == "augmented_int"

    def test_custom_base_name(self):
        frame = pd.DataFrame({"t_num": [0.0]})
        assert locate_time_column(frame, "t") == "t_num"

    def test_missing_relative_column(self):
        with pytest.raises(SchemaError, match="No relative time column"):
            locate_time_column(pd.DataFrame({"augmented": [0]}))

    def test_both_relative_columns_are_ambiguous(self):
        frame = pd.DataFrame({"augmented_int": [0], "augmented_num": [0.0]})
        with pytest.raises(SchemaError, match="Ambiguous"):
            locate_time_column(frame)


class TestFindCoincidentTransitions:
    def test_reports_readmission_on_discharge_day(self, augmented):
        report = find_coincident_transitions(augmented, "subj")
        assert report["subj"].tolist() == ["C", "C"]
        assert report["status"].astype(str).tolist() == ["OUT", "IN"]
        assert report[GROUP_SIZE_COLUMN].tolist() == [2, 2]

    def test_keeps_original_index(self, augmented):
        report = find_coincident_transitions(augmented, "subj")
        assert report.index.tolist() == [4, 5]

    def test_same_state_rows_are_not_reported(self):
        frame = pd.DataFrame(
            {
                "subj": ["A", "A", "A"],
                "augmented_num": [0.0, 0.0, 3.0],
                "status": ["IN", "IN", "OUT"],
            }
        )
        report = find_coincident_transitions(frame, "subj")
        assert report.empty
        assert GROUP_SIZE_COLUMN in report.columns

    def test_same_time_in_different_subjects_is_not_reported(self, augmented):
        report = find_coincident_transitions(augmented, "subj")
        assert "A" not in report["subj"].tolist()
        assert "B" not in report["subj"].tolist()

    def test_missing_status_column(self, augmented):
        with pytest.raises(SchemaError, match="state"):
            find_coincident_transitions(augmented, "subj", status_column="state")


class TestPolish:
    def test_keep_last(self, augmented):
        result = polish(augmented, "subj")
        assert len(result) == 6
        assert _statuses(result, "C") == ["IN", "IN", "DEAD"]

    def test_keep_first(self, augmented):
        result = polish(augmented, "subj", keep="first")
        assert _statuses(result, "C") == ["IN", "OUT", "DEAD"]

    def test_keep_none_drops_group(self, augmented):
        result = polish(augmented, "subj", keep="none")
        assert len(result) == 5
        assert _statuses(result, "C") == ["IN", "DEAD"]

    def test_other_subjects_untouched(self, augmented):
        result = polish(augmented, "subj")
        assert _statuses(result, "A") == ["IN", "OUT"]
        assert _statuses(result, "B") == ["DEAD"]

    def test_index_is_reset(self, augmented):
        result = polish(augmented, "subj")
        assert result.index.tolist() == list(range(len(result)))

    def test_agreeing_duplicates_are_kept(self):
        frame = pd.DataFrame(
            {
                "subj": ["A", "A", "A"],
                "augmented_num": [0.0, 0.0, 3.0],
                "status": ["IN", "IN", "OUT"],
            }
        )
        assert len(polish(frame, "subj")) == 3

    def test_three_row_group_keeps_one(self):
        frame = pd.DataFrame(
            {
                "subj": ["A", "A", "A"],
                "augmented_num": [2.0, 2.0, 2.0],
                "status": ["OUT", "IN", "DEAD"],
            }
        )
        result = polish(frame, "subj")
        assert result["status"].tolist() == ["DEAD"]

    def test_polishing_twice_is_stable(self, augmented):
        once = polish(augmented, "subj")
        twice = polish(once, "subj")
        pd.testing.assert_frame_equal(once, twice)

    def test_invalid_keep(self, augmented):
        with pytest.raises(ConfigurationError, match="keep"):
            polish(augmented, "subj", keep="middle")

    def test_input_not_mutated(self, augmented):
        before = augmented.copy()
        polish(augmented, "subj")
        pd.testing.assert_frame_equal(augmented, before)
