"""Unit tests for the pre-expansion input checks."""

from __future__ import annotations

import pandas as pd
import pytest

from msmprep.domain.entities.temporal import TemporalFamily
from msmprep.domain.entities.terminal import TerminalEncoding
from msmprep.domain.services.input_validator import (
    check_constant_per_subject,
    check_missing,
    check_output_collisions,
    resolve_temporal_family,
    validate_input,
)
from msmprep.exceptions import DataQualityError, SchemaError


class TestValidateInput:
    def test_resolves_coding_and_family(self, hospital_episodes, roles):
        validated = validate_input(hospital_episodes, roles, validate_missing=True)
        assert validated.roles is roles
        assert validated.terminal.encoding is TerminalEncoding.INTEGER
        assert validated.terminal.levels == (0, 1, 2)
        assert validated.family is TemporalFamily.ELAPSED

    def test_calendar_family(self, calendar_episodes, roles):
        validated = validate_input(calendar_episodes, roles, validate_missing=False)
        assert validated.family is TemporalFamily.CALENDAR

    def test_missing_columns_checked_first(self, roles):
        frame = pd.DataFrame({"subj": ["A"]})
        with pytest.raises(SchemaError, match="missing required column"):
            validate_input(frame, roles, validate_missing=True, output_columns=["subj"])

    def test_collisions_checked_before_values(self, hospital_episodes, roles):
        with pytest.raises(SchemaError, match="derived output columns"):
            validate_input(
                hospital_episodes,
                roles,
                validate_missing=False,
                output_columns=["augmented", "input_time"],
            )

    def test_secondary_column_must_exist(self, hospital_episodes, roles):
        roles = roles.model_copy(update={"secondary": "unit"})
        with pytest.raises(SchemaError, match="unit"):
            validate_input(hospital_episodes, roles, validate_missing=False)


class TestCheckMissing:
    def test_clean_table_passes(self, hospital_episodes, roles):
        check_missing(hospital_episodes, roles)

    def test_reports_count(self, hospital_episodes, roles):
        frame = hospital_episodes.assign(subj=["A", None, None, "C"])
        with pytest.raises(DataQualityError) as excinfo:
            check_missing(frame, roles)
        assert excinfo.value.column == "subj"
        assert excinfo.value.count == 2
        assert "2 missing" in str(excinfo.value)


class TestCheckConstantPerSubject:
    def test_constant_columns_pass(self, hospital_episodes):
        check_constant_per_subject(hospital_episodes, "subj", ["label_3"])

    def test_missing_counts_as_a_distinct_value(self, hospital_episodes):
        frame = hospital_episodes.astype({"censoring_time": "float64"})
        frame.loc[3, "censoring_time"] = float("nan")
        with pytest.raises(SchemaError, match="1 subject"):
            check_constant_per_subject(frame, "subj", ["censoring_time"])


def test_collision_check_ignores_unrelated_names(roles):
    check_output_collisions(roles, ["augmented", "status"])


def test_mixed_families_name_both_columns(hospital_episodes, roles):
    frame = hospital_episodes.assign(
        censoring_time=pd.to_datetime(["2020-01-11"] * 4)
    )
    with pytest.raises(SchemaError, match="input_time.*censoring_time"):
        resolve_temporal_family(frame, roles)


def test_calendar_columns_must_share_timezone(calendar_episodes, roles):
    frame = calendar_episodes.assign(
        input_time=calendar_episodes["input_time"].dt.tz_localize("UTC")
    )
    with pytest.raises(SchemaError, match="input_time.*UTC.*output_time.*naive"):
        resolve_temporal_family(frame, roles)


def test_matching_timezones_pass(calendar_episodes, roles):
    frame = calendar_episodes.copy()
    for column in ("input_time", "output_time", "censoring_time"):
        frame[column] = frame[column].dt.tz_localize("Europe/Paris")
    assert resolve_temporal_family(frame, roles) is TemporalFamily.CALENDAR
