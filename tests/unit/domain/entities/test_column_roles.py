"""Unit tests for ColumnRoles."""

from __future__ import annotations

import pandas as pd
from pydantic import ValidationError
import pytest

from msmprep.domain.entities import ColumnRoles
from msmprep.exceptions import SchemaError


def test_required_and_all_columns(roles):
    assert roles.required == (
        "subj",
        "adm_number",
        "label_3",
        "input_time",
        "output_time",
        "censoring_time",
    )
    assert roles.all_columns == roles.required
    with_secondary = roles.model_copy(update={"secondary": "ward"})
    assert with_secondary.all_columns[-1] == "ward"


def test_missing_value_scan_skips_censoring(roles):
    assert "censoring_time" not in roles.missing_value_scan
    assert roles.missing_value_scan[0] == "subj"


def test_missing_from(roles):
    frame = pd.DataFrame(columns=["subj", "label_3", "input_time"])
    assert roles.missing_from(frame) == [
        "adm_number",
        "output_time",
        "censoring_time",
    ]


def test_ensure_present_lists_available_columns(roles):
    frame = pd.DataFrame(columns=["subj"])
    with pytest.raises(SchemaError, match=r"available: \['subj'\]"):
        roles.ensure_present(frame)


def test_empty_names_rejected():
    with pytest.raises(ValidationError):
        ColumnRoles(
            subject="",
            episode="e",
            terminal="t",
            start="s",
            end="x",
            censoring="c",
        )


def test_frozen(roles):
    with pytest.raises(ValidationError):
        roles.subject = "other"
