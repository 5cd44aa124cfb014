"""Shared fixtures: small hospital admission tables.

Subjects in ``hospital_episodes``:

- ``A``: one stay [0, 10], censored at 10, alive;
- ``B``: one stay [0, 10], died during the stay;
- ``C``: two stays [0, 5] and [5, 12], died at home at day 20.
"""

from __future__ import annotations

import pandas as pd
import pytest

from msmprep.domain.entities import ColumnRoles

ROLE_COLUMNS = {
    "subject": "subj",
    "episode": "adm_number",
    "terminal": "label_3",
    "start": "input_time",
    "end": "output_time",
    "censoring": "censoring_time",
}


@pytest.fixture
def roles() -> ColumnRoles:
    return ColumnRoles(**ROLE_COLUMNS)


@pytest.fixture
def hospital_episodes() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "subj": ["A", "B", "C", "C"],
            "adm_number": [1, 1, 1, 2],
            "label_3": [0, 1, 2, 2],
            "input_time": [0, 0, 0, 5],
            "output_time": [10, 10, 5, 12],
            "censoring_time": [10, 10, 20, 20],
            "ward": ["df", "icu", "df", "ward2"],
        }
    )


@pytest.fixture
def calendar_episodes(hospital_episodes: pd.DataFrame) -> pd.DataFrame:
    origin = pd.Timestamp("2020-01-01")
    frame = hospital_episodes.copy()
    for column in ("input_time", "output_time", "censoring_time"):
        frame[column] = origin + pd.to_timedelta(frame[column], unit="D")
    return frame


@pytest.fixture
def two_level_episodes() -> pd.DataFrame:
    """Alive/dead coding: X dies in hospital, Y dies after discharge, Z survives."""
    return pd.DataFrame(
        {
            "subj": ["X", "Y", "Z"],
            "adm_number": [1, 1, 1],
            "label_3": [1, 1, 0],
            "input_time": [0, 0, 0],
            "output_time": [10, 10, 10],
            "censoring_time": [10, 15, 15],
        }
    )


@pytest.fixture
def role_kwargs() -> dict[str, str]:
    return dict(ROLE_COLUMNS)
