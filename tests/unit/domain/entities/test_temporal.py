"""Unit tests for temporal family detection and the relative axis."""

from __future__ import annotations

import datetime

import pandas as pd
import pytest

from msmprep.domain.entities.temporal import (
    TemporalFamily,
    calendar_timezone,
    detect_temporal_family,
    relative_axis,
    require_temporal_family,
    to_canonical,
)
from msmprep.exceptions import SchemaError


class TestDetectTemporalFamily:
    @pytest.mark.parametrize(
        "series,expected",
        [
            (pd.Series([1, 2]), TemporalFamily.ELAPSED),
            (pd.Series([1.5, 2.0]), TemporalFamily.ELAPSED),
            (pd.Series(pd.to_timedelta([1, 2], unit="D")), TemporalFamily.ELAPSED),
            (pd.Series(pd.to_datetime(["2020-01-01"])), TemporalFamily.CALENDAR),
            (
                pd.Series(pd.to_datetime(["2020-01-01"]).tz_localize("UTC")),
                TemporalFamily.CALENDAR,
            ),
            (pd.Series([datetime.date(2020, 1, 1), None]), TemporalFamily.CALENDAR),
            (pd.Series([datetime.datetime(2020, 1, 1, 8)]), TemporalFamily.CALENDAR),
        ],
    )
    def test_families(self, series, expected):
        assert detect_temporal_family(series) is expected

    @pytest.mark.parametrize(
        "series",
        [pd.Series([True, False]), pd.Series(["2020-01-01", "x"]), pd.Series([None])],
    )
    def test_unusable_columns(self, series):
        assert detect_temporal_family(series) is None

    def test_require_names_the_column(self):
        with pytest.raises(SchemaError, match="'when'"):
            require_temporal_family(pd.Series(["a"]), "when")


class TestRelativeColumn:
    def test_suffixes(self):
        assert TemporalFamily.CALENDAR.relative_column("augmented") == "augmented_int"
        assert TemporalFamily.ELAPSED.relative_column("augmented") == "augmented_num"


class TestRelativeAxis:
    def test_calendar_days(self):
        values = pd.Series(pd.to_datetime(["2020-01-01 18:00", "2020-01-03 01:00"]))
        anchors = pd.Series(pd.to_datetime(["2020-01-01 18:00"] * 2))
        result = relative_axis(values, anchors, TemporalFamily.CALENDAR)
        assert str(result.dtype) == "Int64"
        assert result.tolist() == [0, 2]

    def test_calendar_missing_value(self):
        values = pd.Series(pd.to_datetime(["2020-01-02", None]))
        anchors = pd.Series(pd.to_datetime(["2020-01-01"] * 2))
        result = relative_axis(values, anchors, TemporalFamily.CALENDAR)
        assert result.iloc[0] == 1
        assert result.iloc[1] is pd.NA

    def test_timedelta_fractional_days(self):
        values = pd.Series(pd.to_timedelta([12, 60], unit="h"))
        anchors = pd.Series(pd.to_timedelta([0, 12], unit="h"))
        result = relative_axis(values, anchors, TemporalFamily.ELAPSED)
        assert result.tolist() == [0.5, 2.0]

    def test_numeric_difference(self):
        result = relative_axis(
            pd.Series([3.5, 10.0]), pd.Series([1.5, 1.5]), TemporalFamily.ELAPSED
        )
        assert result.tolist() == [2.0, 8.5]


def test_to_canonical_parses_python_dates():
    series = pd.Series([datetime.date(2020, 1, 2)])
    result = to_canonical(series, TemporalFamily.CALENDAR)
    assert pd.api.types.is_datetime64_any_dtype(result)
    assert result.iloc[0] == pd.Timestamp("2020-01-02")


def test_to_canonical_leaves_elapsed_alone():
    series = pd.Series([1, 2])
    assert to_canonical(series, TemporalFamily.ELAPSED) is series


class TestCalendarTimezone:
    def test_naive(self):
        assert calendar_timezone(pd.Series(pd.to_datetime(["2020-01-01"]))) is None

    def test_aware(self):
        series = pd.Series(pd.to_datetime(["2020-01-01"]).tz_localize("UTC"))
        assert calendar_timezone(series) == "UTC"

    def test_python_dates_are_naive(self):
        assert calendar_timezone(pd.Series([datetime.date(2020, 1, 1)])) is None
