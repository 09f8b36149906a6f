from __future__ import annotations

from datetime import date, datetime

import numpy as np
import pandas as pd
import pytest

from chart_series.points import (
    datetime_to_timestamp,
    pad_single_point,
    random_id,
    to_calendar_dates,
    to_point_records,
    to_point_tuples,
)

JAN_1_2024 = 1_704_067_200_000


def test_datetime_to_timestamp_scalar_timestamp():
    """Test a scalar Timestamp."""
    assert datetime_to_timestamp(pd.Timestamp("1970-01-02")) == 86_400_000


def test_datetime_to_timestamp_date():
    """Test a datetime.date."""
    assert datetime_to_timestamp(date(2024, 1, 1)) == JAN_1_2024


def test_datetime_to_timestamp_list_keeps_time_of_day():
    """Test that datetimes keep their time of day."""
    assert datetime_to_timestamp([datetime(2024, 1, 1, 12)]) == [JAN_1_2024 + 12 * 3_600_000]


def test_datetime_to_timestamp_aware_values_use_utc():
    """Test that aware values are converted to UTC."""
    ts = pd.Timestamp("2024-01-01 01:00", tz="Europe/Paris")
    assert datetime_to_timestamp(ts) == JAN_1_2024


def test_datetime_to_timestamp_period_index():
    """Test that periods map to their start."""
    idx = pd.period_range("2024-01", periods=2, freq="M")
    assert datetime_to_timestamp(idx) == [JAN_1_2024, JAN_1_2024 + 31 * 86_400_000]


def test_datetime_to_timestamp_missing_is_none():
    """Test that NaT maps to None."""
    assert datetime_to_timestamp([pd.Timestamp("2024-01-01"), pd.NaT]) == [JAN_1_2024, None]


def test_to_calendar_dates_drops_time():
    """Test truncation to midnight."""
    idx = pd.DatetimeIndex(["2024-01-01 13:45", "2024-01-02 08:00"])
    assert list(to_calendar_dates(idx)) == [pd.Timestamp("2024-01-01"), pd.Timestamp("2024-01-02")]


def test_to_point_records_preserves_column_order():
    """Test that records follow the frame's column order."""
    df = pd.DataFrame({"b": [1, 2], "a": ["x", "y"]})
    records = to_point_records(df)
    assert records == [{"b": 1, "a": "x"}, {"b": 2, "a": "y"}]
    assert list(records[0]) == ["b", "a"]


def test_to_point_records_missing_values_are_none():
    """Test that NaN becomes None in records."""
    df = pd.DataFrame({"v": [1.5, np.nan]})
    assert to_point_records(df) == [{"v": 1.5}, {"v": None}]


def test_to_point_tuples_zips_columns():
    """Test zipping parallel lists."""
    assert to_point_tuples([1, 2], [3, 4]) == [[1, 3], [2, 4]]


def test_to_point_tuples_splits_frame():
    """Test that a frame is split into its columns."""
    df = pd.DataFrame({"x": [1, 2], "y": [3.0, 4.0]})
    assert to_point_tuples(df) == [[1, 3.0], [2, 4.0]]


def test_to_point_tuples_unboxes_numpy_scalars():
    """Test that numpy scalars become Python scalars."""
    points = to_point_tuples(np.array([1, 2]), np.array([0.5, 0.25]))
    assert points == [[1, 0.5], [2, 0.25]]
    assert type(points[0][0]) is int


def test_to_point_tuples_length_mismatch():
    """Test that columns of different lengths are rejected."""
    with pytest.raises(ValueError):
        to_point_tuples([1, 2, 3], [1, 2])


@pytest.mark.parametrize(
    "values,expected",
    [([5], [5, 5]), ([1, 2], [1, 2]), ([], [])],
)
def test_pad_single_point(values, expected):
    """Test that only a lone point is duplicated."""
    assert pad_single_point(values) == expected


def test_random_id():
    """Test random id length and alphabet."""
    rid = random_id()
    assert len(rid) == 10
    assert rid.isalnum()
    assert len(random_id(4)) == 4
