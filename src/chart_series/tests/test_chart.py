from __future__ import annotations

import json

import numpy as np
import pandas as pd
import pytest
from attrs.exceptions import FrozenInstanceError

from chart_series import ChartConfig, PreconditionError, add_series, highchart, is_chart, options
from chart_series.chart import check_chart


def test_highchart_is_empty():
    """Test that a new chart has no series and no options."""
    hc = highchart()
    assert hc.series == ()
    assert hc.options == {}
    assert is_chart(hc)


def test_highchart_keeps_chart_options():
    """Test that chart level options end up in the document."""
    hc = highchart(title={"text": "Sales"}, chart={"type": "line"})
    assert hc.to_dict() == {"title": {"text": "Sales"}, "chart": {"type": "line"}, "series": []}


def test_highchart_accepts_initial_series():
    """Test that series passed to highchart() are kept."""
    hc = highchart(series=[{"data": [1, 2], "name": "a"}])
    assert hc.series_names == ["a"]


def test_is_chart_rejects_plain_dicts():
    """Test that a plain dict is not a chart."""
    assert not is_chart({"series": []})


def test_check_chart_message():
    """Test the precondition message names the operation and the type."""
    with pytest.raises(PreconditionError, match="add_series requires a ChartConfig, got dict"):
        check_chart({}, "add_series")


def test_chart_config_is_frozen():
    """Test that ChartConfig fields cannot be reassigned."""
    with pytest.raises(FrozenInstanceError):
        highchart().series = ()


def test_to_dict_returns_lists():
    """Test that to_dict() returns series as a list of plain dicts."""
    hc = highchart().add_series([1, 2], name="a")
    doc = hc.to_dict()
    assert isinstance(doc["series"], list)
    assert doc["series"] == [{"data": [1, 2], "name": "a"}]


def test_to_json_round_trip():
    """Test that to_json() output parses back to the same document."""
    hc = highchart(title={"text": "t"}).add_series(["a", "b", "a"], type="pie")
    doc = json.loads(hc.to_json())
    assert doc["title"] == {"text": "t"}
    assert doc["series"][0]["data"] == [{"name": "a", "y": 2}, {"name": "b", "y": 1}]


def test_to_json_converts_numpy_and_timestamps():
    """Test numpy scalars, arrays and timestamps in JSON output."""
    hc = add_series(
        highchart(),
        [[np.int64(1), pd.Timestamp("1970-01-02")], [np.arange(2), np.float32(0.5)]],
    )
    doc = json.loads(hc.to_json())
    assert doc["series"][0]["data"] == [[1, 86_400_000], [[0, 1], 0.5]]


def test_to_json_converts_pandas_series():
    """Test that a pandas Series stored as data is written as a JSON array."""
    hc = add_series(highchart(), pd.Series([True, False]))
    doc = json.loads(hc.to_json())
    assert doc["series"][0]["data"] == [True, False]


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


def test_to_json_writes_missing_values_as_null():
    """Test that NaN and infinity are written as null."""
    hc = add_series(highchart(), [[0, float("nan")], [1, float("inf")]])
    text = hc.to_json()
    doc = json.loads(text, parse_constant=_reject_constant)
    assert doc["series"][0]["data"] == [[0, None], [1, None]]
    assert "NaN" not in text


def test_pipe():
    """Test chaining a helper through pipe()."""
    def add_two(hc: ChartConfig, name: str) -> ChartConfig:
        return hc.add_series([1, 2], name=name)

    assert highchart().pipe(add_two, "piped").series_names == ["piped"]


def test_verbose_defaults_to_false():
    """Test that verbose output is off by default."""
    assert options.verbose is False
