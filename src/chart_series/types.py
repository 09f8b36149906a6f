"""
Type definitions and enums for chart-series.

Defines the shapes of input data the adapter recognizes and the
Highcharts-style configuration documents it produces.
"""

from enum import Enum
from typing import Any, TypedDict


class DataShape(str, Enum):
    """Input data shapes, one conversion per shape."""

    LITERAL = "default"
    NUMERIC = "numeric"
    TIME_SERIES = "ts"
    IRREGULAR_TIME_SERIES = "xts"
    OHLC = "ohlc"
    FORECAST = "forecast"
    DENSITY = "density"
    CATEGORICAL = "character"
    TABULAR = "data_frame"


class SeriesType(str, Enum):
    """Highcharts series types the adapter emits or commonly receives."""

    LINE = "line"
    SPLINE = "spline"
    AREA = "area"
    AREASPLINE = "areaspline"
    AREARANGE = "arearange"
    COLUMN = "column"
    BAR = "bar"
    PIE = "pie"
    SCATTER = "scatter"
    CANDLESTICK = "candlestick"
    OHLC = "ohlc"


class SeriesEntry(TypedDict, total=False):
    """One entry of the chart's ``series`` list.

    Only ``data`` is always present; any other key is passed through.
    """

    data: Any
    name: str
    type: str
    color: str
    id: str
    zIndex: int
    linkedTo: str
    fillOpacity: float
    lineWidth: float


class ChartOptions(TypedDict, total=False):
    """Chart level options serialized alongside ``series``."""

    chart: dict[str, Any]
    title: dict[str, Any]
    subtitle: dict[str, Any]
    xAxis: dict[str, Any] | list[dict[str, Any]]
    yAxis: dict[str, Any] | list[dict[str, Any]]
    tooltip: dict[str, Any]
    legend: dict[str, Any]
    plotOptions: dict[str, Any]
    colors: list[str]
    series: list[SeriesEntry]
