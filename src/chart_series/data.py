"""
Input records and runtime shape detection.

pandas and numpy cover most of the shapes ``add_series`` understands; the
two that have no standard container, forecasts and density estimates, are
modelled here as ``attrs`` records.
"""

from __future__ import annotations

import numbers
import re
from collections.abc import Sequence
from typing import Any

import numpy as np
import pandas as pd
from attrs import field, frozen

from .types import DataShape

_TIME_INDEXES = (pd.DatetimeIndex, pd.PeriodIndex)

# Column name fragments identifying OHLC price columns (case-insensitive)
OHLC_FIELDS: tuple[str, ...] = ("open", "high", "low", "close")
VOLUME_FIELD = "volume"


def _to_series(value: Any) -> pd.Series:
    return value if isinstance(value, pd.Series) else pd.Series(value)


def _to_frame(value: Any) -> pd.DataFrame:
    if isinstance(value, pd.DataFrame):
        return value
    return pd.DataFrame(np.asarray(value, dtype=float))


def _time_indexed(instance: Forecast, attribute, value: pd.Series) -> None:
    if not isinstance(value.index, _TIME_INDEXES):
        raise ValueError(
            f"Forecast.{attribute.name} needs a DatetimeIndex or PeriodIndex, "
            f"got {type(value.index).__name__}"
        )


def _same_length_as_mean(instance: Forecast, attribute, value: pd.DataFrame) -> None:
    if len(value) != len(instance.mean):
        raise ValueError(
            f"Forecast.{attribute.name} has {len(value)} rows, mean has {len(instance.mean)}"
        )
    if value.shape[1] != len(instance.level):
        raise ValueError(
            f"Forecast.{attribute.name} has {value.shape[1]} columns "
            f"for {len(instance.level)} levels"
        )


@frozen(kw_only=True)
class Forecast:
    """Point forecasts with prediction interval bands.

    ``lower`` and ``upper`` hold one column per entry of ``level`` and one
    row per point of ``mean``. ``mean`` (and ``x``, the observed series)
    must carry a time index so the points land on a datetime axis.

    Example:
        >>> idx = pd.period_range("2024-01", periods=3, freq="M")
        >>> fc = Forecast(
        ...     method="ETS(A,N,N)",
        ...     mean=pd.Series([10.0, 11.0, 12.0], index=idx),
        ...     lower=[[9, 8], [10, 9], [11, 10]],
        ...     upper=[[11, 12], [12, 13], [13, 14]],
        ...     level=(80, 95),
        ... )
    """

    method: str
    mean: pd.Series = field(converter=_to_series, validator=_time_indexed)
    level: tuple[float, ...] = field(converter=tuple)
    lower: pd.DataFrame = field(converter=_to_frame, validator=_same_length_as_mean)
    upper: pd.DataFrame = field(converter=_to_frame, validator=_same_length_as_mean)
    x: pd.Series | None = field(
        default=None, converter=lambda v: None if v is None else _to_series(v)
    )


@frozen
class Density:
    """A density estimate sampled at paired ``x``/``y`` coordinates."""

    x: np.ndarray = field(converter=np.asarray)
    y: np.ndarray = field(converter=np.asarray)

    @y.validator
    def _check_length(self, attribute, value) -> None:
        if len(value) != len(self.x):
            raise ValueError(f"Density x and y differ in length: {len(self.x)} != {len(value)}")


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, (bool, np.bool_))


def find_ohlc_columns(columns: Sequence[Any]) -> dict[str, Any] | None:
    """Locate open/high/low/close (and optional volume) columns by name.

    Returns None unless all four price columns are present.
    """
    found: dict[str, Any] = {}
    for key in (*OHLC_FIELDS, VOLUME_FIELD):
        match = next(
            (col for col in columns if re.search(key, str(col), re.IGNORECASE)),
            None,
        )
        if match is not None:
            found[key] = match
    return found if all(key in found for key in OHLC_FIELDS) else None


def _classify_series(data: pd.Series) -> DataShape:
    if isinstance(data.index, pd.PeriodIndex):
        return DataShape.TIME_SERIES
    if isinstance(data.index, pd.DatetimeIndex):
        return DataShape.IRREGULAR_TIME_SERIES
    dtype = data.dtype
    if isinstance(dtype, pd.CategoricalDtype) or pd.api.types.is_string_dtype(dtype):
        if pd.api.types.is_object_dtype(dtype) and not all(
            isinstance(v, str) for v in data.dropna()
        ):
            return DataShape.LITERAL
        return DataShape.CATEGORICAL
    if pd.api.types.is_numeric_dtype(dtype) and not pd.api.types.is_bool_dtype(dtype):
        return DataShape.NUMERIC
    return DataShape.LITERAL


def _classify_frame(data: pd.DataFrame) -> DataShape:
    if isinstance(data.index, _TIME_INDEXES):
        if find_ohlc_columns(list(data.columns)) is not None:
            return DataShape.OHLC
        if data.shape[1] == 1:
            return _classify_series(data.iloc[:, 0])
    return DataShape.TABULAR


def classify(data: Any) -> DataShape:
    """
    Determine which conversion applies to ``data``.

    Args:
        data: Any value passed to ``add_series``

    Returns:
        The DataShape tag selecting the converter
    """
    if isinstance(data, Forecast):
        return DataShape.FORECAST
    if isinstance(data, Density):
        return DataShape.DENSITY
    if isinstance(data, pd.DataFrame):
        return _classify_frame(data)
    if isinstance(data, pd.Series):
        return _classify_series(data)
    if isinstance(data, pd.Categorical):
        return DataShape.CATEGORICAL
    if isinstance(data, np.ndarray):
        if data.ndim != 1:
            return DataShape.LITERAL
        if data.dtype.kind in "iuf":
            return DataShape.NUMERIC
        if data.dtype.kind in "US":
            return DataShape.CATEGORICAL
        return DataShape.LITERAL
    if isinstance(data, str):
        return DataShape.CATEGORICAL
    if _is_number(data):
        return DataShape.NUMERIC
    if isinstance(data, (list, tuple)) and data:
        if all(_is_number(v) for v in data):
            return DataShape.NUMERIC
        # missing entries are skipped when counting, as for a Series
        present = [v for v in data if v is not None]
        if present and all(isinstance(v, str) for v in present):
            return DataShape.CATEGORICAL
    return DataShape.LITERAL
