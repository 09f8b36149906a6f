"""
Chart configuration container.

A ``ChartConfig`` is the in-memory Highcharts document that series are
added to and removed from. It is immutable: every operation returns a new
instance and leaves the original, including its series entries, untouched.
"""

from __future__ import annotations

import json
import math
from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime
from typing import Any

import numpy as np
import pandas as pd
from attrs import field, frozen

from .points import datetime_to_timestamp, to_native, to_point_records
from .types import ChartOptions, SeriesEntry


class PreconditionError(ValueError):
    """Raised when an argument does not satisfy an operation's precondition."""


@frozen
class ChartConfig:
    """Highcharts configuration: chart level options plus ordered series."""

    series: tuple[SeriesEntry, ...] = field(default=(), converter=tuple)
    options: Mapping[str, Any] = field(factory=dict)

    def add_series(self, data: Any = None, *args: Any, **kwargs: Any) -> ChartConfig:
        from .series import add_series

        return add_series(self, data, *args, **kwargs)

    def remove_series(self, names: str | Iterable[str] | None = None) -> ChartConfig:
        from .series import remove_series

        return remove_series(self, names)

    def pipe(self, func: Callable[..., ChartConfig], *args: Any, **kwargs: Any) -> ChartConfig:
        """Apply ``func(self, *args, **kwargs)``, for chaining."""
        return func(self, *args, **kwargs)

    @property
    def series_names(self) -> list[str | None]:
        return [entry.get("name") for entry in self.series]

    def to_dict(self) -> ChartOptions:
        """Plain document with ``series`` as a list, ready for serialization."""
        return {**self.options, "series": [dict(entry) for entry in self.series]}  # type: ignore[typeddict-item]

    def to_json(self, **kwargs: Any) -> str:
        """Serialize ``to_dict()``; NaN and infinities are written as ``null``."""
        kwargs.setdefault("allow_nan", False)
        return json.dumps(_finite(self.to_dict()), default=_json_default, **kwargs)


def highchart(**options: Any) -> ChartConfig:
    """
    Create an empty chart configuration.

    Args:
        **options: Chart level Highcharts options (``title``, ``xAxis``, ...)

    Returns:
        A ChartConfig with no series

    Example:
        >>> hc = highchart(title={"text": "Sales"}).add_series([1, 2, 3], type="column")
    """
    series = options.pop("series", ())
    return ChartConfig(series=series, options=options)


def is_chart(obj: Any) -> bool:
    return isinstance(obj, ChartConfig)


def check_chart(obj: Any, operation: str) -> ChartConfig:
    if not is_chart(obj):
        raise PreconditionError(
            f"{operation} requires a ChartConfig, got {type(obj).__name__}"
        )
    return obj


def _finite(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(item) for item in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _json_default(value: Any) -> Any:
    if value is pd.NA:
        return None
    if isinstance(value, (pd.Timestamp, datetime, date, np.datetime64)):
        return datetime_to_timestamp(value)
    if isinstance(value, pd.DataFrame):
        return _finite(to_point_records(value))
    if isinstance(value, (np.ndarray, pd.Series, pd.Index)):
        return _finite([to_native(v) for v in value.tolist()])
    if isinstance(value, np.generic):
        return _finite(to_native(value))
    return str(value)
