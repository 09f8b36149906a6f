"""Helpers that flatten columnar data into point records."""

from __future__ import annotations

import random
import string
from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np
import pandas as pd

_EPOCH = pd.Timestamp("1970-01-01")
_ONE_MS = pd.Timedelta(milliseconds=1)
_ID_ALPHABET = string.ascii_letters + string.digits


def to_native(value: Any) -> Any:
    """Unbox numpy scalars and turn missing values into ``None``."""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, (list, tuple, dict, set, np.ndarray)):
        return value
    return None if pd.isna(value) else value


def _is_listlike(values: Any) -> bool:
    return isinstance(values, (Sequence, np.ndarray, pd.Index, pd.Series)) and not isinstance(
        values, str
    )


def to_calendar_dates(index: pd.Index) -> pd.DatetimeIndex:
    """Map a regular time index to midnight of each observation's date."""
    if isinstance(index, pd.PeriodIndex):
        index = index.to_timestamp(how="start")
    return pd.DatetimeIndex(index).normalize()


def datetime_to_timestamp(values: Any) -> Any:
    """
    Convert dates or datetimes to epoch milliseconds.

    Naive values are read as UTC, aware values are converted to UTC.
    Missing values map to ``None``.

    Args:
        values: A scalar date/datetime or a list-like of them (including
            ``DatetimeIndex`` and ``PeriodIndex``)

    Returns:
        An ``int`` for scalar input, otherwise a list of ``int``
    """
    scalar = not _is_listlike(values)
    if isinstance(values, pd.PeriodIndex):
        values = values.to_timestamp(how="start")
    index = pd.DatetimeIndex([values] if scalar else values)
    if index.tz is not None:
        index = index.tz_convert("UTC").tz_localize(None)

    millis = [None if pd.isna(delta) else int(delta) for delta in (index - _EPOCH) // _ONE_MS]
    return millis[0] if scalar else millis


def to_point_records(frame: pd.DataFrame) -> list[dict[str, Any]]:
    """One mapping per row, keyed by column name in column order."""
    columns = [col if isinstance(col, str) else str(col) for col in frame.columns]
    return [
        {col: to_native(value) for col, value in zip(columns, row)}
        for row in frame.itertuples(index=False, name=None)
    ]


def to_point_tuples(*columns: Any) -> list[list[Any]]:
    """
    Zip parallel columns positionally into ``[a, b, ...]`` points.

    A single ``DataFrame`` argument is split into its columns.

    Raises:
        ValueError: If the columns have different lengths
    """
    if len(columns) == 1 and isinstance(columns[0], pd.DataFrame):
        frame = columns[0]
        columns = tuple(frame.iloc[:, i] for i in range(frame.shape[1]))
    return [[to_native(value) for value in row] for row in zip(*columns, strict=True)]


def to_point_values(values: Iterable[Any]) -> list[Any]:
    return [to_native(value) for value in values]


def pad_single_point(values: list[Any]) -> list[Any]:
    """Duplicate a lone point; the renderer mishandles one-point series."""
    return values * 2 if len(values) == 1 else values


def random_id(length: int = 10) -> str:
    return "".join(random.choices(_ID_ALPHABET, k=length))
