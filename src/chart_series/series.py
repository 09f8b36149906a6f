"""
Adding and removing series on a chart configuration.

``add_series`` classifies its data into a ``DataShape`` and hands it to the
converter registered for that shape. Each converter flattens the data into
point records and routes the result through ``_append``, the literal case,
which is the only place a new ``ChartConfig`` is built.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from typing import Any

import numpy as np
import pandas as pd
from attrs import evolve
from returns.maybe import Maybe, Nothing, Some

from .chart import ChartConfig, PreconditionError, check_chart
from .config import options as global_options
from .data import Density, Forecast, classify, find_ohlc_columns
from .options import SeriesOptions, validate_args
from .points import (
    datetime_to_timestamp,
    pad_single_point,
    random_id,
    to_calendar_dates,
    to_point_records,
    to_point_tuples,
    to_point_values,
)
from .types import DataShape, SeriesType

logger = logging.getLogger(__name__)

Converter = Callable[..., ChartConfig]


def _append(config: ChartConfig, data: Any, opts: SeriesOptions) -> ChartConfig:
    entry = {"data": data, **opts.to_dict()}
    return evolve(config, series=(*config.series, entry))


def _add_literal(config: ChartConfig, data: Any, opts: SeriesOptions) -> ChartConfig:
    return _append(config, data, opts)


def _add_numeric(config: ChartConfig, data: Any, opts: SeriesOptions) -> ChartConfig:
    if isinstance(data, (pd.Series, np.ndarray, list, tuple)):
        values = to_point_values(data)
    else:
        values = to_point_values([data])
    return _append(config, pad_single_point(values), opts)


def _values(data: pd.Series | pd.DataFrame) -> pd.Series:
    return data.iloc[:, 0] if isinstance(data, pd.DataFrame) else data


def index_timestamps(index: pd.Index) -> list[int | None]:
    """Epoch milliseconds for a time index.

    Periods map to the calendar date they start on, datetimes are kept exact.
    """
    if isinstance(index, pd.PeriodIndex):
        return datetime_to_timestamp(to_calendar_dates(index))
    return datetime_to_timestamp(index)


def _add_time_series(config: ChartConfig, data: Any, opts: SeriesOptions) -> ChartConfig:
    values = _values(data)
    timestamps = index_timestamps(values.index)
    return _append(config, to_point_tuples(timestamps, values), opts)


def ohlc_series_name(columns: list[Any]) -> Maybe[str]:
    """Ticker-like prefix of the first column, e.g. ``AAPL`` for ``AAPL.Open``."""
    if not columns:
        return Nothing
    match = re.match(r"[A-Za-z]+", str(columns[0]))
    return Some(match.group(0)) if match else Nothing


def _add_ohlc(config: ChartConfig, data: pd.DataFrame, opts: SeriesOptions) -> ChartConfig:
    columns = find_ohlc_columns(list(data.columns))
    if columns is None:
        raise PreconditionError("OHLC data needs open, high, low and close columns")

    timestamps = index_timestamps(data.index)
    points = to_point_tuples(timestamps, *(data[col] for col in columns.values()))

    name = ohlc_series_name(list(data.columns)).value_or(None)
    opts = opts.with_defaults(name=name, type=SeriesType.CANDLESTICK)
    return _append(config, points, opts)


def _add_forecast(
    config: ChartConfig,
    data: Forecast,
    opts: SeriesOptions,
    *,
    add_original: bool = False,
    add_levels: bool = True,
    fill_opacity: float = 0.1,
    verbose: bool = False,
) -> ChartConfig:
    forecast_id = opts.id or random_id()
    method = opts.name or data.method
    shared = opts.without("id", "name")

    if add_original:
        if data.x is None:
            raise PreconditionError("add_original=True but the forecast has no observed series")
        config = add_series(
            config, data.x, shared.with_defaults(name="Series", zIndex=3), verbose=verbose
        )

    config = add_series(
        config,
        data.mean,
        shared.with_defaults(zIndex=2).merge(name=method, id=forecast_id),
        verbose=verbose,
    )

    if not add_levels:
        return config

    # same x values as the point forecast the bands are linked to
    timestamps = index_timestamps(data.mean.index)
    for m, level in enumerate(data.level):
        band = shared.with_defaults(fillOpacity=fill_opacity, zIndex=1, lineWidth=0).merge(
            name=f"{method} level {level:g}",
            type=SeriesType.AREARANGE,
            linkedTo=forecast_id,
        )
        points = to_point_tuples(timestamps, data.upper.iloc[:, m], data.lower.iloc[:, m])
        config = add_series(config, points, band, verbose=verbose)
    return config


def _add_density(config: ChartConfig, data: Density, opts: SeriesOptions) -> ChartConfig:
    return _append(config, to_point_tuples(data.x, data.y), opts)


def _add_categorical(config: ChartConfig, data: Any, opts: SeriesOptions) -> ChartConfig:
    if isinstance(data, str):
        data = [data]
    values = data if isinstance(data, (pd.Series, pd.Categorical)) else pd.Series(data)
    counts = pd.Series(values).value_counts(sort=False, dropna=True)
    if not isinstance(counts.index, pd.CategoricalIndex):
        counts = counts.sort_index()

    frame = pd.DataFrame({"name": counts.index.astype(object), "y": counts.to_numpy()})
    return _append(config, to_point_records(frame), opts)


def _add_tabular(
    config: ChartConfig,
    data: pd.DataFrame,
    opts: SeriesOptions,
    *,
    mappings: dict[str, str] | None = None,
) -> ChartConfig:
    if mappings:
        # TODO: map columns onto point fields (x, y, name, ...) per ``mappings``
        logger.warning(
            "add_series: data frames with mappings are not supported yet; series not added"
        )
        return config
    return _append(config, to_point_records(data), opts)


_CONVERTERS: dict[DataShape, Converter] = {
    DataShape.LITERAL: _add_literal,
    DataShape.NUMERIC: _add_numeric,
    DataShape.TIME_SERIES: _add_time_series,
    DataShape.IRREGULAR_TIME_SERIES: _add_time_series,
    DataShape.OHLC: _add_ohlc,
    DataShape.FORECAST: _add_forecast,
    DataShape.DENSITY: _add_density,
    DataShape.CATEGORICAL: _add_categorical,
    DataShape.TABULAR: _add_tabular,
}

# Shape-specific keyword arguments that are not series options
_SHAPE_ARGS: dict[DataShape, frozenset[str]] = {
    DataShape.FORECAST: frozenset({"add_original", "add_levels", "fill_opacity"}),
    DataShape.TABULAR: frozenset({"mappings"}),
}
_SHAPE_ARG_ALIASES: dict[str, str] = {
    "addOriginal": "add_original",
    "addLevels": "add_levels",
    "fillOpacity": "fill_opacity",
}


def _pop_shape_args(shape: DataShape, kwargs: dict[str, Any]) -> dict[str, Any]:
    accepted = _SHAPE_ARGS.get(shape, frozenset())
    shape_args = {}
    for key in list(kwargs):
        name = _SHAPE_ARG_ALIASES.get(key, key)
        if name in accepted:
            shape_args[name] = kwargs.pop(key)
    return shape_args


def add_series(
    config: ChartConfig,
    data: Any = None,
    options: SeriesOptions | None = None,
    *,
    verbose: bool | None = None,
    **kwargs: Any,
) -> ChartConfig:
    """
    Append the series built from ``data`` to ``config``.

    Args:
        config: Chart configuration to extend
        data: Values to plot; the conversion is chosen from its runtime type
            (numbers, time-indexed pandas objects, OHLC frames, Forecast,
            Density, text/categoricals, DataFrames). Anything else is used
            verbatim as the series ``data``.
        options: Series options; ``kwargs`` are merged on top
        verbose: Log the conversion taken. Defaults to ``options.verbose``
            from the global configuration.
        **kwargs: Highcharts series options (``name``, ``type``, ``color``,
            ``zIndex``, ...) passed through to the entry, plus the
            shape-specific arguments ``add_original``, ``add_levels``,
            ``fill_opacity`` (forecasts) and ``mappings`` (data frames)

    Returns:
        A new ChartConfig with one series appended (several for forecasts)

    Raises:
        PreconditionError: If ``config`` is not a ChartConfig or an option
            name is malformed

    Example:
        >>> hc = add_series(highchart(), [1, 3, 2], type="column", name="visits")
    """
    check_chart(config, "add_series")
    if verbose is None:
        verbose = global_options.verbose

    shape = classify(data)
    shape_args = _pop_shape_args(shape, kwargs)
    if shape is DataShape.FORECAST:
        shape_args["verbose"] = verbose

    validate_args("add_series", kwargs)
    opts = (options or SeriesOptions()).merge(**kwargs)

    if verbose:
        logger.info("add_series.%s", shape.value)

    return _CONVERTERS[shape](config, data, opts, **shape_args)


def remove_series(
    config: ChartConfig,
    names: str | Iterable[str] | None = None,
) -> ChartConfig:
    """
    Remove every series whose ``name`` is in ``names``.

    Series without a name never match. Removing a name that is not present
    is a no-op.

    Raises:
        PreconditionError: If ``config`` is not a ChartConfig or ``names``
            is missing or empty
    """
    check_chart(config, "remove_series")
    if names is None:
        raise PreconditionError("remove_series requires the names of the series to remove")

    targets = {names} if isinstance(names, str) else set(names)
    if not targets:
        raise PreconditionError("remove_series requires at least one series name")

    kept = tuple(entry for entry in config.series if entry.get("name") not in targets)
    if len(kept) == len(config.series):
        return config
    return evolve(config, series=kept)
