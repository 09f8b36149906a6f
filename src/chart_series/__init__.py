"""
Highcharts series from pandas, numpy and plain Python data.
"""

from .chart import (
    ChartConfig,
    PreconditionError,
    highchart,
    is_chart,
)
from .data import (
    Density,
    Forecast,
    classify,
)
from .options import (
    SeriesOptions,
    validate_args,
)
from .points import (
    datetime_to_timestamp,
)
from .series import (
    add_series,
    remove_series,
)
from .types import (
    DataShape,
    SeriesType,
)

# Imported last: loading the ``.options`` submodule rebinds the package
# attribute ``options``, so the config instance must be bound afterwards.
from .config import (
    options,
)

__all__ = [
    "ChartConfig",
    "highchart",
    "is_chart",
    "add_series",
    "remove_series",
    "SeriesOptions",
    "validate_args",
    "Forecast",
    "Density",
    "classify",
    "DataShape",
    "SeriesType",
    "datetime_to_timestamp",
    "PreconditionError",
    "options",
]
