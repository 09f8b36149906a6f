"""
Global configuration for chart-series.

This module provides configuration options that affect how data is shaped
into chart series, following the Ibis config pattern.
"""

from ibis.config import Config


class Options(Config):
    """chart-series configuration options.

    Attributes
    ----------
    verbose : bool
        Log which conversion branch ``add_series`` takes for each call.

        Default: False

        Any call can override this with an explicit ``verbose=`` argument.

        Example:
            >>> from chart_series import options
            >>> options.verbose = True
            >>> # add_series(...) now logs "add_series.numeric" etc. at INFO
            >>> options.verbose = False
    """

    verbose: bool = False


# Global options instance
options = Options()
