"""
coop_trends.errors
~~~~~~~~~~~~~~~~~~
Exceptions raised when a series cannot be analysed.
"""


class TrendAnalysisError(ValueError):
    """Base class for series rejected by the validator."""


class InsufficientDataError(TrendAnalysisError):
    """Raised when the series is empty or shorter than two periods."""


class SeriesTooLargeError(TrendAnalysisError):
    """Raised when the series exceeds :data:`coop_trends.analyzer.MAX_DATA_POINTS`."""
