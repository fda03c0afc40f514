"""
coop_trends
~~~~~~~~~~~
Statistical trend analysis for a cooperative branch's monthly totals:
period-over-period changes, z-score anomalies, highest/lowest periods, a
one-period-ahead linear forecast and aggregate growth/volatility metrics.

Two calling paths are supported:

Path 1 – tagged outcome (rejected series never raise):

    from coop_trends import analyze

    outcome = analyze(monthly_rows)
    if outcome.success:
        forecast = outcome.report.forecast
    else:
        print(outcome.error_message)

Path 2 – configured analyzer, exceptions on rejection:

    from coop_trends import TrendAnalyzer, get_trend_narrative

    report = TrendAnalyzer(anomaly_z_threshold=2.5).build_report(monthly_rows)
    narrative = get_trend_narrative(report, metric="savings")

``monthly_rows`` may hold :class:`MonthlyObservation` instances or plain
dicts with ``total``/``monthName``/``members`` style keys.
"""

import logging

from .analyzer import MAX_DATA_POINTS, TrendAnalyzer, analyze, validate_series
from .detector import DEFAULT_Z_THRESHOLD, AnomalyDetector
from .errors import InsufficientDataError, SeriesTooLargeError, TrendAnalysisError
from .models import (
    AnalysisOutcome,
    MonthlyObservation,
    TrendReport,
)
from .narrative import get_trend_narrative, millify

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AnalysisOutcome",
    "AnomalyDetector",
    "DEFAULT_Z_THRESHOLD",
    "InsufficientDataError",
    "MAX_DATA_POINTS",
    "MonthlyObservation",
    "SeriesTooLargeError",
    "TrendAnalysisError",
    "TrendAnalyzer",
    "TrendReport",
    "analyze",
    "get_trend_narrative",
    "millify",
    "validate_series",
]

__version__ = "0.1.0"
