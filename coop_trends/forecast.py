"""
coop_trends.forecast
~~~~~~~~~~~~~~~~~~~~
One-period-ahead projection by ordinary least squares, with a confidence
bucket derived from series volatility and recent momentum.

The confidence thresholds below are empirical constants.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from .descriptive import coefficient_of_variation, round2, sequential_sum
from .models import ForecastRange, ForecastResult, MonthlyObservation

logger = logging.getLogger(__name__)

# Periods compared by the recent-trend signal (last N vs the N before).
RECENT_WINDOW = 3

HIGH_CONFIDENCE_MIN_POINTS = 6
HIGH_CONFIDENCE_MAX_VOLATILITY = 0.15
HIGH_CONFIDENCE_MAX_RECENT_TREND = 0.3
LOW_CONFIDENCE_MIN_POINTS = 3
LOW_CONFIDENCE_VOLATILITY = 0.3

# Interval half-width, as a fraction of the prediction.
RANGE_HALF_WIDTH = {"high": 0.10, "medium": 0.15, "low": 0.25}


# ------------------------------------------------------------------
# Auxiliary signals
# ------------------------------------------------------------------


def fit_linear_trend(y: "array-like") -> tuple[float, float]:
    """Closed-form OLS of *y* against ``x = 1..n``.

    Returns
    -------
    tuple[float, float]
        ``(slope, intercept)``. Requires ``n >= 2``.
    """
    y = np.asarray(y, dtype=float)
    n = y.size
    x = np.arange(1, n + 1, dtype=float)

    sum_x = sequential_sum(x)
    sum_y = sequential_sum(y)
    sum_xy = sequential_sum(x * y)
    sum_xx = sequential_sum(x * x)

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def recent_trend(values: "array-like") -> float:
    """Relative change of the last three periods' sum over the three before.

    ``0.0`` for series shorter than six periods or a zero prior window.
    """
    values = np.asarray(values, dtype=float)
    if values.size < 2 * RECENT_WINDOW:
        return 0.0
    recent = sequential_sum(values[-RECENT_WINDOW:])
    previous = sequential_sum(values[-2 * RECENT_WINDOW : -RECENT_WINDOW])
    if previous == 0:
        return 0.0
    return (recent - previous) / previous


def classify_confidence(n: int, volatility: float, trend: float) -> str:
    if (
        n >= HIGH_CONFIDENCE_MIN_POINTS
        and volatility < HIGH_CONFIDENCE_MAX_VOLATILITY
        and abs(trend) < HIGH_CONFIDENCE_MAX_RECENT_TREND
    ):
        return "high"
    if n < LOW_CONFIDENCE_MIN_POINTS or volatility > LOW_CONFIDENCE_VOLATILITY:
        return "low"
    return "medium"


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------


def forecast_next_period(observations: Sequence[MonthlyObservation]) -> ForecastResult:
    """Project the amount for the period after the last observation.

    Parameters
    ----------
    observations : sequence of MonthlyObservation
        Chronological series. Fewer than two periods yields the
        ``"insufficient_data"`` sentinel instead of a projection.

    Returns
    -------
    ForecastResult
        Prediction floored at zero, its confidence bucket and symmetric
        interval, plus the fitted slope and intercept.
    """
    n = len(observations)
    if n < 2:
        return ForecastResult(
            predicted=None,
            confidence="low",
            range=None,
            method="insufficient_data",
        )

    values = np.array([o.total_amount for o in observations], dtype=float)
    slope, intercept = fit_linear_trend(values)
    predicted = max(0.0, slope * (n + 1) + intercept)

    volatility = coefficient_of_variation(values)
    trend = recent_trend(values)
    confidence = classify_confidence(n, volatility, trend)
    width = RANGE_HALF_WIDTH[confidence]
    logger.debug(
        "Forecast %.2f (%s confidence; volatility=%.4f, recent_trend=%.4f)",
        predicted,
        confidence,
        volatility,
        trend,
    )

    return ForecastResult(
        predicted=round2(predicted),
        confidence=confidence,
        range=ForecastRange(
            min=round2(max(0.0, predicted * (1 - width))),
            max=round2(predicted * (1 + width)),
        ),
        method="linear_regression",
        slope=round2(slope),
        intercept=round2(intercept),
    )
