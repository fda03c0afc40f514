"""
coop_trends.metrics
~~~~~~~~~~~~~~~~~~~
Aggregate growth, volatility and direction of a series.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .descriptive import population_mean, population_std, round2, sequential_sum
from .models import ChangeRecord, MetricsResult, MonthlyObservation

# Overall growth (percent) beyond which a series is "increasing" /
# "decreasing" rather than "stable".
TREND_GROWTH_THRESHOLD = 5.0


def classify_trend(overall_growth: float) -> str:
    if overall_growth > TREND_GROWTH_THRESHOLD:
        return "increasing"
    if overall_growth < -TREND_GROWTH_THRESHOLD:
        return "decreasing"
    return "stable"


def calculate_metrics(
    observations: Sequence[MonthlyObservation],
    changes: Sequence[ChangeRecord],
) -> MetricsResult:
    """Summarise the series.

    Parameters
    ----------
    observations : sequence of MonthlyObservation
        Validated series.
    changes : sequence of ChangeRecord
        Output of :func:`coop_trends.changes.calculate_changes` for the
        same series; only ``change_percent`` is read.

    Returns
    -------
    MetricsResult
        ``volatility`` is the coefficient of variation in percent.
    """
    values = np.array([o.total_amount for o in observations], dtype=float)
    first_value = float(values[0])
    last_value = float(values[-1])

    total = sequential_sum(values)
    mean = population_mean(values)
    std_dev = population_std(values)
    volatility = std_dev / mean * 100 if mean != 0 else 0.0

    overall_growth = (
        (last_value - first_value) / first_value * 100 if first_value != 0 else 0.0
    )
    avg_monthly_change = (
        sequential_sum([c.change_percent for c in changes]) / len(changes)
        if changes
        else 0.0
    )

    return MetricsResult(
        total=round2(total),
        average=round2(mean),
        first_value=round2(first_value),
        last_value=round2(last_value),
        overall_growth=round2(overall_growth),
        avg_monthly_change=round2(avg_monthly_change),
        std_dev=round2(std_dev),
        volatility=round2(volatility),
        trend_direction=classify_trend(overall_growth),
        data_points=len(observations),
    )
