"""
coop_trends.extremes
~~~~~~~~~~~~~~~~~~~~
Highest / lowest period of a series, their spread, and interior turning
points.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from scipy.signal import find_peaks

from .descriptive import round2
from .models import ExtremesResult, MonthlyObservation, PeriodExtreme


def _to_extreme(obs: MonthlyObservation) -> PeriodExtreme:
    return PeriodExtreme(
        period_label=obs.period_label,
        period_index=obs.period_index,
        amount=round2(obs.total_amount),
        member_count=obs.member_count or 0,
    )


def find_turning_points(
    observations: Sequence[MonthlyObservation],
) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """Return the period indices at interior local peaks and troughs."""
    values = np.array([o.total_amount for o in observations], dtype=float)
    peaks, _ = find_peaks(values)
    troughs, _ = find_peaks(-values)
    return (
        tuple(observations[i].period_index for i in peaks),
        tuple(observations[i].period_index for i in troughs),
    )


def find_extremes(observations: Sequence[MonthlyObservation]) -> ExtremesResult:
    """Locate the highest and lowest periods.

    Ties keep the earliest occurrence: the scan starts from the first
    period and only replaces on a strictly greater / smaller amount.
    """
    highest = lowest = observations[0]
    for obs in observations[1:]:
        if obs.total_amount > highest.total_amount:
            highest = obs
        if obs.total_amount < lowest.total_amount:
            lowest = obs

    difference = highest.total_amount - lowest.total_amount
    difference_percent = (
        difference / lowest.total_amount * 100 if lowest.total_amount != 0 else 0.0
    )
    peaks, troughs = find_turning_points(observations)

    return ExtremesResult(
        highest=_to_extreme(highest),
        lowest=_to_extreme(lowest),
        difference=round2(difference),
        difference_percent=round2(difference_percent),
        local_peaks=peaks,
        local_troughs=troughs,
    )
