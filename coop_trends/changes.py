"""
coop_trends.changes
~~~~~~~~~~~~~~~~~~~
Period-over-period deltas and direction classification.
"""

from __future__ import annotations

from collections.abc import Sequence

from .descriptive import round2
from .models import ChangeRecord, MonthlyObservation

# Percent changes within +/- this band are reported as "stable".
DIRECTION_DEADBAND = 0.1

# Percent reported when a period rises from a zero baseline.
FROM_ZERO_PERCENT = 100.0


def percent_change(previous: float, current: float) -> float:
    """Unrounded relative change from *previous* to *current*, in percent.

    A zero (or negative) baseline has no meaningful ratio: growth out of it
    is reported as :data:`FROM_ZERO_PERCENT`, anything else as ``0``.
    """
    if previous > 0:
        return (current - previous) / previous * 100
    if current > 0:
        return FROM_ZERO_PERCENT
    return 0.0


def classify_direction(change_percent: float) -> str:
    if change_percent > DIRECTION_DEADBAND:
        return "increase"
    if change_percent < -DIRECTION_DEADBAND:
        return "decrease"
    return "stable"


def calculate_changes(
    observations: Sequence[MonthlyObservation],
) -> tuple[ChangeRecord, ...]:
    """Return one :class:`ChangeRecord` per consecutive pair, in input order.

    Parameters
    ----------
    observations : sequence of MonthlyObservation
        Validated series (at least two periods).

    Returns
    -------
    tuple[ChangeRecord, ...]
        ``len(observations) - 1`` records.
    """
    records: list[ChangeRecord] = []
    for prev, curr in zip(observations, observations[1:]):
        pct = percent_change(prev.total_amount, curr.total_amount)
        records.append(
            ChangeRecord(
                period_label=curr.period_label,
                period_index=curr.period_index,
                previous_label=prev.period_label,
                current_amount=round2(curr.total_amount),
                previous_amount=round2(prev.total_amount),
                change_amount=round2(curr.total_amount - prev.total_amount),
                change_percent=round2(pct),
                direction=classify_direction(pct),
            )
        )
    return tuple(records)
