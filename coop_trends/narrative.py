"""
coop_trends.narrative
~~~~~~~~~~~~~~~~~~~~~
Convert a :class:`~coop_trends.models.TrendReport` into a short plain-English
summary suitable for dashboards and recommendation prompts.

Two calling paths are supported:

  Path 1 – precomputed report:
      get_trend_narrative(report=outcome.report, metric="savings")

  Path 2 – raw series (analysis happens internally):
      get_trend_narrative(series=monthly_rows, metric="savings")
"""

from __future__ import annotations

import math
from typing import Optional

from .models import TrendReport

# ------------------------------------------------------------------
# Constants
# ------------------------------------------------------------------

# Volatility (coefficient of variation, %) bands.
CV_LOW_THRESHOLD = 5
CV_MODERATE_THRESHOLD = 15

_MILLNAMES = ["", " K", " M", " B", " T"]


# ------------------------------------------------------------------
# Formatting helpers
# ------------------------------------------------------------------


def millify(n: float) -> str:
    """Format a large number into a human-readable string with suffix.

    Examples
    --------
    >>> millify(1_500_000)
    '1.50 M'
    >>> millify(750)
    '750.00'
    """
    n = float(n)
    idx = max(
        0,
        min(
            len(_MILLNAMES) - 1,
            int(math.floor(0 if n == 0 else math.log10(abs(n)) / 3)),
        ),
    )
    return f"{n / 10 ** (3 * idx):.2f}{_MILLNAMES[idx]}"


def describe_volatility(cv_value: float, metric: str) -> str:
    if cv_value < CV_LOW_THRESHOLD:
        return f"{metric} remained highly stable and range-bound."
    elif cv_value <= CV_MODERATE_THRESHOLD:
        return f"{metric} showed moderate fluctuations around a consistent mean."
    return f"{metric} exhibited significant volatility."


# ------------------------------------------------------------------
# Narrative generation
# ------------------------------------------------------------------


def get_trend_narrative(
    report: Optional[TrendReport] = None,
    metric: str = "savings",
    series=None,
    anomaly_z_threshold: Optional[float] = None,
) -> str:
    """Generate a plain-English narrative from a trend report.

    Parameters
    ----------
    report : TrendReport, optional
        Precomputed report. Required for Path 1.
    metric : str
        Human-readable metric label used in the generated text
        (default ``"savings"``).
    series : sequence, optional
        Monthly observations or mappings. Required for Path 2.
    anomaly_z_threshold : float, optional
        Forwarded to :class:`~coop_trends.analyzer.TrendAnalyzer` when
        using Path 2.

    Returns
    -------
    str
        A multi-sentence narrative.

    Raises
    ------
    ValueError
        If neither *report* nor *series* is provided.
    TrendAnalysisError
        If *series* is rejected by the validator.
    """
    # --- Path 2: raw data supplied -> run analysis first ---
    if series is not None:
        from .analyzer import TrendAnalyzer

        kwargs = {}
        if anomaly_z_threshold is not None:
            kwargs["anomaly_z_threshold"] = anomaly_z_threshold
        report = TrendAnalyzer(**kwargs).build_report(series)

    elif report is None:
        raise ValueError("Provide either a report or a series to analyse.")

    return _build_narrative(report, metric)


# ------------------------------------------------------------------
# Internal narrative builder (pure logic, no analysis)
# ------------------------------------------------------------------


def _build_narrative(report: TrendReport, metric: str) -> str:
    metrics = report.metrics
    extremes = report.extremes
    forecast = report.forecast
    sentences: list[str] = []

    first = report.changes[0].previous_label
    last = report.changes[-1].period_label

    if metrics.trend_direction == "stable":
        sentences.append(
            f"Between {first} and {last}, {metric} held steady "
            f"({metrics.overall_growth:+.2f}% overall)."
        )
    else:
        direction = "increased" if metrics.trend_direction == "increasing" else "decreased"
        sentences.append(
            f"Between {first} and {last}, {metric} {direction} by "
            f"{millify(abs(metrics.last_value - metrics.first_value))} "
            f"({metrics.overall_growth:+.2f}%)."
        )

    sentences.append(describe_volatility(metrics.volatility, metric.capitalize()))

    if extremes.difference > 0:
        sentences.append(
            f"The highest period was {extremes.highest.period_label} "
            f"({millify(extremes.highest.amount)}) and the lowest was "
            f"{extremes.lowest.period_label} ({millify(extremes.lowest.amount)})."
        )

    anomalies = report.anomalies
    if anomalies.has_anomalies:
        parts = []
        if anomalies.spikes:
            labels = ", ".join(a.period_label for a in anomalies.spikes)
            parts.append(f"unusual spikes in {labels}")
        if anomalies.drops:
            labels = ", ".join(a.period_label for a in anomalies.drops)
            parts.append(f"unusual drops in {labels}")
        sentences.append(f"Analysis flagged {' and '.join(parts)}.")

    if forecast.predicted is not None:
        sentences.append(
            f"Next period is projected at {millify(forecast.predicted)} "
            f"({forecast.confidence} confidence, range "
            f"{millify(forecast.range.min)} to {millify(forecast.range.max)})."
        )

    return " ".join(sentences)
