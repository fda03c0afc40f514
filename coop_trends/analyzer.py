"""
coop_trends.analyzer
~~~~~~~~~~~~~~~~~~~~
Series validation and the facade composing every component into a single
:class:`~coop_trends.models.TrendReport`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from itertools import islice
from typing import Union

from .changes import calculate_changes
from .detector import DEFAULT_Z_THRESHOLD, AnomalyDetector
from .errors import InsufficientDataError, SeriesTooLargeError, TrendAnalysisError
from .extremes import find_extremes
from .forecast import forecast_next_period
from .metrics import calculate_metrics
from .models import AnalysisOutcome, MonthlyObservation, TrendReport

logger = logging.getLogger(__name__)

MIN_DATA_POINTS = 2

# Upper bound on series length accepted from callers.
MAX_DATA_POINTS = 10_000

SeriesInput = Iterable[Union[MonthlyObservation, Mapping]]


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------


def coerce_series(series: SeriesInput) -> tuple[MonthlyObservation, ...]:
    """Normalise *series* to a tuple of :class:`MonthlyObservation`.

    Plain mappings are converted with
    :meth:`MonthlyObservation.from_mapping`; observations pass through.
    """
    observations: list[MonthlyObservation] = []
    for position, item in enumerate(series, start=1):
        if isinstance(item, MonthlyObservation):
            observations.append(item)
        elif isinstance(item, Mapping):
            observations.append(MonthlyObservation.from_mapping(item, position))
        else:
            raise TypeError(
                f"series item {position} must be a MonthlyObservation or a mapping, "
                f"got {type(item).__name__}"
            )
    return tuple(observations)


def validate_series(series: SeriesInput | None) -> tuple[MonthlyObservation, ...]:
    """Gate every analysis on a usable series.

    Raises
    ------
    InsufficientDataError
        If the series is empty or has fewer than two periods.
    SeriesTooLargeError
        If the series has more than :data:`MAX_DATA_POINTS` periods.
    """
    # Stops reading one item past the limit.
    observations = (
        coerce_series(islice(series, MAX_DATA_POINTS + 1)) if series is not None else ()
    )
    if not observations:
        raise InsufficientDataError("no data provided")
    if len(observations) < MIN_DATA_POINTS:
        raise InsufficientDataError("insufficient data for trend analysis")
    if len(observations) > MAX_DATA_POINTS:
        raise SeriesTooLargeError(f"series has more than {MAX_DATA_POINTS} periods")
    return observations


# ------------------------------------------------------------------
# Facade
# ------------------------------------------------------------------


@dataclass(frozen=True)
class TrendAnalyzer:
    """Analyse monthly series with a fixed anomaly sensitivity.

    Parameters
    ----------
    anomaly_z_threshold : float
        Z-score beyond which a period is flagged as a drop or spike
        (default 2.0).

    Examples
    --------
    >>> from coop_trends import TrendAnalyzer
    >>> outcome = TrendAnalyzer().analyze([{"total": 10}, {"total": 20}, {"total": 30}])
    >>> outcome.success, outcome.report.forecast.predicted
    (True, 40.0)
    """

    anomaly_z_threshold: float = DEFAULT_Z_THRESHOLD

    def __post_init__(self) -> None:
        # Rejects an invalid threshold up front.
        AnomalyDetector(self.anomaly_z_threshold)

    def build_report(self, series: SeriesInput | None) -> TrendReport:
        """Run every component and return the report.

        Raises
        ------
        TrendAnalysisError
            Propagated from :func:`validate_series`.
        """
        observations = validate_series(series)
        changes = calculate_changes(observations)
        return TrendReport(
            changes=changes,
            anomalies=AnomalyDetector(self.anomaly_z_threshold).detect(observations),
            extremes=find_extremes(observations),
            forecast=forecast_next_period(observations),
            metrics=calculate_metrics(observations, changes),
            data_points=len(observations),
        )

    def analyze(self, series: SeriesInput | None) -> AnalysisOutcome:
        """Like :meth:`build_report`, but rejected series come back as a
        failed :class:`AnalysisOutcome` instead of an exception."""
        try:
            report = self.build_report(series)
        except TrendAnalysisError as exc:
            logger.debug("Trend analysis rejected series: %s", exc)
            return AnalysisOutcome(success=False, error=exc)
        return AnalysisOutcome(success=True, report=report)


def analyze(
    series: SeriesInput | None,
    anomaly_z_threshold: float = DEFAULT_Z_THRESHOLD,
) -> AnalysisOutcome:
    """Analyse *series* with a one-off :class:`TrendAnalyzer`."""
    return TrendAnalyzer(anomaly_z_threshold=anomaly_z_threshold).analyze(series)
