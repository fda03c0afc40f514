"""
coop_trends.detector
~~~~~~~~~~~~~~~~~~~~
Z-score outlier detection over a whole monthly series.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from .descriptive import population_mean, population_std, round2
from .models import Anomaly, AnomalyResult, MonthlyObservation

logger = logging.getLogger(__name__)

DEFAULT_Z_THRESHOLD = 2.0

# |z| above this is reported as a "high" severity anomaly.
HIGH_SEVERITY_Z = 3.0


class AnomalyDetector:
    """Flag periods whose amount is far from the series mean.

    Parameters
    ----------
    threshold : float
        A period is anomalous when ``|z| > threshold`` (default 2.0).
    """

    def __init__(self, threshold: float = DEFAULT_Z_THRESHOLD) -> None:
        if not math.isfinite(threshold) or threshold <= 0:
            raise ValueError(f"anomaly threshold must be a positive number, got {threshold!r}")
        self.threshold = float(threshold)

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------

    @staticmethod
    def z_scores(values: np.ndarray, mean: float, std_dev: float) -> np.ndarray:
        """Standardise *values*; callers must guard ``std_dev == 0``."""
        return (values - mean) / std_dev

    @staticmethod
    def classify_severity(z_score: float) -> str:
        return "high" if abs(z_score) > HIGH_SEVERITY_Z else "medium"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def detect(self, observations: Sequence[MonthlyObservation]) -> AnomalyResult:
        """Return the drops and spikes of *observations*.

        Mean and standard deviation are population statistics over the
        full series. A constant series has no outliers.
        """
        values = np.array([o.total_amount for o in observations], dtype=float)
        mean = population_mean(values)
        std_dev = population_std(values)

        if std_dev == 0:
            return AnomalyResult(
                has_anomalies=False,
                mean=round2(mean),
                std_dev=0.0,
                threshold=self.threshold,
            )

        drops: list[Anomaly] = []
        spikes: list[Anomaly] = []
        for obs, z in zip(observations, self.z_scores(values, mean, std_dev)):
            z = float(z)
            if abs(z) <= self.threshold:
                continue
            deviation = (obs.total_amount - mean) / mean * 100 if mean != 0 else 0.0
            anomaly = Anomaly(
                period_label=obs.period_label,
                period_index=obs.period_index,
                amount=round2(obs.total_amount),
                z_score=round2(z),
                deviation_percent=round2(deviation),
                severity=self.classify_severity(z),
            )
            if z < -self.threshold:
                drops.append(anomaly)
            else:
                spikes.append(anomaly)

        if drops or spikes:
            logger.debug(
                "Detected %d drop(s) and %d spike(s) at |z| > %.2f",
                len(drops),
                len(spikes),
                self.threshold,
            )

        return AnomalyResult(
            has_anomalies=bool(drops or spikes),
            mean=round2(mean),
            std_dev=round2(std_dev),
            threshold=self.threshold,
            drops=tuple(drops),
            spikes=tuple(spikes),
        )
