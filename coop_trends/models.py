"""
coop_trends.models
~~~~~~~~~~~~~~~~~~
Value types flowing into and out of the trend analysis engine.

All records are frozen dataclasses; sequences inside them are stored as
tuples so a returned :class:`TrendReport` cannot be modified in place.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from .errors import InsufficientDataError, TrendAnalysisError

# Key aliases accepted by :meth:`MonthlyObservation.from_mapping`, in lookup
# order. The camelCase names match the monthly rows produced by the
# reporting database layer.
_INDEX_KEYS = ("period_index", "month")
_LABEL_KEYS = ("period_label", "monthName", "month_name")
_AMOUNT_KEYS = ("total_amount", "total")
_MEMBER_KEYS = ("member_count", "members")


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _first_present(mapping: Mapping, keys: tuple[str, ...]) -> Any:
    """Return the first non-blank value among *keys*, or ``None``."""
    for key in keys:
        if not _is_missing(mapping.get(key)):
            return mapping[key]
    return None


# ------------------------------------------------------------------
# Input
# ------------------------------------------------------------------


@dataclass(frozen=True)
class MonthlyObservation:
    """One period of the input series.

    Parameters
    ----------
    period_index : int
        1-based ordinal position within the series.
    period_label : str
        Display label (e.g. a month name); never used in arithmetic.
    total_amount : float
        Measured quantity for the period. ``None`` is stored as ``0.0``;
        :meth:`from_mapping` also treats blank strings as missing.
    member_count : int, optional
        Passed through to the extremum output only.
    """

    period_index: int
    period_label: str
    total_amount: float = 0.0
    member_count: Optional[int] = None

    def __post_init__(self) -> None:
        amount = 0.0 if self.total_amount is None else float(self.total_amount)
        object.__setattr__(self, "total_amount", amount)

    @classmethod
    def from_mapping(cls, row: Mapping, position: int) -> "MonthlyObservation":
        """Build an observation from a plain dict.

        *position* (1-based) is used when the row carries no index, and as
        the label fallback when it carries no label either.
        """
        index = _first_present(row, _INDEX_KEYS)
        label = _first_present(row, _LABEL_KEYS)
        amount = _first_present(row, _AMOUNT_KEYS)
        members = _first_present(row, _MEMBER_KEYS)
        return cls(
            period_index=int(index) if index is not None else position,
            period_label=str(label) if label is not None else str(position),
            total_amount=float(amount) if amount is not None else 0.0,
            member_count=int(members) if members is not None else None,
        )


# ------------------------------------------------------------------
# Component results
# ------------------------------------------------------------------


@dataclass(frozen=True)
class ChangeRecord:
    """Transition from one period to the next."""

    period_label: str
    period_index: int
    previous_label: str
    current_amount: float
    previous_amount: float
    change_amount: float
    change_percent: float
    direction: str


@dataclass(frozen=True)
class Anomaly:
    period_label: str
    period_index: int
    amount: float
    z_score: float
    deviation_percent: float
    severity: str


@dataclass(frozen=True)
class AnomalyResult:
    has_anomalies: bool
    mean: float
    std_dev: float
    threshold: float
    drops: tuple[Anomaly, ...] = ()
    spikes: tuple[Anomaly, ...] = ()


@dataclass(frozen=True)
class PeriodExtreme:
    period_label: str
    period_index: int
    amount: float
    member_count: int


@dataclass(frozen=True)
class ExtremesResult:
    """Highest and lowest periods plus interior turning points.

    ``local_peaks`` and ``local_troughs`` hold the ``period_index`` of every
    interior local maximum / minimum, in chronological order.
    """

    highest: PeriodExtreme
    lowest: PeriodExtreme
    difference: float
    difference_percent: float
    local_peaks: tuple[int, ...] = ()
    local_troughs: tuple[int, ...] = ()


@dataclass(frozen=True)
class ForecastRange:
    min: float
    max: float


@dataclass(frozen=True)
class ForecastResult:
    """One-period-ahead projection.

    ``predicted``, ``range``, ``slope`` and ``intercept`` are ``None`` only
    for the ``"insufficient_data"`` method.
    """

    predicted: Optional[float]
    confidence: str
    range: Optional[ForecastRange]
    method: str
    slope: Optional[float] = None
    intercept: Optional[float] = None


@dataclass(frozen=True)
class MetricsResult:
    total: float
    average: float
    first_value: float
    last_value: float
    overall_growth: float
    avg_monthly_change: float
    std_dev: float
    volatility: float
    trend_direction: str
    data_points: int


# ------------------------------------------------------------------
# Report and tagged outcome
# ------------------------------------------------------------------


@dataclass(frozen=True)
class TrendReport:
    changes: tuple[ChangeRecord, ...]
    anomalies: AnomalyResult
    extremes: ExtremesResult
    forecast: ForecastResult
    metrics: MetricsResult
    data_points: int

    def to_dict(self) -> dict:
        """Return the report as nested plain dicts and lists."""
        return _listify(asdict(self))


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result of :func:`coop_trends.analyze`.

    Exactly one of ``report`` and ``error`` is set.
    """

    success: bool
    report: Optional[TrendReport] = None
    error: Optional[TrendAnalysisError] = field(default=None, compare=False)

    @property
    def error_message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None

    @property
    def insufficient_data(self) -> bool:
        return isinstance(self.error, InsufficientDataError)


def _listify(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _listify(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_listify(v) for v in value]
    return value
