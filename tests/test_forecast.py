"""Unit tests for coop_trends.forecast."""

import pytest

from coop_trends.forecast import (
    classify_confidence,
    fit_linear_trend,
    forecast_next_period,
    recent_trend,
)
from coop_trends.models import MonthlyObservation


def _series(values):
    return tuple(
        MonthlyObservation(period_index=i, period_label=f"M{i}", total_amount=v)
        for i, v in enumerate(values, start=1)
    )


# ---------------------------------------------------------------------------
# fit_linear_trend
# ---------------------------------------------------------------------------

class TestFitLinearTrend:
    def test_exact_line(self):
        slope, intercept = fit_linear_trend([10, 20, 30, 40])
        assert slope == 10.0
        assert intercept == 0.0

    def test_flat_line(self):
        slope, intercept = fit_linear_trend([7, 7, 7])
        assert slope == 0.0
        assert intercept == 7.0

    def test_two_points(self):
        slope, intercept = fit_linear_trend([5, 3])
        assert slope == pytest.approx(-2.0)
        assert intercept == pytest.approx(7.0)


# ---------------------------------------------------------------------------
# recent_trend
# ---------------------------------------------------------------------------

class TestRecentTrend:
    def test_short_series_is_zero(self):
        assert recent_trend([1, 2, 3, 4, 5]) == 0.0

    def test_doubling(self):
        assert recent_trend([1, 1, 1, 2, 2, 2]) == pytest.approx(1.0)

    def test_uses_last_six_only(self):
        assert recent_trend([999, 1, 1, 1, 2, 2, 2]) == pytest.approx(1.0)

    def test_zero_prior_window(self):
        assert recent_trend([0, 0, 0, 5, 5, 5]) == 0.0


# ---------------------------------------------------------------------------
# classify_confidence
# ---------------------------------------------------------------------------

class TestClassifyConfidence:
    def test_high(self):
        assert classify_confidence(6, 0.1, 0.1) == "high"

    def test_recent_trend_blocks_high(self):
        assert classify_confidence(6, 0.1, -0.3) == "medium"

    def test_few_points_is_low(self):
        assert classify_confidence(2, 0.0, 0.0) == "low"

    def test_volatile_is_low(self):
        assert classify_confidence(12, 0.31, 0.0) == "low"

    def test_boundaries_are_medium(self):
        assert classify_confidence(6, 0.15, 0.0) == "medium"
        assert classify_confidence(3, 0.3, 0.0) == "medium"


# ---------------------------------------------------------------------------
# forecast_next_period
# ---------------------------------------------------------------------------

class TestForecastNextPeriod:
    def test_linear_series(self):
        result = forecast_next_period(_series([10, 20, 30, 40]))
        assert result.predicted == 50.0
        assert result.slope == 10.0
        assert result.intercept == 0.0
        assert result.method == "linear_regression"
        # volatility 11.18 / 25 > 0.3
        assert result.confidence == "low"
        assert result.range.min == 37.5
        assert result.range.max == 62.5

    def test_constant_series(self):
        result = forecast_next_period(_series([100, 100, 100, 100]))
        assert result.predicted == 100.0
        assert result.confidence == "medium"
        assert result.range.min == 85.0
        assert result.range.max == 115.0

    def test_stable_six_months_is_high_confidence(self):
        result = forecast_next_period(_series([100, 102, 101, 103, 102, 104]))
        assert result.confidence == "high"
        assert result.predicted == pytest.approx(104.2)
        assert result.range.min == pytest.approx(93.78)
        assert result.range.max == pytest.approx(114.62)

    def test_two_points_is_low_confidence(self):
        result = forecast_next_period(_series([100, 110]))
        assert result.confidence == "low"
        assert result.predicted == pytest.approx(120.0)

    def test_negative_projection_floored(self):
        result = forecast_next_period(_series([100, 50, 10]))
        assert result.slope == -45.0
        assert result.predicted == 0.0
        assert result.range.min == 0.0
        assert result.range.max == 0.0

    @pytest.mark.parametrize("values", [[], [100]])
    def test_insufficient_data_sentinel(self, values):
        result = forecast_next_period(_series(values))
        assert result.method == "insufficient_data"
        assert result.predicted is None
        assert result.range is None
        assert result.confidence == "low"
