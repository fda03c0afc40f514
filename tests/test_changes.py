"""Unit tests for coop_trends.changes."""

import pytest

from coop_trends.changes import (
    calculate_changes,
    classify_direction,
    percent_change,
)
from coop_trends.models import MonthlyObservation


def _series(values):
    return tuple(
        MonthlyObservation(period_index=i, period_label=f"M{i}", total_amount=v)
        for i, v in enumerate(values, start=1)
    )


# ---------------------------------------------------------------------------
# percent_change
# ---------------------------------------------------------------------------

class TestPercentChange:
    def test_regular_increase(self):
        assert percent_change(100, 110) == 10.0

    def test_not_rounded(self):
        assert percent_change(3, 4) == pytest.approx(100 / 3)

    def test_growth_from_zero_is_one_hundred(self):
        assert percent_change(0, 50) == 100.0

    def test_zero_to_zero_is_zero(self):
        assert percent_change(0, 0) == 0.0


# ---------------------------------------------------------------------------
# classify_direction
# ---------------------------------------------------------------------------

class TestClassifyDirection:
    @pytest.mark.parametrize(
        "pct, expected",
        [
            (0.0, "stable"),
            (0.1, "stable"),
            (-0.1, "stable"),
            (0.11, "increase"),
            (-0.11, "decrease"),
            (100.0, "increase"),
        ],
    )
    def test_deadband(self, pct, expected):
        assert classify_direction(pct) == expected


# ---------------------------------------------------------------------------
# calculate_changes
# ---------------------------------------------------------------------------

class TestCalculateChanges:
    def test_one_record_per_transition(self):
        changes = calculate_changes(_series([100, 110, 110, 99]))
        assert len(changes) == 3

    def test_records_follow_input_order(self):
        changes = calculate_changes(_series([100, 110, 110, 99]))
        assert [c.period_label for c in changes] == ["M2", "M3", "M4"]
        assert [c.previous_label for c in changes] == ["M1", "M2", "M3"]

    def test_directions(self):
        changes = calculate_changes(_series([100, 110, 110, 99]))
        assert [c.direction for c in changes] == ["increase", "stable", "decrease"]
        assert changes[2].change_percent == -10.0

    def test_amounts_carried(self):
        change = calculate_changes(_series([100, 125.5]))[0]
        assert change.previous_amount == 100.0
        assert change.current_amount == 125.5
        assert change.change_amount == 25.5

    def test_zero_to_nonzero_transition(self):
        change = calculate_changes(_series([0, 50]))[0]
        assert change.change_percent == 100.0
        assert change.change_amount == 50.0
        assert change.direction == "increase"

    def test_noise_below_deadband_is_stable(self):
        change = calculate_changes(_series([1000, 1000.5]))[0]
        assert change.change_percent == 0.05
        assert change.direction == "stable"

    def test_percent_rounded_in_record(self):
        change = calculate_changes(_series([3, 4]))[0]
        assert change.change_percent == 33.33

    def test_direction_uses_unrounded_percent(self):
        # 0.104% rounds to 0.10 but still clears the deadband.
        change = calculate_changes(_series([100000, 100104]))[0]
        assert change.change_percent == 0.1
        assert change.direction == "increase"

    def test_small_drop_uses_unrounded_percent(self):
        change = calculate_changes(_series([100000, 99896]))[0]
        assert change.change_percent == -0.1
        assert change.direction == "decrease"
