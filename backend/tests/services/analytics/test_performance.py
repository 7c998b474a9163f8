# backend/tests/services/analytics/test_performance.py
"""
Unit tests for performance calculations.

These tests verify the pure calculation logic WITHOUT database dependencies.
All tests use known values that can be verified by hand.

Test Coverage:
- sort_chronologically: ordering and stability
- calculate_win_statistics: counts and win rate
- calculate_average_abs_percent: mean |P&L %|
- calculate_running_balances: cumulative P&L
- calculate_max_drawdown: peak-to-trough decline
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from conftest import outcome, utc
from journal.services.analytics import (
    calculate_average_abs_percent,
    calculate_max_drawdown,
    calculate_running_balances,
    calculate_win_statistics,
    sort_chronologically,
)
from journal.services.analytics.performance import as_decimal, to_utc


def d(*values: str) -> list[Decimal]:
    return [Decimal(v) for v in values]


# =============================================================================
# HELPER FUNCTION TESTS
# =============================================================================

class TestHelpers:
    """Tests for coercion and timezone helpers."""

    def test_as_decimal(self):
        assert as_decimal(None) == Decimal("0")
        assert as_decimal(1.5) == Decimal("1.5")
        assert as_decimal("2") == Decimal("2")

    def test_naive_timestamp_is_utc(self):
        assert to_utc(datetime(2024, 1, 7, 23, 0)) == utc(2024, 1, 7, 23)

    def test_aware_timestamp_is_converted(self):
        jakarta = timezone(timedelta(hours=7))
        moment = datetime(2024, 1, 8, 5, 0, tzinfo=jakarta)

        assert to_utc(moment) == utc(2024, 1, 7, 22)


class TestSortChronologically:
    """Tests for sort_chronologically."""

    def test_sorts_by_time(self):
        late = outcome(utc(2024, 1, 10), "10")
        early = outcome(utc(2024, 1, 1), "20")

        assert sort_chronologically([late, early]) == [early, late]

    def test_ties_keep_input_order(self):
        """Trades sharing a timestamp keep their entry order."""
        first = outcome(utc(2024, 1, 5), "1")
        second = outcome(utc(2024, 1, 5), "2")
        third = outcome(utc(2024, 1, 5), "3")

        result = sort_chronologically([first, second, third])

        assert [t.pnl_quote for t in result] == d("1", "2", "3")

    def test_mixed_naive_and_aware(self):
        naive = outcome(datetime(2024, 1, 2, 0, 0), "1")
        aware = outcome(utc(2024, 1, 1), "2")

        assert sort_chronologically([naive, aware]) == [aware, naive]

    def test_does_not_mutate_input(self):
        trades = [outcome(utc(2024, 1, 2), "1"), outcome(utc(2024, 1, 1), "2")]
        snapshot = list(trades)

        sort_chronologically(trades)

        assert trades == snapshot


# =============================================================================
# WIN STATISTICS
# =============================================================================

class TestWinStatistics:
    """Tests for calculate_win_statistics."""

    def test_two_of_three(self):
        winning, losing, win_rate = calculate_win_statistics(d("100", "-50", "25"))

        assert winning == 2
        assert losing == 1
        assert round(win_rate, 2) == Decimal("66.67")

    def test_break_even_counts_in_total_only(self):
        winning, losing, win_rate = calculate_win_statistics(d("10", "0", "-10", "0"))

        assert winning == 1
        assert losing == 1
        assert win_rate == Decimal("25")

    def test_empty(self):
        assert calculate_win_statistics([]) == (0, 0, Decimal("0"))


class TestAverageAbsPercent:
    """Tests for calculate_average_abs_percent."""

    def test_mean_of_absolute_values(self):
        assert calculate_average_abs_percent(d("1", "-3", "2")) == Decimal("2")

    def test_empty(self):
        assert calculate_average_abs_percent([]) == Decimal("0")


# =============================================================================
# RUNNING BALANCE & DRAWDOWN
# =============================================================================

class TestRunningBalances:
    """Tests for calculate_running_balances."""

    def test_cumulative(self):
        assert calculate_running_balances(d("100", "-30", "50")) == d("100", "70", "120")

    def test_empty(self):
        assert calculate_running_balances([]) == []


class TestMaxDrawdown:
    """Tests for calculate_max_drawdown."""

    def test_peak_to_trough(self):
        """Peak 100, trough 50: 50% drawdown."""
        assert calculate_max_drawdown(d("100", "-50")) == Decimal("50")

    def test_largest_decline_wins(self):
        """
        Balances 100, 80, 200, 120:
        - 100 -> 80: 20%
        - 200 -> 120: 40%
        """
        assert calculate_max_drawdown(d("100", "-20", "120", "-80")) == Decimal("40")

    def test_only_winners(self):
        assert calculate_max_drawdown(d("10", "20", "30")) == Decimal("0")

    def test_losses_before_any_peak(self):
        """Peak stays at 0 while the balance is negative: drawdown is 0."""
        assert calculate_max_drawdown(d("-100", "-50")) == Decimal("0")

    def test_recovery_after_initial_losses(self):
        """Balances -50, 50, 25: only the step from peak 50 counts."""
        assert calculate_max_drawdown(d("-50", "100", "-25")) == Decimal("50")

    def test_balance_below_zero_after_peak(self):
        """Peak 100, balance -100: 200% drawdown."""
        assert calculate_max_drawdown(d("100", "-200")) == Decimal("200")

    def test_empty(self):
        assert calculate_max_drawdown([]) == Decimal("0")
