# backend/tests/services/analytics/test_series.py
"""
Unit tests for chart series: profit buckets and the equity curve.

Calendar reference (2024):
- Jan 07 is a Sunday, Jan 13 a Saturday, Jan 14 the next Sunday
- Dec 31 2023 is a Sunday
"""

from datetime import date, datetime
from decimal import Decimal

from conftest import outcome, utc
from journal.services.analytics import (
    equity_curve,
    month_start,
    profit_by_month,
    profit_by_pair,
    profit_by_week,
    week_start,
)


# =============================================================================
# PERIOD HELPERS
# =============================================================================

class TestPeriodHelpers:
    """Tests for week_start and month_start."""

    def test_sunday_starts_its_own_week(self):
        assert week_start(date(2024, 1, 7)) == date(2024, 1, 7)

    def test_saturday_belongs_to_previous_sunday(self):
        assert week_start(date(2024, 1, 13)) == date(2024, 1, 7)

    def test_week_crossing_year_boundary(self):
        assert week_start(date(2024, 1, 3)) == date(2023, 12, 31)

    def test_monday_start_when_configured(self):
        assert week_start(date(2024, 1, 7), week_start_weekday=0) == date(2024, 1, 1)

    def test_month_start(self):
        assert month_start(date(2024, 2, 29)) == date(2024, 2, 1)


# =============================================================================
# PROFIT BY WEEK
# =============================================================================

class TestProfitByWeek:
    """Tests for profit_by_week."""

    def test_groups_sunday_to_saturday(self):
        trades = [
            outcome(utc(2024, 1, 7), "100"),    # Sun
            outcome(utc(2024, 1, 13), "-30"),   # Sat, same week
            outcome(utc(2024, 1, 14), "50"),    # Sun, next week
        ]

        buckets = profit_by_week(trades)

        assert [b.key for b in buckets] == ["2024-01-07", "2024-01-14"]
        assert buckets[0].pnl_quote == Decimal("70")
        assert buckets[0].trade_count == 2
        assert buckets[0].pnl_secondary == Decimal("70") * Decimal("15500")
        assert buckets[0].label == "Jan 07"
        assert buckets[0].period_start == date(2024, 1, 7)

    def test_same_label_in_different_years_stays_separate(self):
        trades = [
            outcome(utc(2023, 1, 10), "10"),   # week of Sun Jan 08 2023
            outcome(utc(2024, 1, 9), "20"),    # week of Sun Jan 07 2024
            outcome(utc(2025, 1, 7), "30"),    # week of Sun Jan 05 2025
            outcome(utc(2026, 1, 5), "40"),    # week of Sun Jan 04 2026
            outcome(utc(2029, 1, 9), "50"),    # week of Sun Jan 07 2029
        ]

        buckets = profit_by_week(trades)

        jan_07 = [b for b in buckets if b.label == "Jan 07"]
        assert len(jan_07) == 2
        assert {b.key for b in jan_07} == {"2024-01-07", "2029-01-07"}

    def test_first_seen_order(self):
        """Buckets follow input order, not calendar order."""
        trades = [
            outcome(utc(2024, 2, 1), "1"),
            outcome(utc(2024, 1, 1), "2"),
        ]

        buckets = profit_by_week(trades)

        assert [b.pnl_quote for b in buckets] == [Decimal("1"), Decimal("2")]

    def test_naive_timestamps_bucket_as_utc(self):
        trades = [outcome(datetime(2024, 1, 6, 23, 59), "5")]

        assert profit_by_week(trades)[0].key == "2023-12-31"

    def test_empty(self):
        assert profit_by_week([]) == []


# =============================================================================
# PROFIT BY MONTH / PAIR
# =============================================================================

class TestProfitByMonth:
    """Tests for profit_by_month."""

    def test_groups_by_calendar_month(self):
        trades = [
            outcome(utc(2024, 1, 2), "100"),
            outcome(utc(2024, 1, 31), "-40"),
            outcome(utc(2024, 2, 1), "25"),
        ]

        buckets = profit_by_month(trades)

        assert [(b.key, b.label) for b in buckets] == [
            ("2024-01-01", "Jan 2024"),
            ("2024-02-01", "Feb 2024"),
        ]
        assert buckets[0].pnl_quote == Decimal("60")

    def test_years_are_separate(self):
        trades = [
            outcome(utc(2023, 3, 1), "1"),
            outcome(utc(2024, 3, 1), "2"),
        ]

        assert len(profit_by_month(trades)) == 2


class TestProfitByPair:
    """Tests for profit_by_pair."""

    def test_single_pair(self):
        trades = [
            outcome(utc(2024, 1, 2), "100"),
            outcome(utc(2024, 1, 3), "-40"),
        ]

        buckets = profit_by_pair(trades)

        assert len(buckets) == 1
        assert buckets[0].key == "XAUUSD"
        assert buckets[0].period_start is None
        assert buckets[0].pnl_quote == Decimal("60")
        assert buckets[0].trade_count == 2

    def test_other_labels_get_own_bucket(self):
        trades = [
            outcome(utc(2024, 1, 2), "100"),
            outcome(utc(2024, 1, 3), "7", pair="XAGUSD"),
        ]

        assert [b.key for b in profit_by_pair(trades)] == ["XAUUSD", "XAGUSD"]


# =============================================================================
# EQUITY CURVE
# =============================================================================

class TestEquityCurve:
    """Tests for equity_curve."""

    def test_one_point_per_trade(self):
        trades = [
            outcome(utc(2024, 1, 7), "100"),
            outcome(utc(2024, 1, 8), "-30"),
            outcome(utc(2024, 1, 9), "50"),
        ]

        points = equity_curve(trades)

        assert [p.trade_number for p in points] == [1, 2, 3]
        assert [p.balance_quote for p in points] == [
            Decimal("100"), Decimal("70"), Decimal("120"),
        ]
        assert points[-1].balance_secondary == Decimal("120") * Decimal("15500")
        assert points[0].label == "Jan 07"

    def test_empty(self):
        assert equity_curve([]) == []
