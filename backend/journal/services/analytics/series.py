# backend/journal/services/analytics/series.py
"""
Chart series for trade analytics.

- Profit by week / month: P&L summed per calendar period
- Profit by pair: P&L summed per instrument label
- Equity curve: running balance after each trade

Buckets are emitted in the order they are first encountered while scanning
the (chronological) input, one entry per distinct key. Periods without
trades are not filled in.

Week buckets start on Sunday; month buckets on the 1st. Bucket identity is
the period start date, so "Jan 07" of two different years stay separate.
"""

from collections.abc import Callable, Sequence
from datetime import date, timedelta

from journal.services.analytics.performance import as_decimal, to_utc
from journal.services.analytics.types import (
    EquityPoint,
    ProfitBucket,
    ValuedTradeRecord,
)
from journal.services.constants import (
    EQUITY_LABEL_FORMAT,
    MONTH_LABEL_FORMAT,
    WEEK_LABEL_FORMAT,
    WEEK_START_WEEKDAY,
    ZERO,
)


# =============================================================================
# PERIOD HELPERS
# =============================================================================

def week_start(day: date, week_start_weekday: int = WEEK_START_WEEKDAY) -> date:
    """
    First day of the calendar week containing `day`.

    Args:
        day: Any date
        week_start_weekday: Weekday the week starts on (Monday=0 .. Sunday=6)
    """
    offset = (day.weekday() - week_start_weekday) % 7
    return day - timedelta(days=offset)


def month_start(day: date) -> date:
    """First day of the month containing `day`."""
    return day.replace(day=1)


def trade_date(trade: ValuedTradeRecord) -> date:
    """Calendar date of a trade in UTC."""
    return to_utc(trade.occurred_at).date()


# =============================================================================
# BUCKETING
# =============================================================================

# key_func returns (key, label, period_start)
BucketKeyFunc = Callable[[ValuedTradeRecord], tuple[str, str, date | None]]


def bucket_profit(
        trades: Sequence[ValuedTradeRecord],
        key_func: BucketKeyFunc,
) -> list[ProfitBucket]:
    """
    Sum P&L per bucket, preserving first-encountered order.

    Args:
        trades: Valued trades, chronological
        key_func: Maps a trade to (key, label, period_start)

    Returns:
        One ProfitBucket per distinct key
    """
    # dicts preserve insertion order: first-seen bucket comes first
    totals: dict[str, dict] = {}

    for trade in trades:
        key, label, period_start = key_func(trade)
        if key not in totals:
            totals[key] = {
                "label": label,
                "period_start": period_start,
                "pnl_quote": ZERO,
                "pnl_secondary": ZERO,
                "trade_count": 0,
            }
        bucket = totals[key]
        bucket["pnl_quote"] += as_decimal(trade.pnl_quote)
        bucket["pnl_secondary"] += as_decimal(trade.pnl_secondary)
        bucket["trade_count"] += 1

    return [
        ProfitBucket(
            key=key,
            label=bucket["label"],
            period_start=bucket["period_start"],
            pnl_quote=bucket["pnl_quote"],
            pnl_secondary=bucket["pnl_secondary"],
            trade_count=bucket["trade_count"],
        )
        for key, bucket in totals.items()
    ]


def _week_key(trade: ValuedTradeRecord) -> tuple[str, str, date | None]:
    start = week_start(trade_date(trade))
    return start.isoformat(), start.strftime(WEEK_LABEL_FORMAT), start


def _month_key(trade: ValuedTradeRecord) -> tuple[str, str, date | None]:
    start = month_start(trade_date(trade))
    return start.isoformat(), start.strftime(MONTH_LABEL_FORMAT), start


def _pair_key(trade: ValuedTradeRecord) -> tuple[str, str, date | None]:
    return trade.pair, trade.pair, None


def profit_by_week(trades: Sequence[ValuedTradeRecord]) -> list[ProfitBucket]:
    """P&L per calendar week (weeks start on Sunday)."""
    return bucket_profit(trades, _week_key)


def profit_by_month(trades: Sequence[ValuedTradeRecord]) -> list[ProfitBucket]:
    """P&L per calendar month."""
    return bucket_profit(trades, _month_key)


def profit_by_pair(trades: Sequence[ValuedTradeRecord]) -> list[ProfitBucket]:
    """P&L per instrument label."""
    return bucket_profit(trades, _pair_key)


# =============================================================================
# EQUITY CURVE
# =============================================================================

def equity_curve(trades: Sequence[ValuedTradeRecord]) -> list[EquityPoint]:
    """
    Running balance sampled after each trade.

    One point per trade; the last point equals the total P&L.
    """
    points: list[EquityPoint] = []
    balance_quote = ZERO
    balance_secondary = ZERO

    for number, trade in enumerate(trades, start=1):
        balance_quote += as_decimal(trade.pnl_quote)
        balance_secondary += as_decimal(trade.pnl_secondary)
        points.append(EquityPoint(
            trade_number=number,
            occurred_at=trade.occurred_at,
            label=trade_date(trade).strftime(EQUITY_LABEL_FORMAT),
            balance_quote=balance_quote,
            balance_secondary=balance_secondary,
        ))

    return points
