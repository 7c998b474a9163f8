# backend/journal/services/analytics/service.py
"""
Analytics entry points.

summarize() is the pure aggregation: an explicit sequence of valued trades
in, an AnalyticsSnapshot out. It performs no I/O, keeps no state and never
mutates its input.

AnalyticsService adds logging and the optional date window used by the API.

Architecture:
    summarize(trades)
        ├── performance.sort_chronologically  → stable chronological order
        ├── performance.calculate_win_statistics
        ├── performance.calculate_average_abs_percent
        ├── performance.calculate_max_drawdown
        ├── series.profit_by_week / profit_by_month / profit_by_pair
        └── series.equity_curve

Usage:
    from journal.services.analytics import summarize

    snapshot = summarize(trades)      # ORM rows or TradeOutcome instances
    print(f"Win rate: {snapshot.win_rate}")
"""

import logging
from collections.abc import Iterable
from datetime import date

from journal.services.analytics.performance import (
    as_decimal,
    calculate_average_abs_percent,
    calculate_max_drawdown,
    calculate_win_statistics,
    sort_chronologically,
    to_utc,
)
from journal.services.analytics.series import (
    equity_curve,
    profit_by_month,
    profit_by_pair,
    profit_by_week,
)
from journal.services.analytics.types import AnalyticsSnapshot, ValuedTradeRecord
from journal.services.constants import ZERO

logger = logging.getLogger(__name__)


def summarize(trades: Iterable[ValuedTradeRecord]) -> AnalyticsSnapshot:
    """
    Aggregate a trade history into an AnalyticsSnapshot.

    Args:
        trades: Valued trades in any order (sorted stably by occurred_at here)

    Returns:
        AnalyticsSnapshot; the zero snapshot for an empty history
    """
    ordered = sort_chronologically(trades)
    if not ordered:
        return AnalyticsSnapshot()

    pnl_values = [as_decimal(t.pnl_quote) for t in ordered]
    percent_values = [as_decimal(t.pnl_percent) for t in ordered]

    winning, losing, win_rate = calculate_win_statistics(pnl_values)

    return AnalyticsSnapshot(
        total_trades=len(ordered),
        winning_trades=winning,
        losing_trades=losing,
        total_pnl_quote=sum(pnl_values, ZERO),
        total_pnl_secondary=sum((as_decimal(t.pnl_secondary) for t in ordered), ZERO),
        total_pnl_percent=sum(percent_values, ZERO),
        win_rate=win_rate,
        average_abs_pnl_percent=calculate_average_abs_percent(percent_values),
        max_drawdown_percent=calculate_max_drawdown(pnl_values),
        profit_by_week=profit_by_week(ordered),
        profit_by_month=profit_by_month(ordered),
        profit_by_pair=profit_by_pair(ordered),
        equity_curve=equity_curve(ordered),
    )


def filter_by_window(
        trades: Iterable[ValuedTradeRecord],
        from_date: date | None = None,
        to_date: date | None = None,
) -> list[ValuedTradeRecord]:
    """
    Keep trades whose UTC date falls within [from_date, to_date].

    Either bound may be None (open-ended). Input order is preserved.
    """
    selected = []
    for trade in trades:
        day = to_utc(trade.occurred_at).date()
        if from_date is not None and day < from_date:
            continue
        if to_date is not None and day > to_date:
            continue
        selected.append(trade)
    return selected


class AnalyticsService:
    """
    Application-facing analytics service.

    Stateless; one instance is shared across requests.
    """

    def summarize(
            self,
            trades: Iterable[ValuedTradeRecord],
            from_date: date | None = None,
            to_date: date | None = None,
    ) -> AnalyticsSnapshot:
        """
        Summarize a trade history, optionally restricted to a date window.

        Args:
            trades: Valued trades in any order
            from_date: Inclusive lower bound (UTC date), or None
            to_date: Inclusive upper bound (UTC date), or None
        """
        if from_date is not None or to_date is not None:
            trades = filter_by_window(trades, from_date, to_date)

        snapshot = summarize(trades)

        logger.info(
            f"Analytics summarized: {snapshot.total_trades} trades, "
            f"{len(snapshot.profit_by_week)} weeks, "
            f"{len(snapshot.profit_by_month)} months"
        )
        return snapshot
