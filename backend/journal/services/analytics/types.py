# backend/journal/services/analytics/types.py
"""
Data types for trade analytics.

Architecture:
    - ValuedTradeRecord: Protocol for anything summarize() can consume
      (ORM Trade rows satisfy it without adaptation)
    - TradeOutcome: Plain dataclass implementation of the protocol
    - ProfitBucket: One bar of a bucketed profit series (week/month/pair)
    - EquityPoint: One point of the cumulative P&L curve
    - AnalyticsSnapshot: Everything the analytics view displays

All types use Decimal for financial precision. Percentages are expressed
in percent (66.67 = 66.67%), matching how the journal displays them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Protocol

from journal.services.constants import DEFAULT_PAIR


# =============================================================================
# INPUT TYPES
# =============================================================================

class ValuedTradeRecord(Protocol):
    """
    The output shape of the valuation engine plus ordering/grouping keys.

    Analytics depends only on these attributes.
    """

    occurred_at: datetime
    pnl_quote: Decimal
    pnl_secondary: Decimal
    pnl_percent: Decimal
    pair: str


@dataclass(frozen=True)
class TradeOutcome:
    """
    A valued trade ready for aggregation.

    Attributes:
        occurred_at: When the trade happened
        pnl_quote: P&L in quote currency
        pnl_secondary: P&L in secondary currency
        pnl_percent: P&L relative to notional, in percent
        pair: Instrument label (always XAUUSD in practice)
    """

    occurred_at: datetime
    pnl_quote: Decimal
    pnl_secondary: Decimal
    pnl_percent: Decimal
    pair: str = DEFAULT_PAIR


# =============================================================================
# SERIES TYPES
# =============================================================================

@dataclass(frozen=True)
class ProfitBucket:
    """
    Summed P&L for one bucket (calendar week, calendar month or pair).

    Attributes:
        key: Bucket identity (period start ISO date, or pair name)
        label: Display label ("Jan 07", "Jan 2024", "XAUUSD")
        period_start: First day of the period (None for pair buckets)
        pnl_quote: Sum of quote-currency P&L
        pnl_secondary: Sum of secondary-currency P&L
        trade_count: Number of trades in the bucket
    """

    key: str
    label: str
    period_start: date | None
    pnl_quote: Decimal
    pnl_secondary: Decimal
    trade_count: int


@dataclass(frozen=True)
class EquityPoint:
    """
    Running balance sampled after one trade.

    Attributes:
        trade_number: 1-based position in chronological order
        occurred_at: Timestamp of the trade
        label: Display label ("Jan 07")
        balance_quote: Cumulative quote-currency P&L including this trade
        balance_secondary: Cumulative secondary-currency P&L including this trade
    """

    trade_number: int
    occurred_at: datetime
    label: str
    balance_quote: Decimal
    balance_secondary: Decimal


# =============================================================================
# SNAPSHOT
# =============================================================================

@dataclass
class AnalyticsSnapshot:
    """
    Aggregate performance over a trade history.

    Ephemeral: rebuilt from the trade list on every request and never
    persisted. An empty history yields the zero-valued default.

    Attributes:
        total_trades: Number of trades
        winning_trades: Trades with pnl_quote > 0
        losing_trades: Trades with pnl_quote < 0
        total_pnl_quote: Sum of quote-currency P&L
        total_pnl_secondary: Sum of secondary-currency P&L
        total_pnl_percent: Simple (non-compounded) sum of per-trade percent P&L
        win_rate: winning_trades / total_trades x 100
        average_abs_pnl_percent: Mean |pnl_percent|, shown as "average R:R"
        max_drawdown_percent: Largest peak-to-trough decline of the running balance
        profit_by_week / profit_by_month / profit_by_pair: Bucketed P&L
        equity_curve: Running balance after each trade

    Note:
        average_abs_pnl_percent is a simplified proxy and is unrelated to the
        per-trade risk_reward_ratio computed at valuation time.
    """

    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    total_pnl_quote: Decimal = field(default_factory=lambda: Decimal("0"))
    total_pnl_secondary: Decimal = field(default_factory=lambda: Decimal("0"))
    total_pnl_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    win_rate: Decimal = field(default_factory=lambda: Decimal("0"))
    average_abs_pnl_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    max_drawdown_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    profit_by_week: list[ProfitBucket] = field(default_factory=list)
    profit_by_month: list[ProfitBucket] = field(default_factory=list)
    profit_by_pair: list[ProfitBucket] = field(default_factory=list)
    equity_curve: list[EquityPoint] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.total_trades == 0
