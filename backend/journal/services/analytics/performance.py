# backend/journal/services/analytics/performance.py
"""
Performance calculation functions for trade analytics.

Pure functions over a chronological trade history:
- Chronological ordering (stable, timezone-normalized)
- Win statistics: winning/losing counts and win rate
- Average |P&L %|: simplified "average risk/reward" proxy
- Running balance: cumulative quote-currency P&L
- Max drawdown: largest peak-to-trough decline of the running balance

All functions are stateless, never mutate their input and operate on
Decimal values.

Formulas:
    Win Rate = count(pnl_quote > 0) / total_trades × 100

    Running Balance_i = Σ pnl_quote_1..i          (seeded at 0)

    Peak_i = max(0, Running Balance_1..i)

    Drawdown_i = (Peak_i - Running Balance_i) / Peak_i × 100   if Peak_i > 0
               = 0                                             otherwise

    Max Drawdown = max(Drawdown_i)
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from decimal import Decimal
from typing import TypeVar

from journal.services.analytics.types import ValuedTradeRecord
from journal.services.constants import HUNDRED, ZERO

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=ValuedTradeRecord)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def as_decimal(value: Decimal | int | float | str | None) -> Decimal:
    """Coerce a stored numeric value to Decimal (None counts as zero)."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_utc(moment: datetime) -> datetime:
    """
    Normalize a timestamp to aware UTC.

    Naive timestamps (SQLite drops tzinfo) are taken to already be UTC.
    """
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def sort_chronologically(trades: Iterable[T]) -> list[T]:
    """
    Return trades ordered by occurred_at, ascending.

    sorted() is stable, so trades sharing a timestamp keep their input
    order. The input is not modified.
    """
    return sorted(trades, key=lambda t: to_utc(t.occurred_at))


# =============================================================================
# WIN STATISTICS
# =============================================================================

def calculate_win_statistics(
        pnl_values: Sequence[Decimal],
) -> tuple[int, int, Decimal]:
    """
    Count winners and losers and compute the win rate.

    Break-even trades count toward the total but are neither wins nor losses.

    Args:
        pnl_values: Quote-currency P&L per trade

    Returns:
        Tuple of (winning_trades, losing_trades, win_rate_percent);
        win rate is 0 for an empty history
    """
    if not pnl_values:
        return 0, 0, ZERO

    winning = sum(1 for pnl in pnl_values if pnl > ZERO)
    losing = sum(1 for pnl in pnl_values if pnl < ZERO)
    win_rate = Decimal(winning) / Decimal(len(pnl_values)) * HUNDRED

    return winning, losing, win_rate


def calculate_average_abs_percent(percent_values: Sequence[Decimal]) -> Decimal:
    """Mean of |pnl_percent|; 0 for an empty history."""
    if not percent_values:
        return ZERO
    total = sum((abs(p) for p in percent_values), ZERO)
    return total / Decimal(len(percent_values))


# =============================================================================
# RUNNING BALANCE & DRAWDOWN
# =============================================================================

def calculate_running_balances(pnl_values: Iterable[Decimal]) -> list[Decimal]:
    """Cumulative sum of P&L, sampled after each trade."""
    balances: list[Decimal] = []
    running_balance = ZERO
    for pnl in pnl_values:
        running_balance += pnl
        balances.append(running_balance)
    return balances


def calculate_max_drawdown(pnl_values: Iterable[Decimal]) -> Decimal:
    """
    Largest percentage decline of the running balance from its peak.

    The running balance and the peak both start at 0. While the peak is
    still 0 (no positive excursion yet) the drawdown is 0, so a history
    that starts with losses never divides by zero.

    Args:
        pnl_values: Quote-currency P&L per trade, chronological

    Returns:
        Max drawdown in percent (>= 0)
    """
    running_balance = ZERO
    peak = ZERO
    max_drawdown = ZERO

    for pnl in pnl_values:
        running_balance += pnl
        if running_balance > peak:
            peak = running_balance

        if peak > ZERO:
            drawdown = (peak - running_balance) / peak * HUNDRED
            if drawdown > max_drawdown:
                max_drawdown = drawdown

    return max_drawdown
