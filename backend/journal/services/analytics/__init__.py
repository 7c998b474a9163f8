# backend/journal/services/analytics/__init__.py
"""
Trade Analytics Package.

Aggregates a history of valued trades into the numbers the journal's
analytics view shows:
- Totals: trade count, P&L (quote, secondary, percent)
- Win rate and average |P&L %|
- Max drawdown of the running balance
- Profit by week, month and pair; equity curve

Architecture:
    analytics/
    ├── __init__.py              # This file - package exports
    ├── types.py                 # Input protocol and snapshot types
    ├── performance.py           # Win rate, averages, drawdown
    ├── series.py                # Bucketed profit and equity curve
    └── service.py               # summarize() and AnalyticsService

Data Flow:
    Trade rows (any order)
        ↓
    sort_chronologically (stable)
        ↓
    ┌──────────────────────────────────┐
    │           summarize()            │
    │  • totals      • win rate        │
    │  • drawdown    • buckets         │
    │  • equity curve                  │
    └──────────────────────────────────┘
        ↓
    AnalyticsSnapshot
"""

from journal.services.analytics.performance import (
    calculate_average_abs_percent,
    calculate_max_drawdown,
    calculate_running_balances,
    calculate_win_statistics,
    sort_chronologically,
)
from journal.services.analytics.series import (
    equity_curve,
    month_start,
    profit_by_month,
    profit_by_pair,
    profit_by_week,
    week_start,
)
from journal.services.analytics.service import (
    AnalyticsService,
    filter_by_window,
    summarize,
)
from journal.services.analytics.types import (
    AnalyticsSnapshot,
    EquityPoint,
    ProfitBucket,
    TradeOutcome,
    ValuedTradeRecord,
)

__all__ = [
    # Entry points
    "summarize",
    "filter_by_window",
    "AnalyticsService",

    # Data types
    "AnalyticsSnapshot",
    "EquityPoint",
    "ProfitBucket",
    "TradeOutcome",
    "ValuedTradeRecord",

    # Calculation functions (for testing)
    "sort_chronologically",
    "calculate_win_statistics",
    "calculate_average_abs_percent",
    "calculate_running_balances",
    "calculate_max_drawdown",
    "week_start",
    "month_start",
    "profit_by_week",
    "profit_by_month",
    "profit_by_pair",
    "equity_curve",
]
