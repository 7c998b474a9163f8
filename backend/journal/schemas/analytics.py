# backend/journal/schemas/analytics.py
"""
Pydantic schemas for trade analytics responses.

All numeric values are strings to preserve precision. Percentages are in
percent ("66.6666..." = 66.67%); rounding is left to the client.
"""

import datetime as dt

from pydantic import BaseModel, Field


class ProfitBucketResponse(BaseModel):
    """One bar of a profit-by-week / month / pair chart."""

    key: str = Field(..., description="Period start (ISO date) or pair name")
    label: str = Field(..., description="Display label, e.g. 'Jan 07' or 'Jan 2024'")
    period_start: dt.date | None = Field(None, description="First day of the period (null for pairs)")
    pnl_quote: str
    pnl_secondary: str
    trade_count: int


class EquityPointResponse(BaseModel):
    """Running balance after one trade."""

    trade_number: int
    occurred_at: dt.datetime
    label: str
    balance_quote: str
    balance_secondary: str


class AnalyticsResponse(BaseModel):
    """
    Aggregate performance over the owner's trade history.

    average_abs_pnl_percent is the mean |P&L %| (shown as "average R:R"
    in the journal); it is not the per-trade risk/reward ratio.
    """

    from_date: dt.date | None = Field(None, description="Inclusive window start (null = open)")
    to_date: dt.date | None = Field(None, description="Inclusive window end (null = open)")
    quote_currency: str
    secondary_currency: str

    total_trades: int
    winning_trades: int
    losing_trades: int
    total_pnl_quote: str
    total_pnl_secondary: str
    total_pnl_percent: str
    win_rate: str
    average_abs_pnl_percent: str
    max_drawdown_percent: str

    profit_by_week: list[ProfitBucketResponse] = Field(default_factory=list)
    profit_by_month: list[ProfitBucketResponse] = Field(default_factory=list)
    profit_by_pair: list[ProfitBucketResponse] = Field(default_factory=list)
    equity_curve: list[EquityPointResponse] = Field(default_factory=list)
