# backend/journal/services/valuation/__init__.py
"""
Trade Valuation Package.

Turns one trade's raw inputs into its derived fields:
- P&L in quote currency, secondary currency and percent of notional
- Risk/reward ratio (when stop and target are set)
- Suggested position size for a risk budget (when stop and risk % are set)

Usage:
    from journal.services.valuation import TradeInputs, value_trade

    outcome = value_trade(TradeInputs(
        direction=TradeDirection.LONG,
        entry_price="2050",
        exit_price="2055",
        position_size="0.10",
    ))
    if isinstance(outcome, TradeValidationIssue):
        ...  # show outcome.message, block submission

Architecture:
    valuation/
    ├── __init__.py          # This file - package exports
    ├── types.py             # Config, inputs, issues, results
    ├── validation.py        # Coercion and bracket validation
    ├── calculators.py       # P&L, risk/reward, position size
    └── service.py           # value_trade() and ValuationService
"""

from journal.services.valuation.calculators import (
    PnLCalculator,
    PnLResult,
    RiskRewardCalculator,
    PositionSizeCalculator,
)
from journal.services.valuation.service import ValuationService, value_trade
from journal.services.valuation.types import (
    RiskRewardResult,
    TradeInputs,
    TradeValidationIssue,
    ValuationConfig,
    ValuationIssueKind,
    ValuationOutcome,
    ValuedTrade,
)
from journal.services.valuation.validation import validate_trade

__all__ = [
    # Entry points
    "value_trade",
    "validate_trade",
    "ValuationService",

    # Data types
    "ValuationConfig",
    "TradeInputs",
    "TradeValidationIssue",
    "ValuationIssueKind",
    "ValuationOutcome",
    "ValuedTrade",
    "RiskRewardResult",
    "PnLResult",

    # Calculators (for testing)
    "PnLCalculator",
    "RiskRewardCalculator",
    "PositionSizeCalculator",
]
