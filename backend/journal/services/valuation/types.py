# backend/journal/services/valuation/types.py
"""
Internal data types for the trade valuation engine.

These dataclasses are used by the valuation calculators. They are NOT
Pydantic schemas - those are defined in journal/schemas/valuation.py for
API serialization.

Design Principles:
- Immutable value objects (frozen=True)
- Decimal for ALL financial values (never float), no rounding inside the engine
- Undefined metrics are None, never NaN or Infinity
- Validation problems are returned as values, not raised

Type Hierarchy:
    ValuationConfig       - Injected constants (multiplier, FX rate, balance)
    TradeInputs           - Raw trade inputs as entered by the user
    ValuationIssueKind    - MISSING_FIELD / BRACKET_INVALID / DEGENERATE_RISK
    TradeValidationIssue  - A structured validation failure (or notice)
    RiskRewardResult      - Risk/reward distances and ratio
    ValuedTrade           - Complete valuation output for one trade
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Union

from journal.models import TradeDirection
from journal.services.constants import (
    DEFAULT_CONTRACT_MULTIPLIER,
    DEFAULT_QUOTE_TO_SECONDARY_RATE,
    DEFAULT_REFERENCE_BALANCE,
)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class ValuationConfig:
    """
    Constants that parameterize valuation.

    None of these are derived from trade data; they are configuration and
    are injected so the same engine can be used with other values.

    Attributes:
        contract_multiplier: Units of the underlying per lot (100 oz)
        quote_to_secondary_rate: 1 quote currency unit = X secondary units
        reference_balance: Account balance assumed for position sizing
    """

    contract_multiplier: Decimal = DEFAULT_CONTRACT_MULTIPLIER
    quote_to_secondary_rate: Decimal = DEFAULT_QUOTE_TO_SECONDARY_RATE
    reference_balance: Decimal = DEFAULT_REFERENCE_BALANCE

    @classmethod
    def from_settings(cls, settings: Any) -> ValuationConfig:
        """Build a config from the application settings object."""
        return cls(
            contract_multiplier=Decimal(settings.contract_multiplier),
            quote_to_secondary_rate=Decimal(settings.quote_to_secondary_rate),
            reference_balance=Decimal(settings.reference_account_balance),
        )


# =============================================================================
# INPUTS
# =============================================================================

@dataclass(frozen=True)
class TradeInputs:
    """
    Raw inputs for one trade, as entered on the trade form.

    Numeric fields are typed loosely on purpose: form input may arrive as
    strings, floats or Decimals, and may be missing or non-numeric. The
    engine's validation step coerces and checks them.

    Attributes:
        direction: LONG or SHORT
        entry_price: Price the position was opened at
        exit_price: Price the position was closed at
        position_size: Size in lots
        stop_loss: Optional protective stop price
        take_profit: Optional target price
        risk_percent: Optional percent of the reference balance to risk
        occurred_at: When the trade happened (ordering only, never used in math)
    """

    direction: TradeDirection
    entry_price: Any
    exit_price: Any
    position_size: Any
    stop_loss: Any = None
    take_profit: Any = None
    risk_percent: Any = None
    occurred_at: datetime | None = None


# =============================================================================
# ISSUES
# =============================================================================

class ValuationIssueKind(str, enum.Enum):
    """
    Taxonomy of valuation problems.

    MISSING_FIELD and BRACKET_INVALID block valuation. DEGENERATE_RISK is a
    notice attached to a successful valuation whose risk distance is zero.
    """
    MISSING_FIELD = "missing_field"
    BRACKET_INVALID = "bracket_invalid"
    DEGENERATE_RISK = "degenerate_risk"


@dataclass(frozen=True)
class TradeValidationIssue:
    """
    A structured validation result returned instead of raising.

    Attributes:
        kind: What went wrong
        message: Human-readable description for the presentation layer
        field: Input field the issue refers to (None for cross-field issues)
    """

    kind: ValuationIssueKind
    message: str
    field: str | None = None

    @property
    def is_blocking(self) -> bool:
        """True if this issue prevents the trade from being valued."""
        return self.kind is not ValuationIssueKind.DEGENERATE_RISK


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True)
class RiskRewardResult:
    """
    Risk/reward for a bracketed trade.

    Attributes:
        risk_distance: |entry - stop| (None if out of the Decimal range)
        reward_distance: |target - entry| (None if out of the Decimal range)
        ratio: reward / risk, or None when risk_distance is zero or undefined
    """

    risk_distance: Decimal | None
    reward_distance: Decimal | None
    ratio: Decimal | None


@dataclass(frozen=True)
class ValuedTrade:
    """
    Complete valuation output for one trade.

    Attributes:
        direction: Trade direction
        entry_price / exit_price / position_size: Validated inputs
        stop_loss / take_profit / risk_percent: Validated optional inputs
        pnl_quote: Profit/loss in quote currency (USD)
        pnl_secondary: Profit/loss in the secondary currency (IDR)
        pnl_percent: pnl_quote relative to notional, in percent
        notional: entry_price x position_size x contract_multiplier
        risk_reward_ratio: reward/risk (None if no bracket or zero risk)
        suggested_position_size: Advisory lot size for the risk budget
        risk_distance / reward_distance: Bracket distances (None without bracket)
        contract_multiplier: Multiplier the trade was valued with
        notices: Non-blocking issues (DEGENERATE_RISK)

    Note:
        suggested_position_size is advisory. The user may store a different
        position_size; valuation always uses the confirmed position_size.
    """

    direction: TradeDirection
    entry_price: Decimal
    exit_price: Decimal
    position_size: Decimal
    stop_loss: Decimal | None
    take_profit: Decimal | None
    risk_percent: Decimal | None
    pnl_quote: Decimal
    pnl_secondary: Decimal
    pnl_percent: Decimal
    notional: Decimal
    risk_reward_ratio: Decimal | None
    suggested_position_size: Decimal | None
    risk_distance: Decimal | None
    reward_distance: Decimal | None
    contract_multiplier: Decimal
    notices: tuple[TradeValidationIssue, ...] = field(default_factory=tuple)

    @property
    def is_win(self) -> bool:
        """True if the trade made money in quote currency."""
        return self.pnl_quote > Decimal("0")

    @property
    def has_degenerate_risk(self) -> bool:
        """True if the stop sits exactly at entry."""
        return any(n.kind is ValuationIssueKind.DEGENERATE_RISK for n in self.notices)

    def derived_fields(self) -> dict[str, Decimal | None]:
        """
        Fields to merge back into a persisted trade record.

        Keys match the column names of journal.models.Trade.
        """
        return {
            "pnl_quote": self.pnl_quote,
            "pnl_secondary": self.pnl_secondary,
            "pnl_percent": self.pnl_percent,
            "risk_reward_ratio": self.risk_reward_ratio,
            "suggested_position_size": self.suggested_position_size,
            "contract_size": self.contract_multiplier,
        }


ValuationOutcome = Union[ValuedTrade, TradeValidationIssue]
