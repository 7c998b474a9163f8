# backend/journal/schemas/valuation.py
"""
Pydantic schemas for trade valuation previews.

The trade entry form asks for a preview while the user types. An invalid
combination is not an error here: the response carries the issue so the
form can show it and block submission.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from journal.models import TradeDirection
from journal.schemas.trades import (
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
    RISK_PERCENT_DECIMAL_PLACES,
    RISK_PERCENT_MAX_DIGITS,
    normalize_direction,
)


class ValuationPreviewRequest(BaseModel):
    """Raw trade inputs to value without persisting."""

    direction: TradeDirection = Field(
        ...,
        description="long/short (buy/sell accepted as aliases)"
    )
    entry_price: Decimal | None = Field(
        default=None,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        examples=["2050.00"]
    )
    exit_price: Decimal | None = Field(
        default=None,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        examples=["2055.00"]
    )
    position_size: Decimal | None = Field(
        default=None,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        examples=["0.10"]
    )
    stop_loss: Decimal | None = Field(
        default=None,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        examples=["2045.00"]
    )
    take_profit: Decimal | None = Field(
        default=None,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        examples=["2060.00"]
    )
    risk_percent: Decimal | None = Field(
        default=None,
        max_digits=RISK_PERCENT_MAX_DIGITS,
        decimal_places=RISK_PERCENT_DECIMAL_PLACES,
        examples=["2"]
    )

    @field_validator('direction', mode='before')
    @classmethod
    def validate_direction(cls, v: object) -> object:
        return normalize_direction(v)


class ValuationIssueResponse(BaseModel):
    """A validation issue or notice produced by the valuation engine."""

    model_config = ConfigDict(from_attributes=True)

    kind: str = Field(..., description="missing_field, bracket_invalid or degenerate_risk")
    message: str
    field: str | None = None


class ValuationResultResponse(BaseModel):
    """
    Derived fields for a valid trade.

    Undefined metrics (zero stop distance, missing stop/target) are null.
    """

    pnl_quote: Decimal = Field(..., description="P&L in quote currency")
    pnl_secondary: Decimal = Field(..., description="P&L in secondary currency")
    pnl_percent: Decimal = Field(..., description="P&L relative to notional, in percent")
    notional: Decimal = Field(..., description="entry_price x position_size x contract_multiplier")
    risk_reward_ratio: Decimal | None
    risk_distance: Decimal | None
    reward_distance: Decimal | None
    suggested_position_size: Decimal | None = Field(
        ...,
        description="Advisory size in lots for the requested risk percent"
    )
    contract_multiplier: Decimal
    notices: list[ValuationIssueResponse] = Field(default_factory=list)


class ValuationPreviewResponse(BaseModel):
    """
    Preview outcome: either a valuation or the issue blocking it.

    Exactly one of `valuation` and `issue` is set.
    """

    valid: bool
    quote_currency: str
    secondary_currency: str
    valuation: ValuationResultResponse | None = None
    issue: ValuationIssueResponse | None = None
