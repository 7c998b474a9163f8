# backend/journal/schemas/trades.py
"""
Pydantic schemas for Trade validation.

These schemas define:
- What data clients must send (Create)
- What data clients can update (Update)
- What data the API returns (Response)

Validation layers:
- Schema: types, lengths, normalization (direction aliases, pair case)
- Valuation engine: required prices, positivity, stop/target bracket
  (reported as 400 TradeValidationError with the issue kind)
- Router: ownership

Price and size fields only carry the storage precision limits (NUMERIC(18, 8),
risk percent NUMERIC(9, 4)); positivity and bracket ordering are left to the
valuation engine, the single place that decides whether a trade is consistent.

IMPORTANT: All financial values use Decimal for precision.
Never use float for money!
"""

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from journal.models import EmotionalState, TradeDirection
from journal.schemas.pagination import PaginationMeta
from journal.services.constants import DEFAULT_PAIR
from journal.services.valuation.validation import to_direction

MAX_NOTES_LENGTH = 5000

# Match the trades table columns so stored values equal validated values
PRICE_MAX_DIGITS = 18
PRICE_DECIMAL_PLACES = 8
RISK_PERCENT_MAX_DIGITS = 9
RISK_PERCENT_DECIMAL_PLACES = 4


# =============================================================================
# SHARED VALIDATORS
# =============================================================================

def normalize_direction(v: object) -> object:
    """Map "buy"/"sell" (any case) onto long/short; leave anything else to pydantic."""
    return to_direction(v) or v


def normalize_occurred_at(v: datetime) -> datetime:
    """Treat naive timestamps as UTC and reject future trades."""
    if v.tzinfo is None:
        v = v.replace(tzinfo=timezone.utc)

    current_time = datetime.now(timezone.utc)
    if v > current_time:
        raise ValueError(f"Trade time cannot be in the future (sent: {v}, now: {current_time})")
    return v


def normalize_pair(v: str) -> str:
    v = v.strip().upper()
    if not v:
        raise ValueError("Pair cannot be empty")
    return v


# =============================================================================
# CREATE SCHEMA
# =============================================================================

class TradeCreate(BaseModel):
    """
    Schema for logging a new trade.

    Derived fields (P&L, risk/reward, suggested size) are computed by the
    valuation engine and cannot be supplied by the client.
    """

    pair: str = Field(
        default=DEFAULT_PAIR,
        min_length=1,
        max_length=16,
        description="Instrument label",
        examples=["XAUUSD"]
    )

    direction: TradeDirection = Field(
        ...,
        description="long/short (buy/sell accepted as aliases)",
        examples=["long", "short", "buy", "sell"]
    )

    entry_price: Decimal | None = Field(
        default=None,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        description="Entry price (required, must be positive)",
        examples=["2050.00"]
    )

    exit_price: Decimal | None = Field(
        default=None,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        description="Exit price (required, must be positive)",
        examples=["2055.00"]
    )

    position_size: Decimal | None = Field(
        default=None,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        description="Position size in lots (required, must be positive)",
        examples=["0.10"]
    )

    stop_loss: Decimal | None = Field(
        default=None,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        description="Stop-loss price (optional)",
        examples=["2045.00"]
    )

    take_profit: Decimal | None = Field(
        default=None,
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
        description="Take-profit price (optional)",
        examples=["2060.00"]
    )

    risk_percent: Decimal | None = Field(
        default=None,
        max_digits=RISK_PERCENT_MAX_DIGITS,
        decimal_places=RISK_PERCENT_DECIMAL_PLACES,
        description="Percent of the reference balance risked (optional)",
        examples=["2"]
    )

    notes: str | None = Field(
        default=None,
        max_length=MAX_NOTES_LENGTH,
        description="Free-text journal notes"
    )

    emotional_state: EmotionalState = Field(
        default=EmotionalState.CALM,
        description="State of mind when the trade was taken"
    )

    occurred_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the trade happened (defaults to now)",
        examples=["2024-01-08T14:30:00Z"]
    )

    @field_validator('direction', mode='before')
    @classmethod
    def validate_direction(cls, v: object) -> object:
        return normalize_direction(v)

    @field_validator('occurred_at')
    @classmethod
    def validate_occurred_at(cls, v: datetime) -> datetime:
        return normalize_occurred_at(v)

    @field_validator('pair')
    @classmethod
    def validate_pair(cls, v: str) -> str:
        return normalize_pair(v)


# =============================================================================
# UPDATE SCHEMA
# =============================================================================

class TradeUpdate(BaseModel):
    """
    Schema for updating an existing trade.

    All fields are optional; only the fields sent are changed. Sending null
    for stop_loss, take_profit or risk_percent clears it. The merged trade
    is re-validated and re-valued.
    """

    pair: str | None = Field(default=None, min_length=1, max_length=16)
    direction: TradeDirection | None = Field(default=None)
    entry_price: Decimal | None = Field(
        default=None, max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES
    )
    exit_price: Decimal | None = Field(
        default=None, max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES
    )
    position_size: Decimal | None = Field(
        default=None, max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES
    )
    stop_loss: Decimal | None = Field(
        default=None, max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES
    )
    take_profit: Decimal | None = Field(
        default=None, max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES
    )
    risk_percent: Decimal | None = Field(
        default=None, max_digits=RISK_PERCENT_MAX_DIGITS, decimal_places=RISK_PERCENT_DECIMAL_PLACES
    )
    notes: str | None = Field(default=None, max_length=MAX_NOTES_LENGTH)
    emotional_state: EmotionalState | None = Field(default=None)
    occurred_at: datetime | None = Field(default=None)

    @field_validator('direction', mode='before')
    @classmethod
    def validate_direction(cls, v: object) -> object:
        return normalize_direction(v)

    @field_validator('occurred_at')
    @classmethod
    def validate_occurred_at(cls, v: datetime | None) -> datetime | None:
        if v is None:
            return None
        return normalize_occurred_at(v)

    @field_validator('pair')
    @classmethod
    def validate_pair(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return normalize_pair(v)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class TradeResponse(BaseModel):
    """
    Schema for API responses.

    Decimal values are serialized as strings to preserve precision.
    """

    id: int = Field(..., description="Unique identifier")
    pair: str
    direction: TradeDirection
    entry_price: Decimal
    exit_price: Decimal
    position_size: Decimal
    stop_loss: Decimal | None
    take_profit: Decimal | None
    risk_percent: Decimal | None
    contract_size: Decimal = Field(..., description="Contract multiplier the trade was valued with")

    pnl_quote: Decimal = Field(..., description="P&L in quote currency (USD)")
    pnl_secondary: Decimal = Field(..., description="P&L in secondary currency (IDR)")
    pnl_percent: Decimal = Field(..., description="P&L relative to notional, in percent")
    risk_reward_ratio: Decimal | None = Field(..., description="Reward/risk distance (None if undefined)")
    suggested_position_size: Decimal | None = Field(..., description="Advisory size for the risk budget")

    notes: str | None
    emotional_state: EmotionalState
    occurred_at: datetime
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TradeListResponse(BaseModel):
    """
    Response schema for paginated trade history.

    Attributes:
        items: Trades for the current page
        pagination: Pagination metadata with computed fields
    """

    items: list[TradeResponse] = Field(..., description="Trades for current page")
    pagination: PaginationMeta = Field(..., description="Pagination metadata")
