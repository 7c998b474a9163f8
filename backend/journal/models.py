# backend/journal/models.py
import enum
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Text, DateTime, Enum, Numeric, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class TradeDirection(str, enum.Enum):
    LONG = "long"    # profit when price rises
    SHORT = "short"  # profit when price falls


class EmotionalState(str, enum.Enum):
    """Trader's self-reported state of mind when the trade was taken."""
    CALM = "calm"
    EMOTIONAL = "emotional"
    OVERCONFIDENT = "overconfident"
    FEARFUL = "fearful"
    GREEDY = "greedy"
    DISCIPLINED = "disciplined"


class Trade(Base):
    """
    A single logged trade.

    Raw inputs are entered by the user; the pnl_* / risk_reward_ratio /
    suggested_position_size columns are written back from the valuation
    engine every time the inputs change and are never edited directly.

    owner_id is the opaque identity supplied by the upstream auth gateway.
    """
    __tablename__ = "trades"
    __table_args__ = (
        Index("ix_trades_owner_occurred_at", "owner_id", "occurred_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    owner_id: Mapped[str] = mapped_column(String(128), index=True)
    pair: Mapped[str] = mapped_column(String(16), default="XAUUSD")
    direction: Mapped[TradeDirection] = mapped_column(Enum(TradeDirection))

    # Raw inputs
    entry_price: Mapped[Decimal] = mapped_column(Numeric(18, 8))
    exit_price: Mapped[Decimal] = mapped_column(Numeric(18, 8))
    stop_loss: Mapped[Decimal | None] = mapped_column(Numeric(18, 8), nullable=True)
    take_profit: Mapped[Decimal | None] = mapped_column(Numeric(18, 8), nullable=True)
    position_size: Mapped[Decimal] = mapped_column(Numeric(18, 8))  # lots
    risk_percent: Mapped[Decimal | None] = mapped_column(Numeric(9, 4), nullable=True)

    # Multiplier the trade was valued with, kept so old rows stay explainable
    contract_size: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal("100"))

    # Derived (valuation engine output); wide enough for any input the
    # request schemas accept
    pnl_quote: Mapped[Decimal] = mapped_column(Numeric(38, 8), default=Decimal("0"))
    pnl_secondary: Mapped[Decimal] = mapped_column(Numeric(38, 8), default=Decimal("0"))
    pnl_percent: Mapped[Decimal] = mapped_column(Numeric(38, 8), default=Decimal("0"))
    risk_reward_ratio: Mapped[Decimal | None] = mapped_column(Numeric(38, 8), nullable=True)
    suggested_position_size: Mapped[Decimal | None] = mapped_column(Numeric(38, 8), nullable=True)

    # Journal fields
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    emotional_state: Mapped[EmotionalState] = mapped_column(
        Enum(EmotionalState), default=EmotionalState.CALM
    )

    occurred_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
