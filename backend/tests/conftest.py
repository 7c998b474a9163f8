# backend/tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Database session fixtures (in-memory SQLite)
- API client with the database dependency overridden
- Sample data factories (valued trades, analytics outcomes)
"""

import os

# Must be set before anything imports journal.config
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("APP_NAME", "Test Journal")

from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from journal.database import get_db
from journal.main import app
from journal.models import Base, EmotionalState, Trade, TradeDirection
from journal.services.analytics import TradeOutcome
from journal.services.valuation import TradeInputs, ValuationService

OWNER_ID = "trader-1"
OTHER_OWNER_ID = "trader-2"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def db(db_engine) -> Iterator[Session]:
    """Create a database session for testing."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def client(db: Session) -> Iterator[TestClient]:
    """Create TestClient with database dependency override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


def owner_headers(owner_id: str = OWNER_ID) -> dict[str, str]:
    """Headers the auth gateway would add for an authenticated trader."""
    return {"X-Owner-ID": owner_id}


# =============================================================================
# SAMPLE DATA FACTORIES
# =============================================================================

def trade_payload(**overrides) -> dict:
    """
    JSON body for POST /trades/.

    Defaults to the canonical long: 2050 -> 2055, 0.10 lots, stop 2045,
    target 2060, 2% risk.
    """
    payload = {
        "pair": "XAUUSD",
        "direction": "long",
        "entry_price": "2050",
        "exit_price": "2055",
        "position_size": "0.10",
        "stop_loss": "2045",
        "take_profit": "2060",
        "risk_percent": "2",
        "notes": "Breakout above Asian range",
        "emotional_state": "calm",
        "occurred_at": "2024-01-08T14:30:00Z",
    }
    payload.update(overrides)
    return {k: v for k, v in payload.items() if v is not None}


def seed_trade(
        db: Session,
        owner_id: str = OWNER_ID,
        direction: TradeDirection = TradeDirection.LONG,
        entry_price: str = "2050",
        exit_price: str = "2055",
        position_size: str = "0.10",
        stop_loss: str | None = None,
        take_profit: str | None = None,
        risk_percent: str | None = None,
        occurred_at: datetime | None = None,
        notes: str | None = None,
        pair: str = "XAUUSD",
) -> Trade:
    """Value a trade with the default constants and store it directly."""
    valued = ValuationService().value_or_raise(TradeInputs(
        direction=direction,
        entry_price=entry_price,
        exit_price=exit_price,
        position_size=position_size,
        stop_loss=stop_loss,
        take_profit=take_profit,
        risk_percent=risk_percent,
    ))

    trade = Trade(
        owner_id=owner_id,
        pair=pair,
        direction=valued.direction,
        entry_price=valued.entry_price,
        exit_price=valued.exit_price,
        position_size=valued.position_size,
        stop_loss=valued.stop_loss,
        take_profit=valued.take_profit,
        risk_percent=valued.risk_percent,
        notes=notes,
        emotional_state=EmotionalState.CALM,
        occurred_at=occurred_at or datetime(2024, 1, 8, 14, 30, tzinfo=timezone.utc),
        **valued.derived_fields(),
    )
    db.add(trade)
    db.commit()
    db.refresh(trade)
    return trade


def outcome(
        occurred_at: datetime,
        pnl_quote: str,
        pnl_percent: str = "0",
        pair: str = "XAUUSD",
        rate: str = "15500",
) -> TradeOutcome:
    """Factory for analytics inputs; pnl_secondary follows the fixed rate."""
    pnl = Decimal(pnl_quote)
    return TradeOutcome(
        occurred_at=occurred_at,
        pnl_quote=pnl,
        pnl_secondary=pnl * Decimal(rate),
        pnl_percent=Decimal(pnl_percent),
        pair=pair,
    )


def utc(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> datetime:
    """Shorthand for an aware UTC timestamp."""
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)
