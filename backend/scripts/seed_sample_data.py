#!/usr/bin/env python3
# backend/scripts/seed_sample_data.py
"""
Seed a demo owner with a few weeks of XAUUSD trades.

Every trade goes through the valuation engine, exactly as the API does,
so the stored derived fields are consistent. Re-running is a no-op once
the demo owner has trades.

    python backend/scripts/seed_sample_data.py
"""
import logging
import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

# Setup path to import journal modules
backend_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(backend_dir))

from sqlalchemy import func, select

from journal.config import settings
from journal.database import SessionLocal
from journal.models import EmotionalState, Trade, TradeDirection
from journal.services.valuation import TradeInputs, ValuationConfig, ValuationService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEMO_OWNER_ID = "demo-trader"

# (occurred_at, direction, entry, exit, size, stop, target, emotional_state, notes)
SAMPLE_TRADES = [
    (datetime(2024, 1, 8, 9, 30, tzinfo=timezone.utc), TradeDirection.LONG,
     "2030.50", "2041.20", "0.10", "2024.00", "2045.00", EmotionalState.CALM, "London open breakout"),
    (datetime(2024, 1, 10, 14, 0, tzinfo=timezone.utc), TradeDirection.SHORT,
     "2045.00", "2049.80", "0.20", "2050.00", "2030.00", EmotionalState.FEARFUL, "Faded CPI spike too early"),
    (datetime(2024, 1, 17, 15, 45, tzinfo=timezone.utc), TradeDirection.SHORT,
     "2021.30", "2008.10", "0.10", "2028.00", "2005.00", EmotionalState.DISCIPLINED, "Retest of broken support"),
    (datetime(2024, 2, 2, 13, 30, tzinfo=timezone.utc), TradeDirection.LONG,
     "2040.00", "2036.50", "0.30", "2035.00", "2055.00", EmotionalState.OVERCONFIDENT, "NFP, sized up after win streak"),
    (datetime(2024, 2, 14, 10, 15, tzinfo=timezone.utc), TradeDirection.LONG,
     "1992.40", "2003.90", "0.15", "1986.00", "2010.00", EmotionalState.CALM, "Double bottom at 1990"),
]


def seed():
    db = SessionLocal()
    service = ValuationService(config=ValuationConfig.from_settings(settings))
    try:
        logger.info("Starting trade journal seeding...")

        existing = db.scalar(
            select(func.count()).select_from(Trade).where(Trade.owner_id == DEMO_OWNER_ID)
        )
        if existing:
            logger.info(f"Owner {DEMO_OWNER_ID} already has {existing} trades, nothing to do")
            return

        for occurred_at, direction, entry, exit_, size, stop, target, state, notes in SAMPLE_TRADES:
            valued = service.value_or_raise(TradeInputs(
                direction=direction,
                entry_price=entry,
                exit_price=exit_,
                position_size=size,
                stop_loss=stop,
                take_profit=target,
                risk_percent=Decimal("2"),
                occurred_at=occurred_at,
            ))
            db.add(Trade(
                owner_id=DEMO_OWNER_ID,
                pair=settings.default_pair,
                direction=valued.direction,
                entry_price=valued.entry_price,
                exit_price=valued.exit_price,
                position_size=valued.position_size,
                stop_loss=valued.stop_loss,
                take_profit=valued.take_profit,
                risk_percent=valued.risk_percent,
                notes=notes,
                emotional_state=state,
                occurred_at=occurred_at,
                **valued.derived_fields(),
            ))
            logger.info(f"Added {direction.value} trade on {occurred_at:%Y-%m-%d}: pnl={valued.pnl_quote}")

        db.commit()
        logger.info(f"Seeded {len(SAMPLE_TRADES)} trades for {DEMO_OWNER_ID}")

    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
