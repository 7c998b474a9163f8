# backend/journal/dependencies.py
"""
FastAPI dependencies shared by the routers.

- Process-wide services (stateless, built lazily on first use)
- The calling owner, from the gateway's X-Owner-ID header
- Owner-scoped trade lookup for the /trades/{trade_id} routes
"""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from journal.config import settings
from journal.database import get_db
from journal.models import Trade
from journal.services.analytics.service import AnalyticsService
from journal.services.exceptions import TradeNotFoundError
from journal.services.valuation.service import ValuationService
from journal.services.valuation.types import ValuationConfig
from journal.utils.context import set_owner_id

logger = logging.getLogger(__name__)

OWNER_ID_HEADER = "X-Owner-ID"
MAX_OWNER_ID_LENGTH = 128


@lru_cache(maxsize=1)
def get_valuation_config() -> ValuationConfig:
    return ValuationConfig.from_settings(settings)


@lru_cache(maxsize=1)
def get_valuation_service() -> ValuationService:
    logger.debug("Creating ValuationService")
    return ValuationService(config=get_valuation_config())


@lru_cache(maxsize=1)
def get_analytics_service() -> AnalyticsService:
    logger.debug("Creating AnalyticsService")
    return AnalyticsService()


async def get_current_owner(
    owner_id: Annotated[str | None, Header(alias=OWNER_ID_HEADER)] = None,
) -> str:
    """
    Owner of the request, as asserted by the upstream auth gateway.

    The value is opaque here; it only scopes which trades are visible.
    Async so set_owner_id() lands in the request's own context and the
    owner appears on its log records.

    Raises:
        HTTPException 401: Header missing, blank, or longer than MAX_OWNER_ID_LENGTH
    """
    owner_id = (owner_id or "").strip()
    if not owner_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {OWNER_ID_HEADER} header",
        )
    if len(owner_id) > MAX_OWNER_ID_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"{OWNER_ID_HEADER} exceeds {MAX_OWNER_ID_LENGTH} characters",
        )

    set_owner_id(owner_id)
    return owner_id


def get_trade_with_owner_check(
    trade_id: int,
    db: Annotated[Session, Depends(get_db)],
    owner_id: Annotated[str, Depends(get_current_owner)],
) -> Trade:
    """
    Load one of the caller's trades.

    Another owner's trade raises the same TradeNotFoundError as a missing
    one.
    """
    trade = db.scalar(
        select(Trade).where(Trade.id == trade_id, Trade.owner_id == owner_id)
    )
    if trade is None:
        raise TradeNotFoundError(trade_id)
    return trade
