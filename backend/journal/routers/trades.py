# backend/journal/routers/trades.py
"""
Trade journal endpoints.

Provides CRUD operations for logged trades. Every write goes through the
valuation engine: the raw inputs are validated and the derived fields
(P&L, risk/reward, suggested size) are recomputed and stored with the trade.

Key concepts:
- Each trade belongs to ONE owner (X-Owner-ID header)
- Derived fields are never accepted from the client
- Invalid inputs are rejected with 400 and the engine's issue kind
- Other owners' trades are reported as 404
"""

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from journal.database import get_db
from journal.dependencies import (
    get_current_owner,
    get_trade_with_owner_check,
    get_valuation_service,
)
from journal.middleware.rate_limit import limiter, RATE_LIMIT_DEFAULT, RATE_LIMIT_WRITE
from journal.models import Trade, TradeDirection
from journal.schemas.pagination import PaginationMeta
from journal.schemas.trades import (
    TradeCreate,
    TradeListResponse,
    TradeResponse,
    TradeUpdate,
)
from journal.services.constants import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT, MAX_SEARCH_LENGTH
from journal.services.valuation import TradeInputs, ValuationService, ValuedTrade
from journal.utils.sql import LIKE_ESCAPE_CHAR, escape_like_pattern

logger = logging.getLogger(__name__)

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(
    prefix="/trades",
    tags=["Trades"],
)

# Inputs the valuation engine reads
VALUATION_FIELDS = (
    "direction",
    "entry_price",
    "exit_price",
    "position_size",
    "stop_loss",
    "take_profit",
    "risk_percent",
)

# Columns that cannot be cleared with an explicit null on update
NON_NULLABLE_FIELDS = ("pair", "emotional_state", "occurred_at")


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def apply_valuation(trade: Trade, valued: ValuedTrade) -> None:
    """Copy validated inputs and derived fields onto a trade row."""
    trade.direction = valued.direction
    trade.entry_price = valued.entry_price
    trade.exit_price = valued.exit_price
    trade.position_size = valued.position_size
    trade.stop_loss = valued.stop_loss
    trade.take_profit = valued.take_profit
    trade.risk_percent = valued.risk_percent

    for column, value in valued.derived_fields().items():
        setattr(trade, column, value)


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post(
    "/",
    response_model=TradeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a new trade",
    response_description="The logged trade with its derived fields"
)
@limiter.limit(RATE_LIMIT_WRITE)
def create_trade(
        request: Request,
        trade: TradeCreate,
        db: Annotated[Session, Depends(get_db)],
        owner_id: Annotated[str, Depends(get_current_owner)],
        valuation_service: Annotated[ValuationService, Depends(get_valuation_service)],
) -> Trade:
    """
    Validate, value and store a trade.

    - **direction**: long/short (buy/sell accepted)
    - **entry_price / exit_price / position_size**: required, positive
    - **stop_loss / take_profit**: optional; when both are set they must
      bracket the entry price in the trade's direction
    - **risk_percent**: optional; used for the suggested position size

    **Errors:**
    - 400: Missing/non-positive value or invalid stop/target bracket
    - 401: Missing X-Owner-ID header
    """
    # Domain exceptions propagate to global handlers in main.py
    valued = valuation_service.value_or_raise(TradeInputs(
        direction=trade.direction,
        entry_price=trade.entry_price,
        exit_price=trade.exit_price,
        position_size=trade.position_size,
        stop_loss=trade.stop_loss,
        take_profit=trade.take_profit,
        risk_percent=trade.risk_percent,
        occurred_at=trade.occurred_at,
    ))

    db_trade = Trade(
        owner_id=owner_id,
        pair=trade.pair,
        notes=trade.notes,
        emotional_state=trade.emotional_state,
        occurred_at=trade.occurred_at,
    )
    apply_valuation(db_trade, valued)

    db.add(db_trade)
    db.commit()
    db.refresh(db_trade)

    logger.info(f"Trade {db_trade.id} recorded: {valued.direction.value} pnl={valued.pnl_quote}")
    return db_trade


@router.get(
    "/",
    response_model=TradeListResponse,
    summary="List trades",
    response_description="Trades matching the filters"
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def list_trades(
        request: Request,
        db: Annotated[Session, Depends(get_db)],
        owner_id: Annotated[str, Depends(get_current_owner)],
        search: str | None = Query(
            default=None,
            max_length=MAX_SEARCH_LENGTH,
            description="Case-insensitive match on pair or notes"
        ),
        direction: TradeDirection | None = Query(
            default=None,
            description="Filter by direction (long/short)"
        ),
        order: Literal["asc", "desc"] = Query(
            default="desc",
            description="Sort by occurred_at (desc = newest first)"
        ),
        skip: int = Query(default=0, ge=0, description="Number of records to skip"),
        limit: int = Query(
            default=DEFAULT_LIST_LIMIT, ge=1, le=MAX_LIST_LIMIT,
            description="Maximum records to return"
        ),
) -> TradeListResponse:
    """
    Retrieve the owner's trade history.

    Supports filtering by free-text **search** (pair or notes) and
    **direction**, ordering by time, and pagination with **skip**/**limit**.
    """
    query = select(Trade).where(Trade.owner_id == owner_id)

    if search:
        pattern = f"%{escape_like_pattern(search.strip())}%"
        query = query.where(or_(
            Trade.pair.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
            Trade.notes.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
        ))

    if direction is not None:
        query = query.where(Trade.direction == direction)

    # id as tie-breaker keeps entry order for equal timestamps
    if order == "asc":
        query = query.order_by(Trade.occurred_at.asc(), Trade.id.asc())
    else:
        query = query.order_by(Trade.occurred_at.desc(), Trade.id.desc())

    total = db.scalar(select(func.count()).select_from(query.subquery()))
    trades = db.scalars(query.offset(skip).limit(limit)).all()

    return TradeListResponse(
        items=[TradeResponse.model_validate(t) for t in trades],
        pagination=PaginationMeta.create(total=total, skip=skip, limit=limit),
    )


@router.get(
    "/{trade_id}",
    response_model=TradeResponse,
    summary="Get a trade by ID",
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def get_trade(
        request: Request,
        trade: Annotated[Trade, Depends(get_trade_with_owner_check)],
) -> Trade:
    """
    Retrieve a single trade.

    Raises **404** if the trade does not exist or belongs to someone else.
    """
    return trade


@router.patch(
    "/{trade_id}",
    response_model=TradeResponse,
    summary="Update a trade",
    response_description="The updated, re-valued trade"
)
@limiter.limit(RATE_LIMIT_WRITE)
def update_trade(
        request: Request,
        trade_update: TradeUpdate,
        db_trade: Annotated[Trade, Depends(get_trade_with_owner_check)],
        db: Annotated[Session, Depends(get_db)],
        valuation_service: Annotated[ValuationService, Depends(get_valuation_service)],
) -> Trade:
    """
    Update an existing trade (partial update).

    Only the provided fields change. The merged inputs are re-validated and
    the derived fields recomputed; if the result is invalid nothing is saved.

    Raises **400** for invalid inputs, **404** if the trade is not yours.
    """
    update_data = trade_update.model_dump(exclude_unset=True)
    for name in NON_NULLABLE_FIELDS:
        if name in update_data and update_data[name] is None:
            del update_data[name]

    merged = {
        name: update_data.get(name, getattr(db_trade, name))
        for name in VALUATION_FIELDS
    }
    valued = valuation_service.value_or_raise(TradeInputs(
        **merged,
        occurred_at=update_data.get("occurred_at", db_trade.occurred_at),
    ))

    for name, value in update_data.items():
        if name not in VALUATION_FIELDS:
            setattr(db_trade, name, value)
    apply_valuation(db_trade, valued)

    db.commit()
    db.refresh(db_trade)

    logger.info(f"Trade {db_trade.id} updated: fields={sorted(update_data)}")
    return db_trade


@router.delete(
    "/{trade_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a trade",
)
@limiter.limit(RATE_LIMIT_WRITE)
def delete_trade(
        request: Request,
        db_trade: Annotated[Trade, Depends(get_trade_with_owner_check)],
        db: Annotated[Session, Depends(get_db)],
) -> None:
    """
    Delete a trade permanently.

    Raises **404** if the trade does not exist or belongs to someone else.
    """
    trade_id = db_trade.id
    db.delete(db_trade)
    db.commit()

    logger.info(f"Trade {trade_id} deleted")
    return None
