# backend/journal/routers/analytics.py
"""
Trade analytics endpoint.

GET /analytics/ aggregates the owner's trade history into the numbers the
analytics view displays: totals, win rate, average |P&L %|, max drawdown,
profit by week/month/pair and the equity curve.

Optional parameters:
- from_date: Inclusive start of the window (UTC date of occurred_at)
- to_date: Inclusive end of the window

The snapshot is rebuilt from the stored trades on every request; nothing
is cached or persisted.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from journal.config import settings
from journal.database import get_db
from journal.dependencies import get_analytics_service, get_current_owner
from journal.middleware.rate_limit import limiter, RATE_LIMIT_ANALYTICS
from journal.models import Trade
from journal.schemas.analytics import (
    AnalyticsResponse,
    EquityPointResponse,
    ProfitBucketResponse,
)
from journal.services.analytics import (
    AnalyticsService,
    AnalyticsSnapshot,
    EquityPoint,
    ProfitBucket,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/analytics",
    tags=["Analytics"],
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _decimal_to_str(value: Decimal | int) -> str:
    """Convert Decimal to a plain (non-exponent) string without trailing zeros."""
    if isinstance(value, int):
        value = Decimal(value)
    return format(value.normalize(), "f")


def _map_bucket(bucket: ProfitBucket) -> ProfitBucketResponse:
    return ProfitBucketResponse(
        key=bucket.key,
        label=bucket.label,
        period_start=bucket.period_start,
        pnl_quote=_decimal_to_str(bucket.pnl_quote),
        pnl_secondary=_decimal_to_str(bucket.pnl_secondary),
        trade_count=bucket.trade_count,
    )


def _map_equity_point(point: EquityPoint) -> EquityPointResponse:
    return EquityPointResponse(
        trade_number=point.trade_number,
        occurred_at=point.occurred_at,
        label=point.label,
        balance_quote=_decimal_to_str(point.balance_quote),
        balance_secondary=_decimal_to_str(point.balance_secondary),
    )


def _map_snapshot(
        snapshot: AnalyticsSnapshot,
        from_date: date | None,
        to_date: date | None,
) -> AnalyticsResponse:
    return AnalyticsResponse(
        from_date=from_date,
        to_date=to_date,
        quote_currency=settings.quote_currency,
        secondary_currency=settings.secondary_currency,
        total_trades=snapshot.total_trades,
        winning_trades=snapshot.winning_trades,
        losing_trades=snapshot.losing_trades,
        total_pnl_quote=_decimal_to_str(snapshot.total_pnl_quote),
        total_pnl_secondary=_decimal_to_str(snapshot.total_pnl_secondary),
        total_pnl_percent=_decimal_to_str(snapshot.total_pnl_percent),
        win_rate=_decimal_to_str(snapshot.win_rate),
        average_abs_pnl_percent=_decimal_to_str(snapshot.average_abs_pnl_percent),
        max_drawdown_percent=_decimal_to_str(snapshot.max_drawdown_percent),
        profit_by_week=[_map_bucket(b) for b in snapshot.profit_by_week],
        profit_by_month=[_map_bucket(b) for b in snapshot.profit_by_month],
        profit_by_pair=[_map_bucket(b) for b in snapshot.profit_by_pair],
        equity_curve=[_map_equity_point(p) for p in snapshot.equity_curve],
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get(
    "/",
    response_model=AnalyticsResponse,
    summary="Get trade analytics",
    response_description="Aggregate performance over the owner's trades"
)
@limiter.limit(RATE_LIMIT_ANALYTICS)
def get_analytics(
        request: Request,
        db: Annotated[Session, Depends(get_db)],
        owner_id: Annotated[str, Depends(get_current_owner)],
        analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
        from_date: date | None = Query(
            default=None,
            description="Inclusive start date",
            examples=["2024-01-01"]
        ),
        to_date: date | None = Query(
            default=None,
            description="Inclusive end date",
            examples=["2024-12-31"]
        ),
) -> AnalyticsResponse:
    """
    Summarize the owner's trade history.

    An owner with no trades gets an all-zero snapshot with empty series.

    Raises **400** if from_date is after to_date.
    """
    if from_date is not None and to_date is not None and from_date > to_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"from_date ({from_date}) must be on or before to_date ({to_date})",
        )

    # Chronological with id as tie-breaker; summarize() re-sorts stably anyway
    trades = db.scalars(
        select(Trade)
        .where(Trade.owner_id == owner_id)
        .order_by(Trade.occurred_at.asc(), Trade.id.asc())
    ).all()

    snapshot = analytics_service.summarize(trades, from_date=from_date, to_date=to_date)
    return _map_snapshot(snapshot, from_date, to_date)
