# backend/journal/routers/valuation.py
"""
Trade valuation preview endpoint.

POST /valuation/preview values raw trade inputs without storing anything.
The trade entry form calls it as the user types to show P&L, risk/reward
and the suggested position size, and to block submission on invalid input.

An invalid combination is a normal outcome here (200 with `issue` set),
not an error; only malformed requests (422) and a missing owner (401)
fail.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from journal.config import settings
from journal.dependencies import get_current_owner, get_valuation_service
from journal.middleware.rate_limit import limiter, RATE_LIMIT_DEFAULT
from journal.schemas.valuation import (
    ValuationIssueResponse,
    ValuationPreviewRequest,
    ValuationPreviewResponse,
    ValuationResultResponse,
)
from journal.services.valuation import (
    TradeInputs,
    TradeValidationIssue,
    ValuationService,
    ValuedTrade,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/valuation",
    tags=["Valuation"],
)


# =============================================================================
# MAPPING HELPERS
# =============================================================================

def _map_issue(issue: TradeValidationIssue) -> ValuationIssueResponse:
    return ValuationIssueResponse(
        kind=issue.kind.value,
        message=issue.message,
        field=issue.field,
    )


def _map_valuation(valued: ValuedTrade) -> ValuationResultResponse:
    return ValuationResultResponse(
        pnl_quote=valued.pnl_quote,
        pnl_secondary=valued.pnl_secondary,
        pnl_percent=valued.pnl_percent,
        notional=valued.notional,
        risk_reward_ratio=valued.risk_reward_ratio,
        risk_distance=valued.risk_distance,
        reward_distance=valued.reward_distance,
        suggested_position_size=valued.suggested_position_size,
        contract_multiplier=valued.contract_multiplier,
        notices=[_map_issue(n) for n in valued.notices],
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post(
    "/preview",
    response_model=ValuationPreviewResponse,
    summary="Preview a trade valuation",
    response_description="Derived fields, or the issue blocking valuation"
)
@limiter.limit(RATE_LIMIT_DEFAULT)
def preview_valuation(
        request: Request,
        preview: ValuationPreviewRequest,
        owner_id: Annotated[str, Depends(get_current_owner)],
        valuation_service: Annotated[ValuationService, Depends(get_valuation_service)],
) -> ValuationPreviewResponse:
    """
    Value raw trade inputs without persisting them.

    - **valid=true**: `valuation` holds P&L (quote, secondary, percent),
      risk/reward and suggested position size; `notices` flags a stop at
      entry (risk/reward and sizing undefined)
    - **valid=false**: `issue` holds the kind (missing_field,
      bracket_invalid), message and field
    """
    outcome = valuation_service.value(TradeInputs(
        direction=preview.direction,
        entry_price=preview.entry_price,
        exit_price=preview.exit_price,
        position_size=preview.position_size,
        stop_loss=preview.stop_loss,
        take_profit=preview.take_profit,
        risk_percent=preview.risk_percent,
    ))

    if isinstance(outcome, TradeValidationIssue):
        return ValuationPreviewResponse(
            valid=False,
            quote_currency=settings.quote_currency,
            secondary_currency=settings.secondary_currency,
            issue=_map_issue(outcome),
        )

    return ValuationPreviewResponse(
        valid=True,
        quote_currency=settings.quote_currency,
        secondary_currency=settings.secondary_currency,
        valuation=_map_valuation(outcome),
    )
