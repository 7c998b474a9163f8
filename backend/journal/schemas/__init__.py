# backend/journal/schemas/__init__.py
"""
Pydantic schemas for API request/response validation.

This package contains all Pydantic schemas organized by domain:
- analytics: Trade analytics snapshot (totals, buckets, equity curve)
- errors: Error response formats
- pagination: Standardized pagination for list endpoints
- trades: Trade CRUD operations
- valuation: Valuation preview for the trade entry form

Usage:
    from journal.schemas import TradeCreate, TradeResponse
    from journal.schemas import ValuationPreviewRequest, ValuationPreviewResponse
    from journal.schemas import AnalyticsResponse
    from journal.schemas import PaginationMeta
"""

from journal.schemas.analytics import (
    AnalyticsResponse,
    EquityPointResponse,
    ProfitBucketResponse,
)
from journal.schemas.errors import ErrorDetail, ValidationErrorDetail
from journal.schemas.pagination import PaginationMeta
from journal.schemas.trades import (
    TradeCreate,
    TradeListResponse,
    TradeResponse,
    TradeUpdate,
)
from journal.schemas.valuation import (
    ValuationIssueResponse,
    ValuationPreviewRequest,
    ValuationPreviewResponse,
    ValuationResultResponse,
)

__all__ = [
    # Trades
    "TradeCreate",
    "TradeUpdate",
    "TradeResponse",
    "TradeListResponse",
    # Valuation
    "ValuationPreviewRequest",
    "ValuationPreviewResponse",
    "ValuationResultResponse",
    "ValuationIssueResponse",
    # Analytics
    "AnalyticsResponse",
    "ProfitBucketResponse",
    "EquityPointResponse",
    # Common
    "ErrorDetail",
    "ValidationErrorDetail",
    "PaginationMeta",
]
