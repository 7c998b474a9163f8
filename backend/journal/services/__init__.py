# backend/journal/services/__init__.py
"""
Service layer for business logic.

This package contains the service layer which encapsulates business logic
separate from the API (router) layer. Services:
- Have NO knowledge of HTTP (no HTTPException, no status codes)
- Return issues or raise domain-specific exceptions
- Receive configuration as parameters (never import journal.config)
- Are easily testable without a database

Usage:
    from journal.services import ValuationService, AnalyticsService
    from journal.services import TradeValidationError, TradeNotFoundError

Architecture:
    services/
    ├── __init__.py                  # This file - main exports
    ├── exceptions.py                # Domain exceptions
    ├── constants.py                 # Business constants and limits
    ├── valuation/                   # Trade valuation engine
    │   ├── service.py               # value_trade() and ValuationService
    │   ├── types.py                 # Config, inputs, issues, results
    │   ├── validation.py            # Coercion and bracket checks
    │   └── calculators.py           # P&L, risk/reward, position size
    └── analytics/                   # Performance analytics
        ├── service.py               # summarize() and AnalyticsService
        ├── types.py                 # Snapshot and series types
        ├── performance.py           # Win rate, drawdown
        └── series.py                # Week/month/pair buckets, equity curve
"""

from journal.services.analytics import AnalyticsService, summarize
from journal.services.exceptions import (
    NotFoundError,
    ServiceError,
    TradeNotFoundError,
    TradeValidationError,
    ValidationError,
)
from journal.services.valuation import ValuationService, value_trade

__all__ = [
    # ==========================================================================
    # Services
    # ==========================================================================
    "ValuationService",
    "AnalyticsService",
    "value_trade",
    "summarize",

    # ==========================================================================
    # Exceptions
    # ==========================================================================
    "ServiceError",
    "ValidationError",
    "TradeValidationError",
    "NotFoundError",
    "TradeNotFoundError",
]
