# backend/journal/routers/__init__.py
"""
API routers for the Trade Journal.

Each router handles a specific domain:
- trades: Trade CRUD (validated and valued on every write)
- valuation: Valuation preview for the trade entry form
- analytics: Aggregate performance over the trade history
"""

from journal.routers.analytics import router as analytics_router
from journal.routers.trades import router as trades_router
from journal.routers.valuation import router as valuation_router

__all__ = [
    "trades_router",
    "valuation_router",
    "analytics_router",
]
