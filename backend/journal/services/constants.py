# backend/journal/services/constants.py
"""
Centralized constants for the Trade Journal services.

Single source of truth for business constants used across the application.
The valuation constants here are DEFAULTS: the running service reads the
effective values from settings (see journal/config.py) and injects them
into the valuation engine.

Usage:
    from journal.services.constants import (
        DEFAULT_CONTRACT_MULTIPLIER,
        DEFAULT_QUOTE_TO_SECONDARY_RATE,
        ZERO,
    )
"""

from decimal import Decimal


# =============================================================================
# INSTRUMENT
# =============================================================================

# The journal tracks a single instrument: spot gold vs. US dollar
DEFAULT_PAIR: str = "XAUUSD"

# Currency prices and P&L are quoted in
QUOTE_CURRENCY: str = "USD"

# Currency the journal reports converted P&L in
SECONDARY_CURRENCY: str = "IDR"


# =============================================================================
# VALUATION DEFAULTS
# =============================================================================

# Units of the underlying per standard lot (100 troy ounces for XAUUSD)
DEFAULT_CONTRACT_MULTIPLIER: Decimal = Decimal("100")

# Fixed USD -> IDR conversion; no live rate feed is used
DEFAULT_QUOTE_TO_SECONDARY_RATE: Decimal = Decimal("15500")

# Reference account balance (quote currency) used for position sizing only
DEFAULT_REFERENCE_BALANCE: Decimal = Decimal("10000")

# Pre-filled risk percent on the trade entry form
DEFAULT_RISK_PERCENT: Decimal = Decimal("2")


# =============================================================================
# ANALYTICS
# =============================================================================

# First day of a weekly bucket (Python weekday numbering: Monday=0, Sunday=6)
WEEK_START_WEEKDAY: int = 6

# strftime formats for bucket and equity point labels
WEEK_LABEL_FORMAT: str = "%b %d"
MONTH_LABEL_FORMAT: str = "%b %Y"
EQUITY_LABEL_FORMAT: str = "%b %d"


# =============================================================================
# NUMERIC HELPERS
# =============================================================================

ZERO: Decimal = Decimal("0")
HUNDRED: Decimal = Decimal("100")


# =============================================================================
# RATE LIMITING CONSTANTS
# =============================================================================
# Format follows slowapi/limits syntax: "100/minute", "10/hour", etc.

# Default rate limit for read endpoints
RATE_LIMIT_DEFAULT: str = "100/minute"

# Rate limit for write endpoints (POST, PATCH, DELETE)
RATE_LIMIT_WRITE: str = "30/minute"

# Rate limit for health check endpoints
RATE_LIMIT_HEALTH: str = "300/minute"

# Rate limit for analytics endpoints
RATE_LIMIT_ANALYTICS: str = "30/minute"


# =============================================================================
# RESOURCE LIMIT CONSTANTS
# =============================================================================

# Upper bound for the pagination limit parameter
MAX_LIST_LIMIT: int = 1000

# Default page size for trade history
DEFAULT_LIST_LIMIT: int = 100

# Maximum length of a free-text search term
MAX_SEARCH_LENGTH: int = 100
