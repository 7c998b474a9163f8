# backend/journal/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain-specific errors and contain NO HTTP knowledge.
The global handlers in main.py map them to HTTP responses.

The valuation engine itself never raises: it returns a TradeValidationIssue
value. TradeValidationError wraps such an issue for callers that prefer
exception flow (the API layer).

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    │   └── TradeValidationError
    └── NotFoundError
        └── TradeNotFoundError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from journal.services.valuation.types import TradeValidationIssue


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError):
    """
    Raised when input validation fails.

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class TradeValidationError(ValidationError):
    """
    Raised when trade inputs fail the valuation engine's validation.

    Attributes:
        issue: The structured issue returned by the engine
        kind: Issue kind value ("missing_field", "bracket_invalid")
    """

    def __init__(self, issue: TradeValidationIssue) -> None:
        self.issue = issue
        self.kind = issue.kind.value
        super().__init__(issue.message, field=issue.field)


# =============================================================================
# NOT FOUND ERRORS
# =============================================================================


class NotFoundError(ServiceError):
    """
    Base exception for resource not found errors.

    Attributes:
        resource_type: Type of resource (e.g., "Trade")
        resource_id: Identifier of the resource
    """

    def __init__(
            self,
            message: str,
            resource_type: str | None = None,
            resource_id: int | str | None = None,
    ) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(message)


class TradeNotFoundError(NotFoundError):
    """
    Raised when a trade cannot be found for the requesting owner.

    Trades owned by someone else are reported the same way, so their
    existence is not disclosed.
    """

    def __init__(self, trade_id: int) -> None:
        self.trade_id = trade_id
        super().__init__(
            f"Trade {trade_id} not found",
            resource_type="Trade",
            resource_id=trade_id,
        )
