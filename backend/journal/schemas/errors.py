# backend/journal/schemas/errors.py
"""
Error bodies returned by the global exception handlers in main.py.

Every non-2xx response carries the same three keys so the trade form can
show `message` and branch on `error` (and, for rejected trades, on
`details.kind`).
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Body of 400/401/404/429/5xx responses."""

    error: str = Field(
        ...,
        description="Error class, e.g. 'TradeValidationError' or 'NotFoundError'"
    )
    message: str = Field(..., description="Text to show the trader")
    details: dict | None = Field(
        default=None,
        description="Structured context such as {'kind', 'field'} or {'trade_id'}"
    )


class ValidationErrorDetail(BaseModel):
    """Body of 422 responses: one entry per rejected request field."""

    error: str = Field(default="ValidationError")
    message: str = Field(default="Request validation failed")
    details: list[dict] = Field(
        ...,
        description="Entries of {'field', 'message', 'type'}"
    )
