# backend/journal/schemas/pagination.py
"""
Pagination block for the trade history list.

The client sends skip/limit; the response echoes them with the total match
count and the derived page numbers the history table needs for its
previous/next buttons.

Usage:
    pagination=PaginationMeta.create(total=total, skip=skip, limit=limit)
"""

from pydantic import BaseModel, Field, computed_field


class PaginationMeta(BaseModel):
    """Offset pagination state; page fields are derived, never sent in."""

    total: int = Field(..., ge=0, description="Trades matching the filters")
    skip: int = Field(..., ge=0, description="Offset of the first returned trade")
    limit: int = Field(..., ge=1, description="Page size")

    @computed_field
    @property
    def page(self) -> int:
        """1-based page the offset falls on."""
        return self.skip // self.limit + 1

    @computed_field
    @property
    def pages(self) -> int:
        """Page count; an empty result still has one (empty) page."""
        full, remainder = divmod(self.total, self.limit)
        return max(1, full + (1 if remainder else 0))

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.total > self.skip + self.limit

    @computed_field
    @property
    def has_previous(self) -> bool:
        return self.skip > 0

    @classmethod
    def create(cls, total: int, skip: int, limit: int) -> "PaginationMeta":
        return cls(total=total, skip=skip, limit=limit)
