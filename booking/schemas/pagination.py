from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of a list endpoint plus the total number of matching rows."""

    items: list[T]
    total: int = Field(..., ge=0, description="Total number of matching items")
    page: int = Field(..., ge=1, description="Page number (1-indexed)")
    page_size: int = Field(..., ge=1, description="Number of items per page")
