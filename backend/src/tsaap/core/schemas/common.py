"""
Shared schemas - pagination, paged results, errors
"""

from datetime import datetime, timezone
from typing import Any, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar('T')

# sortable note columns; dateCreated is the legacy name of created_at
SORTABLE_FIELDS = {
    "created_at": "created_at",
    "dateCreated": "created_at",
    "updated_at": "updated_at",
    "lastUpdated": "updated_at",
    "content": "content",
}


class PageRequest(BaseModel):
    """Pagination and sorting of a list query."""

    sort: str = Field(default="created_at", description="Column to sort on")
    order: Literal["asc", "desc"] = Field(default="desc", description="Sort direction")
    max: Optional[int] = Field(default=None, ge=1, description="Page size, None for no limit")
    offset: int = Field(default=0, ge=0, description="Rows to skip")

    @field_validator("sort")
    @classmethod
    def validate_sort(cls, v):
        """Map to a sortable column name."""
        if v not in SORTABLE_FIELDS:
            raise ValueError(f"Cannot sort on '{v}'")
        return SORTABLE_FIELDS[v]

    @field_validator("order", mode="before")
    @classmethod
    def normalize_order(cls, v):
        return v.lower() if isinstance(v, str) else v


class PagedResultList(BaseModel, Generic[T]):
    """One page of rows plus the total number of matching rows."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    items: List[T] = Field(default_factory=list)
    total_count: int = 0

    @classmethod
    def empty(cls) -> "PagedResultList[T]":
        return cls(items=[], total_count=0)


class PaginationResponse(BaseModel, Generic[T]):
    """Pagination wrapper for API responses"""

    items: List[T]
    total: int
    offset: int
    max: Optional[int]
    has_next: bool

    @classmethod
    def create(
        cls,
        items: List[T],
        total: int,
        offset: int,
        max: Optional[int]
    ) -> "PaginationResponse[T]":
        return cls(
            items=items,
            total=total,
            offset=offset,
            max=max,
            has_next=offset + len(items) < total,
        )


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str = Field(description="Error type")
    message: str = Field(description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Error timestamp"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "NotAuthorError",
                "message": "Only the author can delete a note",
                "details": None,
                "timestamp": "2025-09-13T17:23:45Z"
            }
        }
    )


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = Field(description="Application version")
    checks: dict[str, dict[str, Any]] = Field(description="Individual component health checks")
