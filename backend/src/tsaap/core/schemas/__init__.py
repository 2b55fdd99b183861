"""Pydantic schemas for paging and the HTTP API."""

from .accounts import (
    LoginRequest,
    PasswordChangeRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from .common import (
    ErrorResponse,
    HealthCheckResponse,
    PagedResultList,
    PageRequest,
    PaginationResponse,
)
from .notes import NoteCreate, NoteListResponse, NoteResponse

__all__ = [
    "PageRequest",
    "PagedResultList",
    "PaginationResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "PasswordChangeRequest",
    "UserResponse",
    "NoteCreate",
    "NoteResponse",
    "NoteListResponse",
]
