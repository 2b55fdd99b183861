"""
Note schemas.

API contracts for adding, listing, bookmarking and deleting notes.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import PaginationResponse


class NoteCreate(BaseModel):
    """Note creation request schema."""

    content: str = Field(min_length=1, description="Note content, may embed #tags and @mentions")
    context_id: Optional[uuid.UUID] = Field(default=None, description="Context of the note")
    fragment_tag: Optional[str] = Field(
        default=None, max_length=50, description="Tag scoping the note inside its context"
    )
    parent_note_id: Optional[uuid.UUID] = Field(default=None, description="Note replied to")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        """Validate content is not blank."""
        if len(v.strip()) == 0:
            raise ValueError("Content cannot be empty")
        return v

    @field_validator("fragment_tag")
    @classmethod
    def normalize_fragment_tag(cls, v):
        if v is None:
            return v
        v = v.strip().lstrip("#").lower()
        return v or None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "content": "Nice proof, see #induction @alice",
                "context_id": "123e4567-e89b-12d3-a456-426614174000",
                "fragment_tag": "question1",
            }
        }
    )


class NoteResponse(BaseModel):
    """Note response schema."""

    id: uuid.UUID
    content: str
    author_id: uuid.UUID
    author_username: Optional[str] = None
    context_id: Optional[uuid.UUID] = None
    fragment_tag: Optional[str] = None
    parent_note_id: Optional[uuid.UUID] = None
    tags: List[str] = Field(default_factory=list)
    mentions: List[str] = Field(default_factory=list)
    is_owned: bool = False
    created_at: datetime
    updated_at: datetime


class NoteListResponse(PaginationResponse[NoteResponse]):
    """Paginated note list response."""
    pass
