# Note model and the rows hanging off a note
import uuid
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, Index, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .context import Context
    from .tag import Tag
    from .user import User


class Note(BaseModel):
    """Short annotated text, optionally a reply to another note."""

    __tablename__ = "notes"

    content: Mapped[str] = mapped_column(Text, nullable=False)

    author_id: Mapped[uuid.UUID] = mapped_column(GUID(), ForeignKey("users.id"), nullable=False)
    context_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        GUID(), ForeignKey("contexts.id"), nullable=True
    )
    fragment_tag_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        GUID(), ForeignKey("tags.id"), nullable=True
    )
    parent_note_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        GUID(), ForeignKey("notes.id"), nullable=True
    )

    author: Mapped["User"] = relationship("User", lazy="selectin")
    context: Mapped[Optional["Context"]] = relationship("Context", lazy="selectin")
    fragment_tag: Mapped[Optional["Tag"]] = relationship("Tag", lazy="selectin")

    __table_args__ = (
        Index("idx_notes_author_id", "author_id"),
        Index("idx_notes_context_id", "context_id"),
        Index("idx_notes_created_at", "created_at"),
        Index("idx_notes_parent_note_id", "parent_note_id"),
        Index("idx_notes_context_fragment", "context_id", "fragment_tag_id"),
    )

    def __repr__(self) -> str:
        # truncated content keeps logs readable
        content = self.content or ""
        truncated = content if len(content) <= 30 else (content[:30] + "...")
        return f"<Note(content='{truncated}', author_id={self.author_id})>"

    def is_authored_by(self, user: Optional["User"]) -> bool:
        """Check if the given user wrote this note."""
        return user is not None and self.author_id == user.id

    def validate(self) -> List[str]:
        if not self.content:
            return ["content: must not be blank"]
        return []


class NoteMention(BaseModel):
    """Links a note to a user mentioned with '@username'."""

    __tablename__ = "note_mentions"

    note_id: Mapped[uuid.UUID] = mapped_column(GUID(), ForeignKey("notes.id"), nullable=False)
    mention_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    mention: Mapped["User"] = relationship("User", lazy="selectin")

    __table_args__ = (
        Index("idx_note_mentions_note_id", "note_id"),
        Index("idx_note_mentions_mention_id", "mention_id"),
    )

    def __repr__(self) -> str:
        return f"<NoteMention(note_id={self.note_id}, mention_id={self.mention_id})>"


class Bookmark(BaseModel):
    """A user's bookmark on a note."""

    __tablename__ = "bookmarks"

    note_id: Mapped[uuid.UUID] = mapped_column(GUID(), ForeignKey("notes.id"), nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    user: Mapped["User"] = relationship("User", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("note_id", "user_id", name="uq_bookmarks_note_user"),
        Index("idx_bookmarks_note_id", "note_id"),
        Index("idx_bookmarks_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Bookmark(note_id={self.note_id}, user_id={self.user_id})>"

    def validate(self) -> List[str]:
        errors = []
        if self.note_id is None:
            errors.append("note: required")
        if self.user_id is None:
            errors.append("user: required")
        return errors
