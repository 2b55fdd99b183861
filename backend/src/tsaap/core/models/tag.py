# Tag models for organizing notes
import uuid
from typing import List

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, UniqueConstraint, event
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID


class Tag(BaseModel):
    """Tag referenced by '#name' tokens in notes."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(50), nullable=False)

    __table_args__ = (
        UniqueConstraint("name", name="uq_tags_name"),
        CheckConstraint("name = lower(name)", name="ck_tags_name_lowercase"),
        CheckConstraint("length(name) <= 50", name="ck_tags_name_len"),
        Index("idx_tags_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<Tag(name='{self.name}')>"

    @classmethod
    def normalize_name(cls, name: str) -> str:
        """Clean up tag name."""
        clean = name.strip().lower()
        if not clean:
            raise ValueError("Tag name cannot be empty")
        return clean

    def validate(self) -> List[str]:
        if not self.name or not self.name.strip():
            return ["name: must not be blank"]
        if len(self.name.strip()) > 50:
            return ["name: at most 50 characters"]
        return []


# Always store the normalized name
@event.listens_for(Tag, "before_insert", propagate=True)
def _normalize_tag_name_before_insert(mapper, connection, target: Tag):
    target.name = Tag.normalize_name(target.name)


@event.listens_for(Tag, "before_update", propagate=True)
def _normalize_tag_name_before_update(mapper, connection, target: Tag):
    target.name = Tag.normalize_name(target.name)


class NoteTag(BaseModel):
    """Links notes to tags."""

    __tablename__ = "note_tags"

    note_id: Mapped[uuid.UUID] = mapped_column(GUID(), ForeignKey("notes.id"), nullable=False)
    tag_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("tags.id", ondelete="CASCADE"), nullable=False
    )

    tag: Mapped["Tag"] = relationship("Tag", lazy="selectin")

    __table_args__ = (
        Index("idx_note_tags_note_id", "note_id"),
        Index("idx_note_tags_tag_id", "tag_id"),
    )

    def __repr__(self) -> str:
        return f"<NoteTag(note_id={self.note_id}, tag_id={self.tag_id})>"
