# Discussion contexts notes are attached to
import uuid
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .user import User


class Context(BaseModel):
    """A question or discussion thread that notes hang off."""

    __tablename__ = "contexts"

    context_name: Mapped[str] = mapped_column(String(1024), nullable=False)
    url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    # parsed for tags and mentions like note content
    description_as_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    owner: Mapped["User"] = relationship("User", lazy="selectin")

    __table_args__ = (Index("idx_contexts_owner_id", "owner_id"),)

    def __repr__(self) -> str:
        return f"<Context(context_name='{self.context_name}')>"

    def validate(self) -> List[str]:
        if not self.context_name or not self.context_name.strip():
            return ["context_name: must not be blank"]
        return []
