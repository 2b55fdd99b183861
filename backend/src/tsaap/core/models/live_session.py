# Real-time sessions run on a note
import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Float, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .note import Note
    from .user import User


class LiveSessionStatus(str, Enum):
    """Live session lifecycle."""

    NOT_STARTED = "NotStarted"
    STARTED = "Started"
    ENDED = "Ended"


class LiveSession(BaseModel):
    """An active real-time session tied to a note."""

    __tablename__ = "live_sessions"

    note_id: Mapped[uuid.UUID] = mapped_column(GUID(), ForeignKey("notes.id"), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=LiveSessionStatus.NOT_STARTED.value, nullable=False
    )
    start_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    note: Mapped["Note"] = relationship("Note", lazy="selectin")

    __table_args__ = (Index("idx_live_sessions_note_id", "note_id"),)

    def __repr__(self) -> str:
        return f"<LiveSession(note_id={self.note_id}, status='{self.status}')>"

    def is_not_started(self) -> bool:
        return self.status == LiveSessionStatus.NOT_STARTED.value

    def is_started(self) -> bool:
        return self.status == LiveSessionStatus.STARTED.value

    def is_ended(self) -> bool:
        return self.status == LiveSessionStatus.ENDED.value


class LiveSessionResponse(BaseModel):
    """A user's answer submitted during a live session."""

    __tablename__ = "live_session_responses"

    live_session_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("live_sessions.id"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    answer_as_string: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    percent_credit: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    user: Mapped["User"] = relationship("User", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("live_session_id", "user_id", name="uq_live_session_responses_user"),
        Index("idx_live_session_responses_session_id", "live_session_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<LiveSessionResponse(live_session_id={self.live_session_id}, user_id={self.user_id})>"
        )
