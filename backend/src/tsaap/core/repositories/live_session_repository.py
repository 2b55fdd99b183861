"""Live session repository for database operations."""

from typing import List

from sqlalchemy import delete, select

from ..models.live_session import LiveSession, LiveSessionResponse
from ..models.note import Note
from .base import BaseRepository


class LiveSessionRepository(BaseRepository):
    """Repository for live sessions and their responses."""

    async def find_all_for_note(self, note: Note) -> List[LiveSession]:
        stmt = (
            select(LiveSession)
            .where(LiveSession.note_id == note.id)
            .order_by(LiveSession.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def delete_all_for_note(self, note: Note) -> int:
        stmt = delete(LiveSession).where(LiveSession.note_id == note.id)
        result = await self.session.execute(stmt)
        return result.rowcount

    async def delete_responses(self, live_session: LiveSession) -> int:
        stmt = delete(LiveSessionResponse).where(
            LiveSessionResponse.live_session_id == live_session.id
        )
        result = await self.session.execute(stmt)
        return result.rowcount
