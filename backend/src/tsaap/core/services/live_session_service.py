"""Live session service implementation."""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotAuthorError, require
from ..models import LiveSession, LiveSessionResponse, LiveSessionStatus, Note, User
from ..repositories.live_session_repository import LiveSessionRepository
from ..repositories.note_repository import NoteRepository
from .interfaces import ILiveSessionService
from .transaction import transactional

logger = logging.getLogger(__name__)


class LiveSessionService(ILiveSessionService):
    """Live session service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.live_session_repo = LiveSessionRepository(session)
        self.note_repo = NoteRepository(session)

    @transactional
    async def create_live_session(self, note: Note) -> LiveSession:
        require(note is not None, "A live session needs a note")
        live_session = LiveSession(note=note, status=LiveSessionStatus.NOT_STARTED.value)
        return await self.live_session_repo.save(live_session, fail_on_error=True)

    @transactional
    async def start(self, live_session: LiveSession) -> LiveSession:
        """Start a session that has not started yet."""
        require(
            live_session is not None and live_session.is_not_started(),
            "Only a not started live session can be started",
        )
        live_session.status = LiveSessionStatus.STARTED.value
        live_session.start_date = datetime.now(timezone.utc)
        return await self.live_session_repo.save(live_session, fail_on_error=True)

    @transactional
    async def stop(self, live_session: LiveSession) -> LiveSession:
        """End a started session."""
        require(
            live_session is not None and live_session.is_started(),
            "Only a started live session can be stopped",
        )
        live_session.status = LiveSessionStatus.ENDED.value
        live_session.end_date = datetime.now(timezone.utc)
        return await self.live_session_repo.save(live_session, fail_on_error=True)

    @transactional
    async def create_response(
        self,
        live_session: LiveSession,
        user: User,
        answer_as_string: str,
        percent_credit: Optional[float] = None,
    ) -> LiveSessionResponse:
        """Record the answer of a user to a started session."""
        require(user is not None, "A response needs a user")
        require(
            live_session is not None and live_session.is_started(),
            "Responses are only accepted while the session runs",
        )
        response = LiveSessionResponse(
            live_session_id=live_session.id,
            user_id=user.id,
            answer_as_string=answer_as_string,
            percent_credit=percent_credit,
        )
        return await self.live_session_repo.save(response, fail_on_error=True)

    @transactional
    async def delete_live_session_by_author(self, live_session: LiveSession, user: User) -> None:
        """Remove the responses of a session whose note was written by user.

        The session row itself is left to the caller.
        """
        require(live_session is not None and user is not None, "No live session to delete")
        note = await self.note_repo.get_by_id(live_session.note_id)
        require(
            note is not None and note.is_authored_by(user),
            "Only the author of the note can delete its live sessions",
            NotAuthorError,
        )
        deleted = await self.live_session_repo.delete_responses(live_session)
        logger.debug(f"Deleted {deleted} responses of live session {live_session.id}")

    @transactional
    async def delete_live_session(self, live_session: LiveSession, user: User) -> None:
        """Delete a session together with its responses."""
        await self.delete_live_session_by_author(live_session, user)
        await self.live_session_repo.delete(live_session, flush=True)
        logger.info(f"Live session {live_session.id} deleted by {user.username}")
