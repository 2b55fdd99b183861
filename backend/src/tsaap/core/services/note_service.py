"""Note service implementation."""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotAuthorError, require
from ..models import Bookmark, Context, Note, Tag, User
from ..note_helper import mentions_from_content, tags_from_content
from ..repositories.live_session_repository import LiveSessionRepository
from ..repositories.note_repository import NoteRepository
from ..repositories.tag_repository import TagRepository
from ..repositories.user_repository import UserRepository
from ..schemas.common import PagedResultList, PageRequest
from .interfaces import ILiveSessionService, INoteService
from .live_session_service import LiveSessionService
from .transaction import transactional

logger = logging.getLogger(__name__)


class NoteService(INoteService):
    """Note service implementation."""

    def __init__(
        self, session: AsyncSession, live_session_service: Optional[ILiveSessionService] = None
    ):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.tag_repo = TagRepository(session)
        self.user_repo = UserRepository(session)
        self.live_session_repo = LiveSessionRepository(session)
        self.live_session_service = live_session_service or LiveSessionService(session)

    @transactional
    async def add_note(
        self,
        author: User,
        content: str,
        context: Optional[Context] = None,
        fragment_tag: Optional[Tag] = None,
        parent_note: Optional[Note] = None,
    ) -> Note:
        """Add a new note.

        Tags and mentions are read from the content and, when the note belongs
        to a context, from the context description. Each distinct tag is linked
        once, find-or-creating the Tag row. Mentions of unknown usernames are
        dropped.

        Args:
            author: the author
            content: the content
            context: the context the note is attached to
            fragment_tag: the tag scoping the note inside its context
            parent_note: the note this one replies to

        Returns:
            Note: the added note
        """
        require(author is not None and bool(content), "A note needs an author and some content")

        note = Note(
            author=author,
            content=content,
            context=context,
            fragment_tag=fragment_tag,
            parent_note_id=parent_note.id if parent_note is not None else None,
        )
        await self.note_repo.save(note)
        if note.has_errors():
            return note

        tag_names = tags_from_content(content)
        usernames = mentions_from_content(content)
        description = context.description_as_note if context is not None else None
        if description:
            tag_names = _merge(tag_names, tags_from_content(description))
            usernames = _merge(usernames, mentions_from_content(description))

        for name in tag_names:
            tag = await self.tag_repo.find_or_save(name)
            if tag.has_errors():
                logger.debug(f"Skipping tag '{name}': {tag.errors}")
                continue
            await self.note_repo.add_note_tag(note, tag)

        users = {user.username: user for user in await self.user_repo.get_by_usernames(usernames)}
        for username in usernames:
            mentioned = users.get(username)
            if mentioned is None:
                logger.debug(f"Ignoring mention of unknown user '{username}'")
                continue
            await self.note_repo.add_mention(note, mentioned)

        logger.info(
            f"Note {note.id} added by {author.username} "
            f"({len(tag_names)} tags, {len(users)} mentions)"
        )
        return note

    @transactional
    async def bookmark_note_by_user(self, note: Note, user: User) -> Bookmark:
        """Bookmark a note by a user. Fails loudly if the bookmark cannot be saved."""
        require(note is not None and user is not None, "A bookmark needs a note and a user")
        bookmark = Bookmark(note_id=note.id, user_id=user.id)
        return await self.note_repo.save(bookmark, fail_on_error=True)

    @transactional
    async def unbookmark_note_by_user(self, note: Note, user: User) -> None:
        """Unbookmark a note by a given user; no-op when not bookmarked."""
        require(note is not None and user is not None, "Unbookmarking needs a note and a user")
        bookmark = await self.note_repo.find_bookmark(note, user)
        if bookmark is not None:
            await self.note_repo.delete(bookmark, flush=True)

    @transactional
    async def delete_note_by_author(self, note: Note, user: User) -> None:
        """Delete a note.

        Replies are kept and detached, then tag links, mentions, bookmarks and
        live sessions go before the note itself.
        """
        require(note is not None, "No note to delete")
        require(note.is_authored_by(user), "Only the author can delete a note", NotAuthorError)

        replies = await self.note_repo.detach_replies(note)
        await self.note_repo.delete_note_tags(note)
        await self.note_repo.delete_mentions(note)
        await self.note_repo.delete_bookmarks(note)

        live_sessions = await self.live_session_repo.find_all_for_note(note)
        for live_session in live_sessions:
            await self.live_session_service.delete_live_session_by_author(live_session, user)
        await self.live_session_repo.delete_all_for_note(note)

        note_id = note.id
        await self.note_repo.delete(note, flush=True)
        logger.info(
            f"Note {note_id} deleted by {user.username} "
            f"({replies} replies detached, {len(live_sessions)} live sessions)"
        )

    async def find_all_notes(
        self,
        user: User,
        user_notes: bool = True,
        user_favorites: bool = False,
        all_notes: bool = False,
        context: Optional[Context] = None,
        fragment_tag: Optional[Tag] = None,
        pagination: Optional[PageRequest] = None,
    ) -> PagedResultList:
        """Find all notes for the given search criteria.

        Args:
            user: the user performing the search
            user_notes: find the notes the user wrote
            user_favorites: find the notes the user bookmarked
            all_notes: find every note of the context (needs a context)
            context: restrict to this context
            fragment_tag: restrict to this fragment tag (needs a context)
            pagination: sorting and paging, newest first by default

        Returns:
            PagedResultList: the page of notes and the total match count
        """
        if context is None:
            # all is not relevant when there is no context
            all_notes = False
        if not (user_notes or user_favorites or all_notes):
            return PagedResultList.empty()

        page = pagination or PageRequest()
        if all_notes:
            notes, total = await self.note_repo.find_all_by_context(context, fragment_tag, page)
        else:
            require(user is not None, "Searching user notes needs a user")
            notes, total = await self.note_repo.find_for_user(
                user, user_notes, user_favorites, context, fragment_tag, page
            )
        return PagedResultList(items=notes, total_count=total)

    async def get_note(self, note_id) -> Optional[Note]:
        return await self.note_repo.get_by_id(note_id)

    async def tags_for_note(self, note: Note) -> List[Tag]:
        return await self.note_repo.tags_for_note(note)

    async def mentions_for_note(self, note: Note) -> List[User]:
        return await self.note_repo.mentions_for_note(note)


def _merge(first: List[str], second: List[str]) -> List[str]:
    return list(dict.fromkeys(first + second))
