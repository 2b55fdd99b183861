"""Note repository for database operations."""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.sql import Select

from ..models.context import Context
from ..models.note import Bookmark, Note, NoteMention
from ..models.tag import NoteTag, Tag
from ..models.user import User
from ..schemas.common import PageRequest
from .base import BaseRepository


class NoteRepository(BaseRepository):
    """Repository for notes and their tag, mention and bookmark rows."""

    async def get_by_id(self, note_id: UUID) -> Optional[Note]:
        """Get note by ID."""
        stmt = select(Note).where(Note.id == note_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    # tags & mentions

    async def add_note_tag(self, note: Note, tag: Tag) -> NoteTag:
        note_tag = NoteTag(note_id=note.id, tag_id=tag.id)
        self.session.add(note_tag)
        await self.session.flush()
        return note_tag

    async def add_mention(self, note: Note, user: User) -> NoteMention:
        mention = NoteMention(note_id=note.id, mention_id=user.id)
        self.session.add(mention)
        await self.session.flush()
        return mention

    async def tags_for_note(self, note: Note) -> List[Tag]:
        stmt = (
            select(Tag)
            .join(NoteTag, NoteTag.tag_id == Tag.id)
            .where(NoteTag.note_id == note.id)
            .order_by(Tag.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def mentions_for_note(self, note: Note) -> List[User]:
        stmt = (
            select(User)
            .join(NoteMention, NoteMention.mention_id == User.id)
            .where(NoteMention.note_id == note.id)
            .order_by(User.username)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())

    # bookmarks

    async def find_bookmark(self, note: Note, user: User) -> Optional[Bookmark]:
        stmt = select(Bookmark).where(
            and_(Bookmark.note_id == note.id, Bookmark.user_id == user.id)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    # bulk statements used when deleting a note

    async def detach_replies(self, note: Note) -> int:
        """Set parent_note to null on every reply to note."""
        stmt = update(Note).where(Note.parent_note_id == note.id).values(parent_note_id=None)
        result = await self.session.execute(stmt)
        return result.rowcount

    async def delete_note_tags(self, note: Note) -> int:
        result = await self.session.execute(delete(NoteTag).where(NoteTag.note_id == note.id))
        return result.rowcount

    async def delete_mentions(self, note: Note) -> int:
        result = await self.session.execute(
            delete(NoteMention).where(NoteMention.note_id == note.id)
        )
        return result.rowcount

    async def delete_bookmarks(self, note: Note) -> int:
        result = await self.session.execute(delete(Bookmark).where(Bookmark.note_id == note.id))
        return result.rowcount

    # search

    async def find_all_by_context(
        self, context: Context, fragment_tag: Optional[Tag], page: PageRequest
    ) -> Tuple[List[Note], int]:
        """Every note of the context, optionally restricted to a fragment tag."""
        stmt = select(Note).where(Note.context_id == context.id)
        if fragment_tag is not None:
            stmt = stmt.where(Note.fragment_tag_id == fragment_tag.id)
        return await self._page(stmt, page)

    async def find_for_user(
        self,
        user: User,
        user_notes: bool,
        user_favorites: bool,
        context: Optional[Context],
        fragment_tag: Optional[Tag],
        page: PageRequest,
    ) -> Tuple[List[Note], int]:
        """Notes written and/or bookmarked by user, optionally within a context."""
        # the join condition keeps at most one bookmark row per note
        stmt = select(Note).outerjoin(
            Bookmark, and_(Bookmark.note_id == Note.id, Bookmark.user_id == user.id)
        )
        if context is not None:
            stmt = stmt.where(Note.context_id == context.id)
            if fragment_tag is not None:
                stmt = stmt.where(Note.fragment_tag_id == fragment_tag.id)

        criteria = []
        if user_notes:
            criteria.append(Note.author_id == user.id)
        if user_favorites:
            criteria.append(Bookmark.user_id == user.id)
        stmt = stmt.where(or_(*criteria))
        return await self._page(stmt, page)

    async def _page(self, stmt: Select, page: PageRequest) -> Tuple[List[Note], int]:
        count_stmt = select(func.count()).select_from(stmt.subquery())
        total_result = await self.session.execute(count_stmt)
        total_count = total_result.scalar()

        column = getattr(Note, page.sort)
        ordering = column.asc() if page.order == "asc" else column.desc()
        stmt = stmt.order_by(ordering, Note.id).offset(page.offset)
        if page.max is not None:
            stmt = stmt.limit(page.max)
        result = await self.session.execute(stmt)
        return list(result.scalars()), total_count
