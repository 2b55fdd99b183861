"""Tag repository for database operations."""

from typing import Optional

from sqlalchemy import select

from ..models.tag import Tag
from .base import BaseRepository


class TagRepository(BaseRepository):
    """Repository for tag database operations."""

    async def get_by_name(self, name: str) -> Optional[Tag]:
        stmt = select(Tag).where(Tag.name == Tag.normalize_name(name))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_or_save(self, name: str) -> Tag:
        """Get tag by name, saving a new one when missing.

        A rejected new tag is returned unsaved with its errors set.
        """
        tag = await self.get_by_name(name)
        if tag is not None:
            return tag
        return await self.save(Tag(name=Tag.normalize_name(name)))
