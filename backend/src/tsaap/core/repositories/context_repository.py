"""Context repository for database operations."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select

from ..models.context import Context
from .base import BaseRepository


class ContextRepository(BaseRepository):
    """Repository for context database operations."""

    async def get_by_id(self, context_id: UUID) -> Optional[Context]:
        stmt = select(Context).where(Context.id == context_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
