"""User repository for database operations."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, func, select

from ..models.user import User
from .base import BaseRepository


class UserRepository(BaseRepository):
    """Repository for user database operations."""

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_usernames(self, usernames: List[str]) -> List[User]:
        """Get the users matching any of the given usernames."""
        if not usernames:
            return []
        stmt = select(User).where(User.username.in_(usernames))
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def is_username_taken(self, username: str, exclude_id: Optional[UUID] = None) -> bool:
        """Check if username exists on another user."""
        return await self._exists(User.username == username, exclude_id)

    async def is_email_taken(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        """Check if email exists on another user."""
        return await self._exists(User.email == email, exclude_id)

    async def check_unique(self, instance: User) -> List[str]:
        errors = []
        if await self.is_username_taken(instance.username, instance.id):
            errors.append("username: already taken")
        if await self.is_email_taken(instance.email, instance.id):
            errors.append("email: already registered")
        return errors

    async def _exists(self, condition, exclude_id: Optional[UUID]) -> bool:
        if exclude_id is not None:
            condition = and_(condition, User.id != exclude_id)
        # autoflush off: the instance being validated may already be pending
        with self.session.no_autoflush:
            result = await self.session.execute(select(func.count(User.id)).where(condition))
        return bool(result.scalar())
