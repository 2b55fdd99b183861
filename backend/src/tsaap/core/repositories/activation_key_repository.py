"""Activation key repository for database operations."""

from typing import Optional

from sqlalchemy import select

from ..models.activation_key import ActivationKey
from ..models.user import User
from .base import BaseRepository


class ActivationKeyRepository(BaseRepository):
    """Repository for activation key database operations."""

    async def create_for_user(self, user: User) -> ActivationKey:
        """Create a new random key bound to user."""
        key = ActivationKey(user_id=user.id)
        self.session.add(key)
        await self.session.flush()
        return key

    async def get_by_key(self, activation_key: str) -> Optional[ActivationKey]:
        stmt = select(ActivationKey).where(ActivationKey.activation_key == activation_key)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_user(self, user: User) -> Optional[ActivationKey]:
        stmt = select(ActivationKey).where(ActivationKey.user_id == user.id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
