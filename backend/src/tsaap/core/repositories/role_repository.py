"""Role and role assignment repository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, delete, select

from ..models.role import Role, UserRole
from ..models.user import User
from .base import BaseRepository


class RoleRepository(BaseRepository):
    """Repository for roles and user role assignments."""

    async def get_by_name(self, role_name: str) -> Optional[Role]:
        stmt = select(Role).where(Role.role_name == role_name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_or_create(self, role_name: str) -> Role:
        """Get role by name, creating it on first use."""
        role = await self.get_by_name(role_name)
        if role is None:
            role = Role(role_name=role_name)
            self.session.add(role)
            await self.session.flush()
        return role

    async def get_user_role(self, user_id: UUID, role_id: UUID) -> Optional[UserRole]:
        """Get the assignment of a role to a user, if any."""
        stmt = select(UserRole).where(
            and_(UserRole.user_id == user_id, UserRole.role_id == role_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def grant(self, user: User, role: Role) -> UserRole:
        """Assign role to user."""
        user_role = UserRole(user_id=user.id, role_id=role.id)
        self.session.add(user_role)
        await self.session.flush()
        return user_role

    async def revoke_all(self, user: User) -> int:
        """Remove every role assignment of user."""
        stmt = delete(UserRole).where(UserRole.user_id == user.id)
        result = await self.session.execute(stmt)
        return result.rowcount

    async def roles_for_user(self, user: User) -> List[Role]:
        stmt = (
            select(Role)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user.id)
            .order_by(Role.role_name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars())
