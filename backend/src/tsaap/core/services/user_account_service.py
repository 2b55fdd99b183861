"""User account service implementation."""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import require
from ..models import ActivationKey, Role, User
from ..repositories.activation_key_repository import ActivationKeyRepository
from ..repositories.role_repository import RoleRepository
from ..repositories.user_repository import UserRepository
from .interfaces import IUserAccountService
from .transaction import transactional

logger = logging.getLogger(__name__)


class UserAccountService(IUserAccountService):
    """User account service implementation.

    Saves that fail validation do not raise: the messages end up on
    ``user.errors`` and callers check ``user.has_errors()``.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.role_repo = RoleRepository(session)
        self.activation_key_repo = ActivationKeyRepository(session)

    @transactional
    async def add_user(
        self,
        user: User,
        main_role: Role,
        enabled: bool = False,
        check_email_account: bool = False,
    ) -> User:
        """Add a new user.

        Args:
            user: the user to be added
            main_role: the main role for the user
            enabled: whether the account starts enabled
            check_email_account: create an activation key to confirm the e-mail

        Returns:
            User: the user, with errors set when it was rejected
        """
        user.enabled = enabled
        await self.user_repo.save(user)
        if user.has_errors():
            logger.info(f"User '{user.username}' rejected: {user.errors}")
            return user

        await self.role_repo.grant(user, main_role)
        if check_email_account:
            await self.activation_key_repo.create_for_user(user)
            logger.debug(f"Activation key created for user {user.id}")
        logger.info(f"User '{user.username}' added with role {main_role.role_name}")
        return user

    @transactional
    async def update_user(self, user: User, main_role: Role) -> User:
        """Update the user; main_role replaces the user's roles when not already held."""
        await self.user_repo.save(user)
        if user.has_errors():
            return user
        if await self.role_repo.get_user_role(user.id, main_role.id) is None:
            await self.role_repo.revoke_all(user)
            await self.role_repo.grant(user, main_role)
            logger.info(f"User '{user.username}' main role set to {main_role.role_name}")
        return user

    @transactional
    async def enable_user(self, user: User) -> User:
        user.enabled = True
        await self.user_repo.save(user)
        logger.info(f"User '{user.username}' enabled")
        return user

    @transactional
    async def disable_user(self, user: User) -> User:
        user.enabled = False
        await self.user_repo.save(user)
        logger.info(f"User '{user.username}' disabled")
        return user

    @transactional
    async def enable_user_with_activation_key(
        self, user: User, activation_key: ActivationKey
    ) -> User:
        """Consume the activation key of a pending user and enable them."""
        require(
            user is not None
            and not user.enabled
            and activation_key is not None
            and activation_key.belongs_to(user),
            "The activation key must belong to the disabled user",
        )
        await self.activation_key_repo.delete(activation_key, flush=True)
        user.enabled = True
        await self.user_repo.save(user)
        logger.info(f"User '{user.username}' activated")
        return user

    @transactional
    async def update_password_for_user(self, new_password: str, user: User) -> User:
        """Set a new password; it is hashed when the user is flushed."""
        user.password = new_password
        await self.user_repo.save(user)
        return user

    async def find_activation_key(self, key: str) -> Optional[ActivationKey]:
        return await self.activation_key_repo.get_by_key(key)

    async def find_activation_key_for_user(self, user: User) -> Optional[ActivationKey]:
        return await self.activation_key_repo.get_for_user(user)

    @transactional
    async def find_or_create_role(self, role_name: str) -> Role:
        return await self.role_repo.find_or_create(role_name)

    async def roles_for_user(self, user: User) -> List[Role]:
        return await self.role_repo.roles_for_user(user)
