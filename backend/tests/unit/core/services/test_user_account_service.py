"""UserAccountService: account lifecycle against an SQLite database."""

import pytest
from sqlalchemy import select

from src.tsaap.core.exceptions import ContractViolation
from src.tsaap.core.models import ActivationKey, User, UserRole
from src.tsaap.core.services.user_account_service import UserAccountService
from src.tsaap.security.password import verify_password


def new_user(username="jdoe", email=None, password="secret-pass", **fields):
    return User(
        username=username,
        email=email or f"{username}@example.com",
        password=password,
        **fields,
    )


@pytest.mark.asyncio
class TestAddUser:

    async def test_pending_user_gets_role_and_activation_key(self, test_session, student_role):
        service = UserAccountService(test_session)

        user = await service.add_user(new_user(), student_role, check_email_account=True)

        assert not user.has_errors()
        assert user.enabled is False
        assert await service.roles_for_user(user) == [student_role]
        key = await service.find_activation_key_for_user(user)
        assert key is not None
        assert len(key.activation_key) == 36
        assert key.belongs_to(user)

    async def test_enabled_user_without_email_check_has_no_key(
        self, test_session, teacher_role, count_rows
    ):
        user = await UserAccountService(test_session).add_user(
            new_user(), teacher_role, enabled=True
        )

        assert user.enabled is True
        assert await count_rows(ActivationKey) == 0

    async def test_activation_keys_are_unique(self, test_session, student_role):
        service = UserAccountService(test_session)
        first = await service.add_user(new_user("one"), student_role, check_email_account=True)
        second = await service.add_user(new_user("two"), student_role, check_email_account=True)

        first_key = await service.find_activation_key_for_user(first)
        second_key = await service.find_activation_key_for_user(second)

        assert first_key.activation_key != second_key.activation_key
        assert await service.find_activation_key(second_key.activation_key) == second_key

    @pytest.mark.parametrize(
        "fields",
        [
            {"username": "bad name!"},
            {"username": ""},
            {"email": "not-an-email"},
            {"password": ""},
            {"first_name": "x" * 101},
        ],
    )
    async def test_invalid_user_is_not_saved(self, test_session, student_role, count_rows, fields):
        user = new_user(**{"username": "valid", **fields})

        user = await UserAccountService(test_session).add_user(
            user, student_role, check_email_account=True
        )

        assert user.has_errors()
        assert await count_rows(User) == 0
        assert await count_rows(UserRole) == 0
        assert await count_rows(ActivationKey) == 0

    async def test_duplicate_username_and_email_are_reported(self, test_session, student_role, test_user):
        user = await UserAccountService(test_session).add_user(
            new_user("mary", email="mary@example.com"), student_role
        )

        assert "username: already taken" in user.errors
        assert "email: already registered" in user.errors

    async def test_password_is_stored_hashed(self, test_session, student_role):
        user = await UserAccountService(test_session).add_user(
            new_user(password="secret-pass"), student_role
        )

        stored = await test_session.scalar(select(User.password).where(User.id == user.id))
        assert stored != "secret-pass"
        assert verify_password("secret-pass", stored)


@pytest.mark.asyncio
class TestUpdateUser:

    async def test_new_main_role_replaces_roles(self, test_session, student_role, teacher_role):
        service = UserAccountService(test_session)
        user = await service.add_user(new_user(), student_role)

        await service.update_user(user, teacher_role)

        assert await service.roles_for_user(user) == [teacher_role]

    async def test_held_role_keeps_roles(self, test_session, roles, student_role):
        service = UserAccountService(test_session)
        user = await service.add_user(new_user(), student_role)
        admin = roles["ADMIN_ROLE"]
        await service.role_repo.grant(user, admin)
        await test_session.commit()

        await service.update_user(user, student_role)

        assert {role.role_name for role in await service.roles_for_user(user)} == {
            "ADMIN_ROLE",
            "STUDENT_ROLE",
        }

    async def test_changes_are_saved(self, test_session, student_role):
        service = UserAccountService(test_session)
        user = await service.add_user(new_user(), student_role)
        user.first_name = "John"

        await service.update_user(user, student_role)

        stored = await test_session.scalar(select(User.first_name).where(User.id == user.id))
        assert stored == "John"

    async def test_invalid_changes_are_not_saved(self, test_session, student_role, teacher_role):
        service = UserAccountService(test_session)
        user = await service.add_user(new_user(email="jdoe@example.com"), student_role)
        user_id = user.id
        user.email = "broken"

        user = await service.update_user(user, teacher_role)

        assert user.has_errors()
        stored = await test_session.scalar(select(User.email).where(User.id == user_id))
        assert stored == "jdoe@example.com"
        roles = await test_session.scalars(select(UserRole.role_id).where(UserRole.user_id == user_id))
        assert list(roles) == [student_role.id]


@pytest.mark.asyncio
class TestEnableDisable:

    async def test_enable_then_disable(self, test_session, student_role):
        service = UserAccountService(test_session)
        user = await service.add_user(new_user(), student_role)

        await service.enable_user(user)
        assert await test_session.scalar(select(User.enabled).where(User.id == user.id)) is True

        await service.disable_user(user)
        assert await test_session.scalar(select(User.enabled).where(User.id == user.id)) is False

    async def test_activation_key_enables_user_once(self, test_session, student_role, count_rows):
        service = UserAccountService(test_session)
        user = await service.add_user(new_user(), student_role, check_email_account=True)
        key = await service.find_activation_key_for_user(user)

        user = await service.enable_user_with_activation_key(user, key)

        assert user.enabled is True
        assert await count_rows(ActivationKey) == 0
        assert await service.find_activation_key(key.activation_key) is None

    async def test_activation_fails_for_enabled_user(self, test_session, student_role, count_rows):
        service = UserAccountService(test_session)
        user = await service.add_user(new_user(), student_role, check_email_account=True)
        key = await service.find_activation_key_for_user(user)
        await service.enable_user(user)

        with pytest.raises(ContractViolation):
            await service.enable_user_with_activation_key(user, key)

        assert await count_rows(ActivationKey) == 1

    async def test_activation_fails_with_key_of_another_user(
        self, test_session, student_role, count_rows
    ):
        service = UserAccountService(test_session)
        first = await service.add_user(new_user("one"), student_role, check_email_account=True)
        second = await service.add_user(new_user("two"), student_role, check_email_account=True)
        second_key = await service.find_activation_key_for_user(second)
        first_id = first.id

        with pytest.raises(ContractViolation):
            await service.enable_user_with_activation_key(first, second_key)

        assert await count_rows(ActivationKey) == 2
        assert await test_session.scalar(select(User.enabled).where(User.id == first_id)) is False

    async def test_activation_needs_a_user(self, test_session, student_role):
        service = UserAccountService(test_session)
        user = await service.add_user(new_user(), student_role, check_email_account=True)
        key = await service.find_activation_key_for_user(user)

        with pytest.raises(ContractViolation):
            await service.enable_user_with_activation_key(None, key)


@pytest.mark.asyncio
class TestUpdatePassword:

    async def test_new_password_is_hashed(self, test_session, student_role):
        service = UserAccountService(test_session)
        user = await service.add_user(new_user(password="old-secret"), student_role)
        old_hash = user.password

        await service.update_password_for_user("new-secret", user)

        stored = await test_session.scalar(select(User.password).where(User.id == user.id))
        assert stored != old_hash
        assert verify_password("new-secret", stored)
        assert not verify_password("old-secret", stored)

    async def test_blank_password_is_rejected(self, test_session, student_role):
        service = UserAccountService(test_session)
        user = await service.add_user(new_user(password="old-secret"), student_role)
        user_id = user.id

        user = await service.update_password_for_user("", user)

        assert user.has_errors()
        stored = await test_session.scalar(select(User.password).where(User.id == user_id))
        assert verify_password("old-secret", stored)
