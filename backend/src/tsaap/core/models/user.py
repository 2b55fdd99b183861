"""
User account model.
"""

import re
from typing import List

from sqlalchemy import Boolean, CheckConstraint, Index, String, event, inspect
from sqlalchemy.orm import Mapped, mapped_column

from ...security.password import hash_password
from .base import BaseModel

# same token grammar as an @mention in note content
USERNAME_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*$")
USERNAME_MAX_LENGTH = 50


class User(BaseModel):
    """User account; disabled until activated when e-mail checking is on."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # hashed by the mapper hooks below
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    __table_args__ = (
        CheckConstraint("length(username) <= 50", name="ck_users_username_len"),
        CheckConstraint(
            "first_name IS NULL OR length(first_name) <= 100", name="ck_users_first_name_len"
        ),
        CheckConstraint(
            "last_name IS NULL OR length(last_name) <= 100", name="ck_users_last_name_len"
        ),
        Index("idx_users_username", "username"),
        Index("idx_users_enabled", "enabled"),
    )

    def __repr__(self) -> str:
        return f"<User(username='{self.username}')>"

    @property
    def display_name(self) -> str:
        """Get display name."""
        full = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full if full else self.username

    def validate(self) -> List[str]:
        errors = []
        if (
            not self.username
            or len(self.username) > USERNAME_MAX_LENGTH
            or not USERNAME_PATTERN.match(self.username)
        ):
            errors.append("username: up to 50 word characters, single '.' or '-' between them")
        if not self.email or "@" not in self.email or len(self.email) > 255:
            errors.append("email: not a valid e-mail address")
        if not self.password:
            errors.append("password: must not be blank")
        for field in ("first_name", "last_name"):
            value = getattr(self, field)
            if value is not None and len(value) > 100:
                errors.append(f"{field}: at most 100 characters")
        return errors


# Passwords never reach the database in clear text
@event.listens_for(User, "before_insert", propagate=True)
def _encode_password_before_insert(mapper, connection, target: User):
    target.password = hash_password(target.password)


@event.listens_for(User, "before_update", propagate=True)
def _encode_password_before_update(mapper, connection, target: User):
    if inspect(target).attrs.password.history.has_changes():
        target.password = hash_password(target.password)
