# One-time keys confirming a user's e-mail address
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .user import User


def generate_activation_key() -> str:
    return str(uuid.uuid4())


class ActivationKey(BaseModel):
    """Activation key bound to exactly one pending user."""

    __tablename__ = "activation_keys"

    activation_key: Mapped[str] = mapped_column(
        String(36), unique=True, nullable=False, default=generate_activation_key
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    user: Mapped["User"] = relationship("User", lazy="selectin")

    __table_args__ = (Index("idx_activation_keys_key", "activation_key"),)

    def __repr__(self) -> str:
        return f"<ActivationKey(user_id={self.user_id})>"

    def belongs_to(self, user: "User") -> bool:
        return user is not None and self.user_id == user.id
