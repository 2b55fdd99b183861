# Base model for database stuff
import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .types import GUID


class BaseModel(DeclarativeBase):
    """Common base for all models."""

    __abstract__ = True

    # using UUIDs everywhere
    id: Mapped[uuid.UUID] = mapped_column(
        GUID(),
        primary_key=True,
        default=uuid.uuid4,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"

    def __eq__(self, other: object) -> bool:
        """Equality by primary key if available and same mapped class.

        Two instances loaded for the same row compare equal even when they are
        different Python objects (e.g., after refresh/query).
        """
        if self is other:
            return True
        if not isinstance(other, self.__class__):
            return NotImplemented  # type: ignore[return-value]
        return getattr(self, "id", None) is not None and self.id == other.id

    __hash__ = object.__hash__

    @property
    def errors(self) -> List[str]:
        """Validation messages collected by the last save attempt."""
        return self.__dict__.setdefault("_validation_errors", [])

    def has_errors(self) -> bool:
        """True when the last save attempt was rejected."""
        return bool(self.errors)

    def validate(self) -> List[str]:
        """Field level checks run before persisting. Subclasses extend."""
        return []
