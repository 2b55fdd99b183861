"""Shared persistence helpers for repositories."""

import logging
from typing import List, TypeVar

from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import PersistenceError
from ..models.base import BaseModel

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseRepository:
    """Validates, adds and flushes instances. Never commits: services own the transaction."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def check_unique(self, instance: BaseModel) -> List[str]:
        """Uniqueness checks needing a query. Overridden per repository."""
        return []

    async def save(self, instance: ModelT, fail_on_error: bool = False) -> ModelT:
        """Persist instance unless it fails validation.

        On validation failure the messages are kept on ``instance.errors`` and
        nothing is written; with ``fail_on_error`` a PersistenceError is raised.
        """
        errors = instance.errors
        errors.clear()
        errors.extend(instance.validate())
        if not errors:
            errors.extend(await self.check_unique(instance))

        if errors:
            logger.debug(f"Rejected {instance!r}: {errors}")
            if inspect(instance).persistent:
                # pending edits must not reach the database at commit
                self.session.expunge(instance)
            if fail_on_error:
                raise PersistenceError(
                    f"Could not save {instance.__class__.__name__}", errors=errors
                )
            return instance

        self.session.add(instance)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            logger.error(f"Integrity error saving {instance.__class__.__name__}: {exc.orig}")
            raise PersistenceError(
                f"Could not save {instance.__class__.__name__}", errors=[str(exc.orig)]
            ) from exc
        return instance

    async def delete(self, instance: BaseModel, flush: bool = False) -> None:
        await self.session.delete(instance)
        if flush:
            await self.session.flush()
