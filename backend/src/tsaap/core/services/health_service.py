"""Health checks: the API is healthy when its database answers."""

import time
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ... import __version__
from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService


class HealthService(IHealthService):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_health_status(self) -> HealthCheckResponse:
        database = await self.check_database_health()
        return HealthCheckResponse(
            status=database["status"],
            version=__version__,
            checks={"database": database},
        )

    async def check_database_health(self) -> Dict[str, Any]:
        """Round trip a trivial query and time it."""
        started = time.perf_counter()
        try:
            await self.session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            return {"connected": False, "status": "unhealthy", "error": str(exc)}
        return {
            "connected": True,
            "status": "healthy",
            "response_time_ms": round((time.perf_counter() - started) * 1000, 2),
        }
