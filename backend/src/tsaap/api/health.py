"""Health endpoints for load balancers and monitoring."""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import HealthCheckResponse
from ..core.services import HealthService
from ..database import get_db_session

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", response_model=HealthCheckResponse)
async def health_check(session: AsyncSession = Depends(get_db_session)):
    """Overall status; 503 when the database is unreachable."""
    health = await HealthService(session).get_health_status()
    if health.status != "healthy":
        return JSONResponse(status_code=503, content=health.model_dump(mode="json"))
    return health


@router.get("/database", response_model=Dict[str, Any])
async def database_health(session: AsyncSession = Depends(get_db_session)):
    return await HealthService(session).check_database_health()
