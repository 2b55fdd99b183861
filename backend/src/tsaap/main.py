# FastAPI application: routers, middleware and service error translation
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api import accounts_router, health_router, notes_router
from .config import get_settings
from .core.exceptions import ContractViolation, NotAuthorError, PersistenceError
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.schemas.common import ErrorResponse
from .database import create_tables, dispose_engine

setup_logging()
logger = get_logger("main")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Starting Tsaap notes",
        extra={"version": __version__, "environment": settings.environment},
    )

    # tests wire their own database
    if os.getenv("TSAAP_SKIP_LIFESPAN_DB") != "1":
        try:
            await create_tables()
        except Exception:
            logger.exception("Could not create the database schema")
            raise
        logger.info("Database schema ready")

    yield

    await dispose_engine()
    logger.info("Tsaap notes stopped")


app = FastAPI(
    title="Tsaap Notes",
    description="Notes, tags, mentions and bookmarks on discussion contexts",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, exc: Exception, details=None) -> JSONResponse:
    body = ErrorResponse(error=type(exc).__name__, message=str(exc), details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@app.exception_handler(NotAuthorError)
async def not_author_handler(request: Request, exc: NotAuthorError):
    logger.warning(f"Refused {request.method} {request.url.path}: {exc}")
    return _error(403, exc)


@app.exception_handler(ContractViolation)
async def contract_violation_handler(request: Request, exc: ContractViolation):
    logger.warning(f"Precondition failed on {request.method} {request.url.path}: {exc}")
    return _error(400, exc)


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    return _error(409, exc, details={"errors": exc.errors})


app.include_router(accounts_router, prefix="/api")
app.include_router(notes_router, prefix="/api")
app.include_router(health_router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "Tsaap Notes API", "version": __version__}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("tsaap.main:app", host=settings.host, port=settings.port, reload=settings.reload)
