"""API routers for the Tsaap notes backend."""

from .accounts import router as accounts_router
from .health import router as health_router
from .notes import router as notes_router

__all__ = ["accounts_router", "notes_router", "health_router"]
