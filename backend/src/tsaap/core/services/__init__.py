"""
Service layer: interfaces and their implementations.

Every mutating service method runs in one transaction (see ``transaction``).
"""

from .interfaces import IHealthService, ILiveSessionService, INoteService, IUserAccountService
from .health_service import HealthService
from .live_session_service import LiveSessionService
from .note_service import NoteService
from .transaction import transactional
from .user_account_service import UserAccountService

__all__ = [
    # Interfaces
    "INoteService",
    "IUserAccountService",
    "ILiveSessionService",
    "IHealthService",

    # Implementations
    "NoteService",
    "UserAccountService",
    "LiveSessionService",
    "HealthService",
    "transactional",
]
