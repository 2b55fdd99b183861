"""Repository layer for data access."""

from .activation_key_repository import ActivationKeyRepository
from .base import BaseRepository
from .context_repository import ContextRepository
from .live_session_repository import LiveSessionRepository
from .note_repository import NoteRepository
from .role_repository import RoleRepository
from .tag_repository import TagRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "RoleRepository",
    "ActivationKeyRepository",
    "ContextRepository",
    "NoteRepository",
    "TagRepository",
    "LiveSessionRepository",
]
