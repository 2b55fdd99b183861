"""
Database models for the Tsaap notes backend.

SQLAlchemy ORM models describing the relational schema. All models share
BaseModel (UUID primary key, created/updated timestamps) and are used
through async sessions.

Models included:
    - User, Role, UserRole, ActivationKey: accounts and authorities
    - Context: discussion thread notes are attached to
    - Note, NoteMention, Bookmark: notes and the rows hanging off them
    - Tag, NoteTag: '#tag' classification of notes
    - LiveSession, LiveSessionResponse: real-time sessions run on a note
"""

from .activation_key import ActivationKey
from .base import BaseModel
from .context import Context
from .live_session import LiveSession, LiveSessionResponse, LiveSessionStatus
from .note import Bookmark, Note, NoteMention
from .role import Role, RoleEnum, UserRole
from .tag import NoteTag, Tag
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Role",
    "RoleEnum",
    "UserRole",
    "ActivationKey",
    "Context",
    "Note",
    "NoteMention",
    "Bookmark",
    "Tag",
    "NoteTag",
    "LiveSession",
    "LiveSessionResponse",
    "LiveSessionStatus",
]
