"""
Service interfaces for the Tsaap notes backend.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..models import (
    ActivationKey,
    Bookmark,
    Context,
    LiveSession,
    LiveSessionResponse,
    Note,
    Role,
    Tag,
    User,
)
from ..schemas.common import HealthCheckResponse, PagedResultList, PageRequest


class INoteService(ABC):
    """Notes, their tags, mentions and bookmarks."""

    @abstractmethod
    async def add_note(
        self,
        author: User,
        content: str,
        context: Optional[Context] = None,
        fragment_tag: Optional[Tag] = None,
        parent_note: Optional[Note] = None,
    ) -> Note:
        """Add a note, linking the tags and mentions found in it."""
        pass

    @abstractmethod
    async def bookmark_note_by_user(self, note: Note, user: User) -> Bookmark:
        """Bookmark a note for a user."""
        pass

    @abstractmethod
    async def unbookmark_note_by_user(self, note: Note, user: User) -> None:
        """Remove a user's bookmark on a note, if any."""
        pass

    @abstractmethod
    async def delete_note_by_author(self, note: Note, user: User) -> None:
        """Delete a note and the rows depending on it."""
        pass

    @abstractmethod
    async def find_all_notes(
        self,
        user: User,
        user_notes: bool = True,
        user_favorites: bool = False,
        all_notes: bool = False,
        context: Optional[Context] = None,
        fragment_tag: Optional[Tag] = None,
        pagination: Optional[PageRequest] = None,
    ) -> PagedResultList:
        """Find notes matching the search flags."""
        pass


class IUserAccountService(ABC):
    """User account lifecycle."""

    @abstractmethod
    async def add_user(
        self,
        user: User,
        main_role: Role,
        enabled: bool = False,
        check_email_account: bool = False,
    ) -> User:
        """Add a new user."""
        pass

    @abstractmethod
    async def update_user(self, user: User, main_role: Role) -> User:
        """Update a user and their main role."""
        pass

    @abstractmethod
    async def enable_user(self, user: User) -> User:
        """Enable a user."""
        pass

    @abstractmethod
    async def disable_user(self, user: User) -> User:
        """Disable a user."""
        pass

    @abstractmethod
    async def enable_user_with_activation_key(
        self, user: User, activation_key: ActivationKey
    ) -> User:
        """Enable a pending user by consuming their activation key."""
        pass

    @abstractmethod
    async def update_password_for_user(self, new_password: str, user: User) -> User:
        """Change a user's password."""
        pass


class ILiveSessionService(ABC):
    """Live sessions run on notes."""

    @abstractmethod
    async def create_live_session(self, note: Note) -> LiveSession:
        """Create a not yet started session."""
        pass

    @abstractmethod
    async def start(self, live_session: LiveSession) -> LiveSession:
        """Start a session."""
        pass

    @abstractmethod
    async def stop(self, live_session: LiveSession) -> LiveSession:
        """End a session."""
        pass

    @abstractmethod
    async def create_response(
        self,
        live_session: LiveSession,
        user: User,
        answer_as_string: str,
        percent_credit: Optional[float] = None,
    ) -> LiveSessionResponse:
        """Record a user's answer."""
        pass

    @abstractmethod
    async def delete_live_session_by_author(self, live_session: LiveSession, user: User) -> None:
        """Tear down what depends on a session before it is removed."""
        pass


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        pass
