"""
Service layer errors.

ContractViolation is raised before any mutation when a precondition does not
hold. PersistenceError is raised by saves that must fail loudly; other saves
record their messages on ``instance.errors`` instead.
"""

from typing import List, Optional


class TsaapError(Exception):
    """Base error for the service layer."""


class ContractViolation(TsaapError):
    """A service precondition was not met."""


class NotAuthorError(ContractViolation):
    """The requesting user is not the author of the resource."""


class PersistenceError(TsaapError):
    """A save configured to fail on error did not go through."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


def require(condition: bool, message: str, error: type = ContractViolation) -> None:
    """Raise ``error`` unless ``condition`` holds."""
    if not condition:
        raise error(message)
