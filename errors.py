"""
errors.py
---------
Exception taxonomy shared by every layer.

    UserDeskError
    ├── ValidationError          bad caller input, never reaches the store
    └── StoreError               connectivity / statement failure
        ├── DuplicateEmailError  unique constraint on users.email
        └── StoreNotInitializedError

"Not found" is deliberately not an exception: repositories return None/False.
"""

from enum import Enum
from typing import Optional


class ValidationReason(str, Enum):
    """Why a candidate user was rejected. The value is a user-facing message."""
    INVALID_ID = "User ID must be greater than 0"
    EMPTY_NAME = "Name cannot be empty"
    EMPTY_EMAIL = "Email cannot be empty"
    INVALID_EMAIL_FORMAT = "Email must contain '@'"
    AGE_TOO_LOW = "Age must be greater than 0"
    AGE_TOO_HIGH = "Age cannot be greater than 150"


class UserDeskError(Exception):
    """Base class for all application errors."""


class ValidationError(UserDeskError):
    """Caller-supplied data violates a business rule."""

    def __init__(self, reason: ValidationReason):
        super().__init__(reason.value)
        self.reason = reason

    @property
    def message(self) -> str:
        return self.reason.value


class StoreError(UserDeskError):
    """
    The store could not be reached or rejected a statement.

    Attributes:
        cause: The original driver exception (also chained as __cause__).
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class DuplicateEmailError(StoreError):
    """Insert or update hit the unique constraint on users.email."""


class StoreNotInitializedError(StoreError):
    """A connection was requested before the pool was opened (or after it was closed)."""


class ResourceReleaseWarning(RuntimeWarning):
    """Releasing a cursor or connection failed after the operation had concluded."""
