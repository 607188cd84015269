"""
models/user.py
--------------
Domain model for a managed user (one row of the `users` table).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """
    Represents a single user record.

    Attributes:
        name: Display name (non-blank).
        email: Contact email (non-blank, contains '@', unique in the store).
        age: Age in years, 1-150.
        id: Database primary key (None for records not yet persisted).
    """
    name: str
    email: str
    age: int
    id: Optional[int] = None

    def is_persisted(self) -> bool:
        """Returns True once the store has assigned a positive id."""
        return isinstance(self.id, int) and not isinstance(self.id, bool) and self.id > 0

    def __str__(self) -> str:
        return f"User{{id={self.id}, name='{self.name}', email='{self.email}', age={self.age}}}"
