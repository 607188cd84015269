"""
services/user_service.py
------------------------
Business logic for managing users.
Each operation validates its input before touching the store, then
delegates to UserRepository. A missing user is a normal None/False
result; bad input and store failures raise.
"""

from typing import Optional

from models.user import User
from repositories.user_repo import UserRepository
from services.validators import validate_id, validate_user
from utils.logger import get_logger

logger = get_logger(__name__)


class UserService:
    """Coordinates validation and persistence for user records."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    def create_user(self, user: User) -> bool:
        """
        Validate and insert a new user. `user.id` is populated on success.

        Raises:
            ValidationError: If the data breaks a business rule.
            StoreError: If the database operation fails.
        """
        validate_user(user)
        return self.user_repo.create(user)

    def get_user(self, user_id: int) -> Optional[User]:
        """Fetch a user by id, or None if no such user exists."""
        validate_id(user_id)
        return self.user_repo.find_by_id(user_id)

    def get_all_users(self) -> list[User]:
        return self.user_repo.find_all()

    def update_user(self, user: User) -> bool:
        """
        Validate (including the id) and update an existing user.

        Returns:
            True if the user existed and was updated, False otherwise.
        """
        validate_user(user, require_id=True)
        updated = self.user_repo.update(user)
        if not updated:
            logger.info(f"Update skipped: user #{user.id} does not exist")
        return updated

    def delete_user(self, user_id: int) -> bool:
        """Delete a user by id. Returns False if there was nothing to delete."""
        validate_id(user_id)
        return self.user_repo.delete(user_id)
