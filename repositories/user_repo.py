"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
All SQL queries related to the `users` table live here.
"""

from typing import Optional

import psycopg2

from db.connection import Database, dict_cursor, store_error
from models.user import User
from repositories.user_mapper import row_to_user, to_id_params, to_insert_params, to_update_params
from utils.logger import get_logger

logger = get_logger(__name__)

_SELECT_COLUMNS = "SELECT id, name, email, age FROM users"


class UserRepository:
    """
    Repository for CRUD operations on the users table.

    Every method runs in its own pooled connection, released before returning.
    Driver failures surface as StoreError; a missing row is None / False.
    """

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def create(self, user: User) -> bool:
        """
        Insert a new user. On success `user.id` is set to the store-assigned id.

        Returns:
            True if exactly one row was inserted.

        Raises:
            DuplicateEmailError: If the email is already registered.
            StoreError: On any other database failure.
        """
        sql = """
            INSERT INTO users (name, email, age)
            VALUES (%s, %s, %s)
            RETURNING id;
        """
        with self.db.connection() as conn:
            try:
                with dict_cursor(conn) as cur:
                    cur.execute(sql, to_insert_params(user))
                    row = cur.fetchone()
                    inserted = cur.rowcount == 1
                conn.commit()
            except psycopg2.Error as e:
                logger.error(f"Failed to create user: {e}")
                raise store_error("create user", e) from e

        if inserted and row:
            user.id = int(row["id"])
            logger.info(f"Created user #{user.id}")
        return inserted

    # ── READ ──────────────────────────────────────────────

    def find_by_id(self, user_id: int) -> Optional[User]:
        """
        Fetch a single user by primary key.

        Returns:
            A User object or None if not found.
        """
        sql = f"{_SELECT_COLUMNS} WHERE id = %s;"
        with self.db.connection() as conn:
            try:
                with dict_cursor(conn) as cur:
                    cur.execute(sql, to_id_params(user_id))
                    row = cur.fetchone()
            except psycopg2.Error as e:
                logger.error(f"Failed to fetch user #{user_id}: {e}")
                raise store_error("fetch user", e) from e
        return row_to_user(row) if row else None

    def find_all(self) -> list[User]:
        """
        Fetch every user, in the store's default order.

        Returns:
            List of User objects (empty when the table is empty).
        """
        sql = f"{_SELECT_COLUMNS};"
        with self.db.connection() as conn:
            try:
                with dict_cursor(conn) as cur:
                    cur.execute(sql)
                    rows = cur.fetchall()
            except psycopg2.Error as e:
                logger.error(f"Failed to list users: {e}")
                raise store_error("list users", e) from e
        return [row_to_user(r) for r in rows or []]

    # ── UPDATE ────────────────────────────────────────────

    def update(self, user: User) -> bool:
        """
        Update name, email and age of an existing user.

        Args:
            user: User with updated fields (must have a positive id).

        Returns:
            True if a row was updated, False if the id does not exist.

        Raises:
            ValueError: If the user has no positive id.
        """
        if not user.is_persisted():
            raise ValueError(f"Cannot update a user without a positive id (got {user.id!r})")

        sql = """
            UPDATE users
            SET name = %s, email = %s, age = %s
            WHERE id = %s;
        """
        with self.db.connection() as conn:
            try:
                with dict_cursor(conn) as cur:
                    cur.execute(sql, to_update_params(user))
                    updated = cur.rowcount > 0
                conn.commit()
            except psycopg2.Error as e:
                logger.error(f"Failed to update user #{user.id}: {e}")
                raise store_error("update user", e) from e

        if updated:
            logger.info(f"Updated user #{user.id}")
        return updated

    # ── DELETE ────────────────────────────────────────────

    def delete(self, user_id: int) -> bool:
        """
        Delete a user by primary key.

        Returns:
            True if a row was deleted, False if the id does not exist.
        """
        sql = "DELETE FROM users WHERE id = %s;"
        with self.db.connection() as conn:
            try:
                with dict_cursor(conn) as cur:
                    cur.execute(sql, to_id_params(user_id))
                    deleted = cur.rowcount > 0
                conn.commit()
            except psycopg2.Error as e:
                logger.error(f"Failed to delete user #{user_id}: {e}")
                raise store_error("delete user", e) from e

        if deleted:
            logger.info(f"Deleted user #{user_id}")
        return deleted
