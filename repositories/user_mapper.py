"""
repositories/user_mapper.py
---------------------------
Translation between `User` objects and the `users` table:
bound statement parameters going in, result rows coming out.
"""

from typing import Any, Mapping

from models.user import User


def to_insert_params(user: User) -> tuple:
    """Parameters for INSERT (name, email, age). The id is store-assigned and never sent."""
    return (user.name.strip(), user.email.strip(), int(user.age))


def to_update_params(user: User) -> tuple:
    """Parameters for UPDATE ... SET name, email, age WHERE id."""
    return (*to_insert_params(user), int(user.id))


def to_id_params(user_id: int) -> tuple:
    return (int(user_id),)


def row_to_user(row: Mapping[str, Any]) -> User:
    """
    Convert a result row (keyed by column name) to a User.

    Raises:
        KeyError: If a required column is missing from the row.
    """
    return User(
        id=int(row["id"]),
        name=row["name"],
        email=row["email"],
        age=int(row["age"]),
    )
