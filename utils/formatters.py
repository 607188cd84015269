"""
utils/formatters.py
-------------------
Plain-text rendering of users for chat replies.
"""

from models.user import User

_RULE = "─" * 30


def format_user(user: User) -> str:
    return (
        f"🆔 ID: {user.id}\n"
        f"👤 Name: {user.name}\n"
        f"📧 Email: {user.email}\n"
        f"🎂 Age: {user.age}"
    )


def format_user_list(users: list[User]) -> str:
    """Listing with a total header and one block per user."""
    if not users:
        return "📭 No users registered yet."

    lines = [f"👥 USERS (Total: {len(users)})", _RULE]
    for user in users:
        lines.append(format_user(user))
        lines.append(_RULE)
    return "\n".join(lines)
