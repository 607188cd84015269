"""
handlers/user_handler.py
------------------------
Handles the user management commands.
Delegates all logic to UserService (found in ``context.bot_data``).

Commands:
    /adduser <name> | <email> | <age>
    /users
    /user <id>
    /updateuser <id> | <name> | <email> | <age>
    /deleteuser <id> [confirm]
"""

from typing import Optional

from telegram import Update
from telegram.ext import ContextTypes

from errors import DuplicateEmailError, StoreError, ValidationError
from models.user import User
from services.user_service import UserService
from utils.formatters import format_user, format_user_list
from utils.logger import get_logger

logger = get_logger(__name__)

SERVICE_KEY = "user_service"

ADD_USAGE = "⚠️ Usage: /adduser <name> | <email> | <age>\nExample: /adduser Juan | juan@test.com | 25"
UPDATE_USAGE = (
    "⚠️ Usage: /updateuser <id> | <name> | <email> | <age>\n"
    "Example: /updateuser 1 | Juan P. | juanp@test.com | 26"
)


class InputError(ValueError):
    """The command text could not be parsed; the message is shown to the user."""


def _service(context: ContextTypes.DEFAULT_TYPE) -> UserService:
    return context.bot_data[SERVICE_KEY]


def _split_fields(args: list[str]) -> list[str]:
    """Join the command arguments and split them on '|'."""
    return [part.strip() for part in " ".join(args).split("|")]


def _parse_int(raw: str, error: str) -> int:
    try:
        return int(raw.strip())
    except (ValueError, AttributeError):
        raise InputError(error) from None


def _parse_id(args: list[str], usage: str) -> int:
    if not args:
        raise InputError(usage)
    return _parse_int(args[0], "⚠️ The user ID must be a whole number.")


def _parse_user(fields: list[str], user_id: Optional[int] = None) -> User:
    name, email, age_raw = fields
    if not age_raw:
        raise InputError("⚠️ Age cannot be empty. Please enter a number.")
    age = _parse_int(age_raw, "⚠️ Age must be a number.")
    return User(name=name, email=email, age=age, id=user_id)


async def _reply_error(update: Update, action: str, exc: Exception) -> None:
    if isinstance(exc, ValidationError):
        await update.message.reply_text(f"⚠️ Validation error: {exc.message}")
    elif isinstance(exc, DuplicateEmailError):
        await update.message.reply_text("⚠️ A user with that email already exists. Please use a different email.")
    else:
        logger.error(f"Store failure while trying to {action}: {exc}")
        await update.message.reply_text(f"❌ Database error while trying to {action}. Please try again later.")


async def add_user_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /adduser <name> | <email> | <age>."""
    fields = _split_fields(context.args)
    if len(fields) != 3:
        await update.message.reply_text(ADD_USAGE)
        return

    try:
        user = _parse_user(fields)
        created = _service(context).create_user(user)
    except InputError as e:
        await update.message.reply_text(str(e))
        return
    except (ValidationError, StoreError) as e:
        await _reply_error(update, "create the user", e)
        return

    if created:
        await update.message.reply_text(f"✅ User created successfully!\n\n{format_user(user)}")
    else:
        await update.message.reply_text("❌ The user could not be created.")


async def list_users_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /users - list every user."""
    try:
        users = _service(context).get_all_users()
    except StoreError as e:
        await _reply_error(update, "list users", e)
        return
    await update.message.reply_text(format_user_list(users))


async def get_user_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /user <id> - show one user."""
    try:
        user_id = _parse_id(context.args, "⚠️ Usage: /user <id>\nExample: /user 1")
        user = _service(context).get_user(user_id)
    except InputError as e:
        await update.message.reply_text(str(e))
        return
    except (ValidationError, StoreError) as e:
        await _reply_error(update, "find the user", e)
        return

    if user is None:
        await update.message.reply_text(f"🔍 No user found with ID {user_id}.")
        return
    await update.message.reply_text(format_user(user))


async def update_user_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /updateuser <id> | <name> | <email> | <age>.
    The user is looked up first so a missing id gets a clear message.
    """
    fields = _split_fields(context.args)
    if len(fields) != 4:
        await update.message.reply_text(UPDATE_USAGE)
        return

    service = _service(context)
    try:
        user_id = _parse_int(fields[0], "⚠️ The user ID must be a whole number.")
        if service.get_user(user_id) is None:
            await update.message.reply_text(f"🔍 No user exists with ID {user_id}.")
            return
        user = _parse_user(fields[1:], user_id=user_id)
        updated = service.update_user(user)
    except InputError as e:
        await update.message.reply_text(str(e))
        return
    except (ValidationError, StoreError) as e:
        await _reply_error(update, "update the user", e)
        return

    if updated:
        await update.message.reply_text(f"✅ User updated successfully!\n\n{format_user(user)}")
    else:
        await update.message.reply_text("❌ The user could not be updated.")


async def delete_user_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /deleteuser <id> [confirm].
    Without `confirm` the user is shown and the command must be repeated.
    """
    service = _service(context)
    try:
        user_id = _parse_id(context.args, "⚠️ Usage: /deleteuser <id>\nExample: /deleteuser 1")
        user = service.get_user(user_id)
        if user is None:
            await update.message.reply_text(f"🔍 No user exists with ID {user_id}.")
            return

        confirmed = len(context.args) > 1 and context.args[1].lower() == "confirm"
        if not confirmed:
            await update.message.reply_text(
                f"{format_user(user)}\n\n"
                f"⚠️ Are you sure you want to delete this user? This cannot be undone.\n"
                f"Send /deleteuser {user_id} confirm to proceed."
            )
            return

        deleted = service.delete_user(user_id)
    except InputError as e:
        await update.message.reply_text(str(e))
        return
    except (ValidationError, StoreError) as e:
        await _reply_error(update, "delete the user", e)
        return

    if deleted:
        logger.info(f"User #{user_id} deleted from chat")
        await update.message.reply_text("🗑️ User deleted successfully.")
    else:
        await update.message.reply_text("❌ The user could not be deleted.")
