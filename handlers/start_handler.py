"""
handlers/start_handler.py
--------------------------
Handles /start and /help commands.
Shows the welcome message and the available commands.
"""

from telegram import Update
from telegram.ext import ContextTypes

from utils.logger import get_logger

logger = get_logger(__name__)

HELP_TEXT = """
📋 *User Management - Main Menu*

/adduser `<name> | <email> | <age>` - Create a user
/users - List all users
/user `<id>` - Find a user by ID
/updateuser `<id> | <name> | <email> | <age>` - Update a user
/deleteuser `<id>` - Delete a user
/help - Show this menu

Ages go from 1 to 150 and emails must contain @.
"""


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - show the welcome message and menu."""
    user = update.effective_user
    logger.info(f"Chat user {user.id if user else '?'} started the bot.")

    await update.message.reply_text(
        "👋 Welcome to the User Management System!\n"
        "CRUD over PostgreSQL, right from this chat.\n\n"
        "Send /help to see every command.",
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show all available commands."""
    await update.message.reply_text(HELP_TEXT, parse_mode="Markdown")
