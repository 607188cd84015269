"""
main.py
-------
Entry point for the UserDesk Telegram bot.

Responsibilities:
    - Load settings and configure logging.
    - Initialize the database connection pool and schema.
    - Wire repository -> service and register the Telegram handlers.
"""

from telegram import BotCommand
from telegram.ext import Application, CommandHandler

from config import Settings, load_settings
from db.connection import Database
from db.init_db import create_tables
from handlers.start_handler import help_command, start_command
from handlers.user_handler import (
    SERVICE_KEY,
    add_user_command,
    delete_user_command,
    get_user_command,
    list_users_command,
    update_user_command,
)
from repositories.user_repo import UserRepository
from services.user_service import UserService
from utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

COMMANDS = [
    ("start", start_command, "🚀 Start the bot"),
    ("help", help_command, "📖 Show the menu"),
    ("adduser", add_user_command, "➕ Create a user"),
    ("users", list_users_command, "👥 List all users"),
    ("user", get_user_command, "🔍 Find a user by ID"),
    ("updateuser", update_user_command, "✏️ Update a user"),
    ("deleteuser", delete_user_command, "🗑️ Delete a user"),
]


async def set_bot_commands(application: Application) -> None:
    """Register bot commands menu in Telegram on startup."""
    await application.bot.set_my_commands([BotCommand(name, desc) for name, _, desc in COMMANDS])
    logger.info("Bot commands menu registered successfully.")


def build_application(settings: Settings, user_service: UserService) -> Application:
    """Build the Telegram application with every handler registered."""
    if not settings.telegram_bot_token:
        raise ValueError("TELEGRAM_BOT_TOKEN is not set.")

    app = Application.builder().token(settings.telegram_bot_token).post_init(set_bot_commands).build()
    app.bot_data[SERVICE_KEY] = user_service
    for name, callback, _ in COMMANDS:
        app.add_handler(CommandHandler(name, callback))
    return app


def main() -> None:
    """Initialize and run the bot."""
    settings = load_settings()
    configure_logging(settings.log_level)

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    database = Database(settings.database, settings.pool_min, settings.pool_max)
    database.open()
    try:
        create_tables(database)
        user_service = UserService(UserRepository(database))

        # ── 2. Build the Telegram application ─────────────
        logger.info("Starting Telegram bot...")
        app = build_application(settings, user_service)

        # ── 3. Start polling ──────────────────────────────
        logger.info("🚀 UserDesk is running! Press Ctrl+C to stop.")
        app.run_polling(drop_pending_updates=True, allowed_updates=["message"])
    finally:
        # ── 4. Cleanup on shutdown ────────────────────────
        database.close()
        logger.info("UserDesk stopped.")


if __name__ == "__main__":
    main()
