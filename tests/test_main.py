import pytest
from telegram.ext import CommandHandler

from config import Settings
from handlers.user_handler import SERVICE_KEY
from main import COMMANDS, build_application


class TestBuildApplication:

    def test_registers_commands_and_service(self, user_service):
        app = build_application(Settings(telegram_bot_token="123456:TEST-TOKEN"), user_service)

        assert app.bot_data[SERVICE_KEY] is user_service
        registered = {
            command
            for handler in app.handlers[0]
            if isinstance(handler, CommandHandler)
            for command in handler.commands
        }
        assert registered == {name for name, _, _ in COMMANDS}

    def test_missing_token(self, user_service):
        with pytest.raises(ValueError, match="TELEGRAM_BOT_TOKEN"):
            build_application(Settings(), user_service)
