"""
config.py
---------
Central configuration module. Loads environment variables (optionally
from a .env file) and returns them as an explicit, typed Settings value.
Nothing here is cached at module level: callers construct Settings and
pass it to whatever needs it.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv
from psycopg2.extensions import make_dsn


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default)).strip()
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from None


# ── PostgreSQL ────────────────────────────────────────────
@dataclass(frozen=True)
class DatabaseConfig:
    """Connection parameters for the PostgreSQL store."""
    host: str = "localhost"
    port: int = 5432
    name: str = "userdesk"
    user: str = "userdesk_user"
    password: str = field(default="", repr=False)

    @property
    def dsn(self) -> str:
        """libpq key=value string, quoted by psycopg2. An empty password is omitted."""
        return make_dsn(host=self.host, port=self.port, dbname=self.name, user=self.user, password=self.password or None)

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        return cls(
            host=os.getenv("DB_HOST", "localhost"),
            port=_get_int("DB_PORT", 5432),
            name=os.getenv("DB_NAME", "userdesk"),
            user=os.getenv("DB_USER", "userdesk_user"),
            password=os.getenv("DB_PASS", ""),
        )


# ── Application ───────────────────────────────────────────
@dataclass(frozen=True)
class Settings:
    """
    Everything the application needs at startup.

    Attributes:
        telegram_bot_token: Bot token from @BotFather.
        database: Store connection parameters.
        log_level: Root logger level name (e.g. 'INFO', 'DEBUG').
        pool_min: Minimum number of pooled connections.
        pool_max: Maximum number of pooled connections.
    """
    telegram_bot_token: str = field(default="", repr=False)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    log_level: str = "INFO"
    pool_min: int = 1
    pool_max: int = 5


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env_file: Optional path to a .env file. When omitted, python-dotenv
            searches for a `.env` next to the working directory.

    Raises:
        ValueError: If a numeric variable cannot be parsed.
    """
    load_dotenv(env_file)
    pool_min = _get_int("DB_POOL_MIN", 1)
    pool_max = _get_int("DB_POOL_MAX", 5)
    if pool_min < 1 or pool_max < pool_min:
        raise ValueError(f"Invalid pool bounds: DB_POOL_MIN={pool_min}, DB_POOL_MAX={pool_max}")
    return Settings(
        telegram_bot_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
        database=DatabaseConfig.from_env(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        pool_min=pool_min,
        pool_max=pool_max,
    )
