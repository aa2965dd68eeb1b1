"""Runtime settings read from the environment.

Values are read at call time, not import time, so tests can set them via
os.environ. app.main loads a .env file (python-dotenv) before any of these
are consulted.

Known variables:
    DB_PATH     : SQLite file (default ~/.boat_log/boat_log.db).
    APP_PASSWORD: shared family password; empty disables auth.
    SECRET_KEY  : signing key for the session cookie.
    LOG_LEVEL   : logging level name (default INFO).
"""

import os
from pathlib import Path


def get_db_path() -> Path:
    env_path = os.environ.get("DB_PATH")
    if env_path:
        return Path(env_path)
    return Path.home() / ".boat_log" / "boat_log.db"


def get_app_password() -> str:
    return os.environ.get("APP_PASSWORD", "")


def auth_enabled() -> bool:
    return bool(get_app_password())


def get_secret_key() -> str:
    return os.environ.get("SECRET_KEY", "dev-secret-change-in-production")


def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()
