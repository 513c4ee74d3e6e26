"""Composed configuration for passreset.

`Settings` merges the app, database and password reset sections. Values come
from the process environment first and then from the env file picked by
``APP_ENV``:

    development -> .env
    test        -> .env.test
    staging     -> .env.staging
    production  -> .env.production

A missing env file is not an error; the environment and field defaults apply.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic_settings import SettingsConfigDict

from .app import AppSettings
from .database import DatabaseSettings
from .password_reset import PasswordResetSettings

# structlog is configured from these settings, so this module logs through stdlib.
logger = logging.getLogger(__name__)

ENV_FILES = {
    "development": ".env",
    "test": ".env.test",
    "staging": ".env.staging",
    "production": ".env.production",
}


class Settings(AppSettings, DatabaseSettings, PasswordResetSettings):
    """All passreset settings in one object.

    Assignments are validated. `SettingsPasswordResetOptions` reads
    ``PASSWORD_RESET_TOKEN_VALIDITY_MINUTES`` on every issuance, so changing it
    at runtime affects the next issued or renewed token.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        validate_assignment=True,
    )


def env_file_for(app_env: str) -> Optional[Path]:
    """Env file of ``app_env`` if it exists, falling back to ``.env``."""
    for candidate in (ENV_FILES.get(app_env, ".env"), ".env"):
        path = Path(candidate)
        if path.exists():
            return path
    return None


def create_settings() -> Settings:
    app_env = os.getenv("APP_ENV", "development")
    env_file = env_file_for(app_env)

    if env_file is None:
        logger.debug("No env file found for APP_ENV=%s, using the environment only", app_env)
        return Settings(_env_file=None)

    logger.info("Loading %s for APP_ENV=%s", env_file, app_env)
    return Settings(_env_file=env_file)


settings = create_settings()
