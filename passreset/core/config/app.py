"""
Application-specific settings.
"""
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """
    Defines the deployment environment and how logs are rendered.

    Security Note:
        - Keep LOG_JSON enabled in production so log shippers receive structured
          events; console rendering is meant for local development only.
    """
    APP_ENV: str = "development"

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
