"""
Database connection settings.
"""
from pydantic import field_validator
from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    """
    Defines settings for connecting to the reset request store.

    The default points at a local SQLite file through the aiosqlite driver so the
    library works without a database server. Production deployments set
    DATABASE_URL to an async driver URL (e.g. ``postgresql+asyncpg://...``).

    Security Note:
        - DATABASE_URL may embed credentials; never log it verbatim.
    """
    DATABASE_URL: str = "sqlite+aiosqlite:///./passreset.db"
    DATABASE_ECHO: bool = False

    @field_validator("DATABASE_URL")
    @classmethod
    def require_async_driver(cls, v: str) -> str:
        """Rejects synchronous driver URLs, the repositories need an async engine."""
        scheme = v.split("://", 1)[0]
        if "+" not in scheme:
            raise ValueError(
                "DATABASE_URL must name an async driver, e.g. 'sqlite+aiosqlite' "
                "or 'postgresql+asyncpg'"
            )
        return v
