"""
Asynchronous Database Utilities Module

This module provides asynchronous database utilities using SQLAlchemy's asyncio
support. The SQL adapters of the user directory and the reset request store
take the session factory built here and open one session per operation.

**Security Note**: DATABASE_URL may contain credentials. It is never logged;
only the driver name is.

Key Components:
    - build_async_engine: The asynchronous SQLAlchemy engine for a URL.
    - build_session_factory: A factory for creating asynchronous database sessions.
    - create_async_db_and_tables: Utility to create tables using an async engine.
"""

from typing import Optional

import structlog
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from passreset.core.config.settings import settings

# Tables must be registered on SQLModel.metadata before create_all runs.
from passreset.domain.entities.user import User  # noqa: F401
from passreset.infrastructure.database.models import PasswordResetRequestRecord  # noqa: F401

logger = structlog.get_logger(__name__)


def build_async_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> AsyncEngine:
    """Create an async engine for ``database_url`` (defaults to settings)."""
    url = make_url(database_url or settings.DATABASE_URL)
    logger.debug("Creating async database engine", driver=url.drivername)
    return create_async_engine(
        url,
        echo=settings.DATABASE_ECHO if echo is None else echo,
        future=True,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    # Loaded attributes must stay readable once a session has closed.
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False)


async def create_async_db_and_tables(bind: AsyncEngine) -> None:
    """
    Create tables using the async engine (mainly for test suites and local use;
    deployments run the Alembic migrations).
    """
    logger.info("Creating async database tables")
    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Async database tables created")
