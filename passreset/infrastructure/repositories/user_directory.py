"""SQL implementation of the user directory."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker
from structlog import get_logger

from passreset.domain.entities.user import User
from passreset.domain.interfaces.repositories import IUserDirectory

logger = get_logger(__name__)


class SqlUserDirectory(IUserDirectory):
    """Resolves emails against the ``users`` table.

    Matching is case-insensitive and inactive accounts are treated as unknown.
    Every lookup runs in its own session, so the returned `User` is detached
    with all columns loaded and stays usable after that session is gone.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def find_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(
            func.lower(User.email) == email.lower(),
            User.is_active == True,  # noqa: E712
        )
        try:
            async with self.session_factory() as session:
                result = await session.execute(statement)
                user = result.scalars().first()
        except Exception as e:
            logger.error(
                "Error retrieving user by email",
                email_prefix=email[:3] + "***",
                error=str(e),
                error_type=type(e).__name__,
                operation="find_by_email",
            )
            raise

        logger.debug(
            "User lookup by email completed",
            found=user is not None,
            operation="find_by_email",
        )
        return user
