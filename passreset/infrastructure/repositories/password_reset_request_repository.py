"""Password reset request repository implementation using SQLAlchemy.

Saves are optimistic: an insert relies on the unique ``user_id`` constraint and
an update only matches the row when its ``version`` is still the one the
request was read with. Either conflict surfaces as
`ConcurrentModificationError`, which the reset service retries.

Each call opens its own session and commits or rolls back before returning.
Nothing the repository hands out stays attached to a session, so a rolled back
save never invalidates objects the caller still holds, and concurrent callers
never share a session.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker
from structlog import get_logger

from passreset.core.exceptions import ConcurrentModificationError
from passreset.domain.entities.password_reset_request import PasswordResetRequest
from passreset.domain.entities.user import User
from passreset.domain.interfaces.repositories import IPasswordResetRequestRepository
from passreset.domain.value_objects.reset_token import ResetToken
from passreset.infrastructure.database.models import PasswordResetRequestRecord

logger = get_logger(__name__)


def _as_utc(value: datetime) -> datetime:
    """SQLite drops the offset of stored timestamps; rows are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SqlPasswordResetRequestRepository(IPasswordResetRequestRepository):
    """SQLAlchemy implementation of the reset request store."""

    def __init__(self, session_factory: async_sessionmaker):
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory of SQLAlchemy async sessions, one per call
        """
        self.session_factory = session_factory

    async def find_by_user(self, user: User) -> Optional[PasswordResetRequest]:
        if user.id is None:
            return None

        statement = select(PasswordResetRequestRecord).where(
            PasswordResetRequestRecord.user_id == user.id
        )
        try:
            async with self.session_factory() as session:
                result = await session.execute(statement)
                record = result.scalars().first()
        except Exception as e:
            logger.error(
                "Error retrieving password reset request",
                user_id=user.id,
                error=str(e),
                error_type=type(e).__name__,
                operation="find_by_user",
            )
            raise

        if record is None:
            return None

        return PasswordResetRequest(
            user=user,
            token=ResetToken.from_existing(record.token),
            expiration_date=_as_utc(record.expiration_date),
            id=record.id,
            version=record.version,
        )

    async def save(self, request: PasswordResetRequest) -> PasswordResetRequest:
        """Insert or update ``request`` and commit.

        Raises:
            ValueError: If the request was never issued a token
            ConcurrentModificationError: On a lost optimistic-concurrency race
        """
        if request.token is None or request.expiration_date is None:
            raise ValueError("Only issued password reset requests can be saved")

        async with self.session_factory() as session:
            if request.is_new:
                request_id, version = await self._insert(session, request)
            else:
                request_id, version = await self._update(session, request)

        request.id = request_id
        request.version = version
        logger.debug(
            "Password reset request saved",
            user_id=request.user_id,
            request_id=request.id,
            version=request.version,
        )
        return request

    async def _insert(self, session, request: PasswordResetRequest):
        now = datetime.now(timezone.utc)
        record = PasswordResetRequestRecord(
            user_id=request.user_id,
            token=request.token.value,
            expiration_date=_as_utc(request.expiration_date),
            version=1,
            created_at=now,
            updated_at=now,
        )
        try:
            session.add(record)
            await session.flush()
            request_id = record.id
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            logger.warning(
                "Password reset request already exists for user",
                user_id=request.user_id,
                operation="save",
            )
            raise ConcurrentModificationError() from e
        except Exception as e:
            await session.rollback()
            self._log_save_error(request, e)
            raise
        return request_id, 1

    async def _update(self, session, request: PasswordResetRequest):
        statement = (
            update(PasswordResetRequestRecord)
            .where(
                PasswordResetRequestRecord.id == request.id,
                PasswordResetRequestRecord.version == request.version,
            )
            .values(
                token=request.token.value,
                expiration_date=_as_utc(request.expiration_date),
                version=request.version + 1,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = await session.execute(statement)
            if result.rowcount != 1:
                await session.rollback()
                logger.warning(
                    "Stale password reset request rejected",
                    user_id=request.user_id,
                    request_id=request.id,
                    version=request.version,
                )
                raise ConcurrentModificationError()
            await session.commit()
        except ConcurrentModificationError:
            raise
        except Exception as e:
            await session.rollback()
            self._log_save_error(request, e)
            raise
        return request.id, request.version + 1

    @staticmethod
    def _log_save_error(request: PasswordResetRequest, error: Exception) -> None:
        logger.error(
            "Error saving password reset request",
            user_id=request.user_id,
            request_id=request.id,
            error=str(error),
            error_type=type(error).__name__,
            operation="save",
        )
