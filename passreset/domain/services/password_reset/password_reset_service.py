"""Password Reset Service.

This domain service owns the reset token lifecycle: issuing a time-limited
token for the user behind an email address, and checking a presented token
against the stored one.

Issuance rules:
    - An expired request (a freshly constructed one always is) receives a new
      token; a still-valid request keeps its token, so repeated issuance within
      the validity window resends the same link.
    - The expiration date is recomputed on every issuance, whether or not the
      token was regenerated.
    - The request is saved before the event sink is notified; sink failures
      are logged and do not undo the issuance.

Validation never raises for caller input. Unknown email, missing request,
expired request and wrong token all collapse into ``False``.
"""

import asyncio
import weakref
from typing import Awaitable, Optional, TypeVar, Union

import structlog
from tenacity import AsyncRetrying, RetryError, retry_if_exception_type, stop_after_attempt

from passreset.core.exceptions import (
    ConcurrentModificationError,
    PasswordResetConflictError,
    PasswordResetStoreError,
    PassResetError,
)
from passreset.domain.entities.password_reset_request import PasswordResetRequest
from passreset.domain.entities.user import User
from passreset.domain.interfaces.repositories import (
    IPasswordResetRequestRepository,
    IUserDirectory,
)
from passreset.domain.interfaces.services import (
    IClock,
    IPasswordResetEventSink,
    IPasswordResetOptions,
    ITokenGenerator,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _email_prefix(email: str) -> str:
    if len(email) <= 3:
        return "***"
    return email[:3].encode("utf-8", "backslashreplace").decode("utf-8") + "***"


class PasswordResetService:
    """Service for issuing and validating password reset requests.

    All collaborators are injected; there are no implicit defaults. Callers
    that do not care about issuance events pass a `NullEventSink` explicitly.

    Concurrency:
        Issuance is a read-modify-write on the user's request. Within one
        process it is serialized by a per-user `asyncio.Lock`; across
        processes the store's optimistic concurrency detects lost races and
        the whole read-modify-write is retried up to ``max_save_attempts``
        times before `PasswordResetConflictError` is raised.
    """

    def __init__(
        self,
        user_directory: IUserDirectory,
        request_repository: IPasswordResetRequestRepository,
        token_generator: ITokenGenerator,
        clock: IClock,
        options: IPasswordResetOptions,
        event_sink: IPasswordResetEventSink,
        max_save_attempts: int = 3,
        store_timeout: Optional[float] = None,
    ):
        """Initialize with required dependencies.

        Args:
            user_directory: Resolves email addresses to users
            request_repository: Persists one reset request per user
            token_generator: Produces new reset tokens
            clock: Source of the current time
            options: Supplies the token validity interval
            event_sink: Notified after every successful issuance
            max_save_attempts: Attempts at the read-modify-write of an issuance
                before a concurrent modification is reported as a conflict
            store_timeout: Seconds a single directory or store call may take,
                ``None`` for no limit
        """
        if max_save_attempts < 1:
            raise ValueError("max_save_attempts must be at least 1")

        self._user_directory = user_directory
        self._request_repository = request_repository
        self._token_generator = token_generator
        self._clock = clock
        self._options = options
        self._event_sink = event_sink
        self._max_save_attempts = max_save_attempts
        self._store_timeout = store_timeout
        self._user_locks: "weakref.WeakValueDictionary[Union[int, str], asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

        logger.info(
            "PasswordResetService initialized",
            max_save_attempts=max_save_attempts,
            store_timeout=store_timeout,
        )

    async def create_reset_password_request(self, email: str) -> Optional[PasswordResetRequest]:
        """Issue (or renew) the reset request of the user behind ``email``.

        Args:
            email: Email address of the user asking for a reset

        Returns:
            The saved request, or ``None`` if no user has this email

        Raises:
            PasswordResetConflictError: If concurrent writers kept winning the
                save race for every attempt
            PasswordResetStoreError: If the directory or store failed
        """
        user = await self._find_user(email)
        if user is None:
            logger.info("Password reset requested for unknown email", email_prefix=_email_prefix(str(email)))
            return None

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._max_save_attempts),
                retry=retry_if_exception_type(ConcurrentModificationError),
            ):
                with attempt:
                    async with self._lock_for(user):
                        request = await self._issue(user)
        except RetryError as e:
            logger.error(
                "Password reset request kept conflicting with concurrent writers",
                user_id=user.id,
                attempts=self._max_save_attempts,
            )
            raise PasswordResetConflictError() from e.last_attempt.exception()

        await self._notify_issued(request)
        return request

    async def is_token_valid(self, email: str, token: str) -> bool:
        """Check whether ``token`` is the current, unexpired token of ``email``.

        Args:
            email: Email address of the user
            token: Token presented by the caller

        Returns:
            bool: True only for a stored, unexpired request whose token equals
            ``token``

        Raises:
            PasswordResetStoreError: If the directory or store failed. Caller
                input never raises.
        """
        user = await self._find_user(email)
        if user is None:
            return False

        request = await self._call_store(self._request_repository.find_by_user(user))
        if request is None or request.token is None:
            return False

        # Both checks always run so expired and mismatching tokens take the same path.
        expired = request.is_expired(self._clock.now())
        matches = request.token.matches(token)
        is_valid = matches and not expired

        logger.info(
            "Password reset token checked",
            user_id=user.id,
            is_valid=is_valid,
        )
        return is_valid

    async def _issue(self, user: User) -> PasswordResetRequest:
        """One read-modify-write of the user's reset request."""
        now = self._clock.now()
        request = await self._call_store(self._request_repository.find_by_user(user))
        if request is None:
            request = PasswordResetRequest(user)

        regenerated = request.is_expired(now)
        if regenerated:
            request.assign_token(self._token_generator.generate())

        request.extend_expiration(now, self._options.token_validity_interval)
        saved = await self._call_store(self._request_repository.save(request))

        logger.info(
            "Password reset request issued",
            user_id=user.id,
            request_id=saved.id,
            token_regenerated=regenerated,
            token=saved.token.mask_for_logging(),
            expires_at=saved.expiration_date.isoformat(),
        )
        return saved

    async def _find_user(self, email: str) -> Optional[User]:
        if not isinstance(email, str) or not email:
            return None
        try:
            # Lone surrogates survive JSON decoding but no store can look them up.
            email.encode("utf-8")
        except UnicodeEncodeError:
            return None
        return await self._call_store(self._user_directory.find_by_email(email))

    async def _notify_issued(self, request: PasswordResetRequest) -> None:
        try:
            await self._event_sink.notify_issued(request)
        except Exception as e:
            logger.error(
                "Password reset event sink failed",
                user_id=request.user_id,
                request_id=request.id,
                error=str(e),
                error_type=type(e).__name__,
            )

    async def _call_store(self, call: Awaitable[T]) -> T:
        """Await a directory or store call, applying the timeout and mapping
        unexpected failures to `PasswordResetStoreError`.
        """
        try:
            if self._store_timeout is None:
                return await call
            return await asyncio.wait_for(call, self._store_timeout)
        except PassResetError:
            raise
        except asyncio.TimeoutError as e:
            logger.error("Password reset store call timed out", timeout=self._store_timeout)
            raise PasswordResetStoreError("Password reset store did not respond in time") from e
        except Exception as e:
            logger.error(
                "Password reset store call failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise PasswordResetStoreError("Password reset store is unavailable") from e

    def _lock_for(self, user: User) -> asyncio.Lock:
        key = user.id if user.id is not None else user.email.lower()
        lock = self._user_locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._user_locks[key] = lock
        return lock
