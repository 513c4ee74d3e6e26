"""In-memory adapters for the user directory and reset request store.

Useful for tests, local development and single-process deployments that do
not need durability. The request store keeps copies rather than the caller's
objects, so it behaves like a database: changes to a returned request are not
visible until they are saved, and saves are checked against the stored
version.
"""

from dataclasses import dataclass
from datetime import datetime
from itertools import count
from typing import Dict, Iterable, List, Optional

import structlog

from passreset.core.exceptions import ConcurrentModificationError
from passreset.domain.entities.password_reset_request import PasswordResetRequest
from passreset.domain.entities.user import User
from passreset.domain.interfaces.repositories import (
    IPasswordResetRequestRepository,
    IUserDirectory,
)
from passreset.domain.value_objects.reset_token import ResetToken

logger = structlog.get_logger(__name__)


class InMemoryUserDirectory(IUserDirectory):
    """Email-keyed user directory. Lookups are case-insensitive and only
    resolve active users.
    """

    def __init__(self, users: Iterable[User] = ()):
        self._users: Dict[str, User] = {}
        self._ids = count(1)
        for user in users:
            self.add(user)

    def add(self, user: User) -> User:
        """Register ``user``, assigning an id if it has none."""
        if user.id is None:
            user.id = next(self._ids)
        self._users[user.email.lower()] = user
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        user = self._users.get(email.lower())
        if user is None or not user.is_active:
            return None
        return user


@dataclass
class _StoredRequest:
    id: int
    user: User
    token: str
    expiration_date: datetime
    version: int


class InMemoryPasswordResetRequestRepository(IPasswordResetRequestRepository):
    """Reset request store holding one row per user id.

    Each method runs without awaiting, so it is atomic with respect to other
    coroutines on the same event loop.
    """

    def __init__(self):
        self._rows: Dict[int, _StoredRequest] = {}
        self._ids = count(1)

    async def find_by_user(self, user: User) -> Optional[PasswordResetRequest]:
        row = self._rows.get(user.id)
        if row is None:
            return None
        return PasswordResetRequest(
            user=row.user,
            token=ResetToken.from_existing(row.token),
            expiration_date=row.expiration_date,
            id=row.id,
            version=row.version,
        )

    async def save(self, request: PasswordResetRequest) -> PasswordResetRequest:
        if request.token is None or request.expiration_date is None:
            raise ValueError("Only issued password reset requests can be saved")

        stored = self._rows.get(request.user_id)
        if request.is_new:
            if stored is not None:
                logger.warning("Reset request already exists for user", user_id=request.user_id)
                raise ConcurrentModificationError()
            stored = _StoredRequest(
                id=next(self._ids),
                user=request.user,
                token=request.token.value,
                expiration_date=request.expiration_date,
                version=1,
            )
            self._rows[request.user_id] = stored
        else:
            if stored is None or stored.id != request.id or stored.version != request.version:
                logger.warning(
                    "Stale password reset request rejected",
                    user_id=request.user_id,
                    request_id=request.id,
                    version=request.version,
                )
                raise ConcurrentModificationError()
            stored.token = request.token.value
            stored.expiration_date = request.expiration_date
            stored.version += 1

        request.id = stored.id
        request.version = stored.version
        return request

    def all(self) -> List[PasswordResetRequest]:
        """Snapshot of every stored request, mainly for inspection in tests."""
        return [
            PasswordResetRequest(
                user=row.user,
                token=ResetToken.from_existing(row.token),
                expiration_date=row.expiration_date,
                id=row.id,
                version=row.version,
            )
            for row in self._rows.values()
        ]
