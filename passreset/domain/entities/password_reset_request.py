"""Password Reset Request entity.

A `PasswordResetRequest` is the one outstanding (or expired) reset attempt of
exactly one user. It is created in memory when the user has none, persisted on
every issuance, and never deleted: once expired it is reused and receives a
fresh token on the next issuance.
"""

from datetime import datetime, timedelta
from typing import Optional

from passreset.domain.entities.user import User
from passreset.domain.value_objects.reset_token import ResetToken


class PasswordResetRequest:
    """Reset attempt of a single user.

    Attributes:
        user: Owner of the request; read-only for the lifetime of the request
        token: Current reset token, ``None`` until the first issuance
        expiration_date: Timezone-aware moment the token stops being valid
        id: Persistence identity, ``None`` until the request is first saved
        version: Optimistic-concurrency counter maintained by the store
    """

    def __init__(
        self,
        user: User,
        token: Optional[ResetToken] = None,
        expiration_date: Optional[datetime] = None,
        id: Optional[int] = None,
        version: int = 0,
    ):
        self._user = user
        self.token = token
        self.expiration_date = expiration_date
        self.id = id
        self.version = version

    @property
    def user(self) -> User:
        return self._user

    @property
    def user_id(self) -> Optional[int]:
        return self._user.id

    @property
    def is_new(self) -> bool:
        """True until the request has been saved for the first time."""
        return self.id is None

    def is_expired(self, now: datetime) -> bool:
        """Single source of truth for expiry.

        A request without an expiration date, i.e. one that was never issued,
        counts as expired. Expiry is inclusive: at ``expiration_date`` itself
        the token is no longer valid.
        """
        return self.expiration_date is None or now >= self.expiration_date

    def assign_token(self, token: ResetToken) -> None:
        self.token = token

    def extend_expiration(self, now: datetime, validity_interval: timedelta) -> None:
        """Restart the validity window at ``now``."""
        self.expiration_date = now + validity_interval

    def time_remaining(self, now: datetime) -> timedelta:
        """Remaining validity, zero once expired."""
        if self.is_expired(now):
            return timedelta(0)
        return self.expiration_date - now

    def __repr__(self) -> str:
        return (
            f"PasswordResetRequest(id={self.id!r}, user_id={self.user_id!r}, "
            f"token={self.token!r}, expiration_date={self.expiration_date!r}, "
            f"version={self.version!r})"
        )
