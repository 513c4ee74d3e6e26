"""Password Reset Domain Events.

These events represent significant business occurrences in the password reset
domain that other parts of the system may need to react to (mailing the reset
link, audit logging, monitoring).
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from passreset.domain.entities.password_reset_request import PasswordResetRequest


@dataclass(frozen=True)
class BaseDomainEvent:
    """Fields shared by every passreset event.

    Attributes:
        occurred_at: Moment of the occurrence, normalized to UTC when naive
        user_id: User the event is about, if known
        correlation_id: Caller-supplied id tying the event to a request
    """

    occurred_at: datetime
    user_id: Optional[int]
    correlation_id: Optional[str]

    def __post_init__(self):
        if self.occurred_at.tzinfo is None:
            object.__setattr__(self, "occurred_at", self.occurred_at.replace(tzinfo=timezone.utc))


@dataclass(frozen=True)
class PasswordResetRequestedEvent(BaseDomainEvent):
    """Event emitted after a reset request has been issued and saved.

    The event carries the saved request so a subscriber can build the reset
    link from ``request.token.value``. Subscribers must not log the raw token.

    Attributes:
        request: The saved password reset request
        email: Address of the user the reset belongs to
        token_expires_at: When the issued token expires
    """

    request: PasswordResetRequest
    email: str
    token_expires_at: datetime
