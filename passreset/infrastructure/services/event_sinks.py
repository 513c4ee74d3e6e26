"""Event sink implementations for issued password reset requests."""

from typing import Optional

import structlog

from passreset.domain.entities.password_reset_request import PasswordResetRequest
from passreset.domain.events.password_reset_events import PasswordResetRequestedEvent
from passreset.domain.interfaces.services import (
    IClock,
    IEventPublisher,
    IPasswordResetEventSink,
)
from passreset.infrastructure.services.clock import SystemClock

logger = structlog.get_logger(__name__)


class NullEventSink(IPasswordResetEventSink):
    """Sink that ignores issuance notifications.

    Pass it explicitly when nothing needs to react to issued requests.
    """

    async def notify_issued(self, request: PasswordResetRequest) -> None:
        logger.debug("Issued password reset request not forwarded", request_id=request.id)


class PublishingEventSink(IPasswordResetEventSink):
    """Turns issuance notifications into `PasswordResetRequestedEvent`s.

    The events go to an `IEventPublisher`, where subscribers such as a mailer
    pick them up. A ``correlation_id`` bound with
    `structlog.contextvars.bind_contextvars` by the caller (for example per
    HTTP request) is copied onto the event.
    """

    def __init__(self, event_publisher: IEventPublisher, clock: Optional[IClock] = None):
        self._event_publisher = event_publisher
        self._clock = clock or SystemClock()

    async def notify_issued(self, request: PasswordResetRequest) -> None:
        event = PasswordResetRequestedEvent(
            occurred_at=self._clock.now(),
            user_id=request.user_id,
            correlation_id=structlog.contextvars.get_contextvars().get("correlation_id"),
            request=request,
            email=request.user.email,
            token_expires_at=request.expiration_date,
        )
        await self._event_publisher.publish(event)
