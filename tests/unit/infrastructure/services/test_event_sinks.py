from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from structlog.contextvars import bound_contextvars

from passreset.domain.entities.password_reset_request import PasswordResetRequest
from passreset.domain.events.password_reset_events import PasswordResetRequestedEvent
from passreset.infrastructure.services.event_sinks import NullEventSink, PublishingEventSink
from tests.factories import FrozenClock, create_fake_token, create_fake_user


@pytest.fixture
def issued_request():
    return PasswordResetRequest(
        user=create_fake_user(id=3, email="dave@example.com"),
        token=create_fake_token(5),
        expiration_date=datetime(2026, 4, 4, 4, 4, tzinfo=timezone.utc),
        id=11,
        version=1,
    )


@pytest.mark.asyncio
async def test_null_sink_accepts_notifications(issued_request):
    assert await NullEventSink().notify_issued(issued_request) is None


@pytest.mark.asyncio
async def test_publishing_sink_builds_requested_event(issued_request):
    publisher = AsyncMock()
    clock = FrozenClock()
    sink = PublishingEventSink(publisher, clock)

    with bound_contextvars(correlation_id="req-42"):
        await sink.notify_issued(issued_request)

    publisher.publish.assert_awaited_once()
    event = publisher.publish.await_args.args[0]
    assert isinstance(event, PasswordResetRequestedEvent)
    assert event.request is issued_request
    assert event.user_id == 3
    assert event.email == "dave@example.com"
    assert event.token_expires_at == issued_request.expiration_date
    assert event.occurred_at == clock.now()
    assert event.correlation_id == "req-42"


@pytest.mark.asyncio
async def test_publishing_sink_defaults_to_system_clock(issued_request):
    publisher = AsyncMock()
    before = datetime.now(timezone.utc)

    await PublishingEventSink(publisher).notify_issued(issued_request)

    event = publisher.publish.await_args.args[0]
    assert before <= event.occurred_at <= before + timedelta(seconds=5)


@pytest.mark.asyncio
async def test_publishing_sink_without_bound_correlation_id(issued_request):
    publisher = AsyncMock()

    await PublishingEventSink(publisher, FrozenClock()).notify_issued(issued_request)

    assert publisher.publish.await_args.args[0].correlation_id is None
