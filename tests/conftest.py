from datetime import timedelta

import pytest

from passreset.domain.interfaces.services import IPasswordResetOptions
from passreset.domain.services.password_reset.password_reset_service import (
    PasswordResetService,
)
from passreset.infrastructure.repositories.in_memory import (
    InMemoryPasswordResetRequestRepository,
    InMemoryUserDirectory,
)
from passreset.infrastructure.services.event_publisher import InMemoryEventPublisher
from passreset.infrastructure.services.event_sinks import PublishingEventSink
from tests.factories import FrozenClock, SequenceTokenGenerator, create_fake_user


class MutableOptions(IPasswordResetOptions):
    """Options double whose validity can change between calls."""

    def __init__(self, validity: timedelta = timedelta(hours=1)):
        self.validity = validity

    @property
    def token_validity_interval(self) -> timedelta:
        return self.validity


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def options():
    return MutableOptions()


@pytest.fixture
def token_generator():
    return SequenceTokenGenerator()


@pytest.fixture
def user():
    return create_fake_user(email="alice@example.com")


@pytest.fixture
def user_directory(user):
    return InMemoryUserDirectory([user])


@pytest.fixture
def request_repository():
    return InMemoryPasswordResetRequestRepository()


@pytest.fixture
def event_publisher():
    return InMemoryEventPublisher()


@pytest.fixture
def service(user_directory, request_repository, token_generator, clock, options, event_publisher):
    """Service wired to in-memory adapters and a frozen clock."""
    return PasswordResetService(
        user_directory=user_directory,
        request_repository=request_repository,
        token_generator=token_generator,
        clock=clock,
        options=options,
        event_sink=PublishingEventSink(event_publisher, clock),
    )
