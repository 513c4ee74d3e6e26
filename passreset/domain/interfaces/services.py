"""Service interfaces for domain services.

These interfaces define contracts for domain services,
enabling dependency inversion and better testability.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import List

from passreset.domain.entities.password_reset_request import PasswordResetRequest
from passreset.domain.events.password_reset_events import BaseDomainEvent
from passreset.domain.value_objects.reset_token import ResetToken


class IClock(ABC):
    """Interface for the source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        pass


class ITokenGenerator(ABC):
    """Interface for reset token generation."""

    @abstractmethod
    def generate(self) -> ResetToken:
        """Generate an unguessable reset token.

        Returns:
            ResetToken: New token drawn from a cryptographically secure source
        """
        pass


class IPasswordResetOptions(ABC):
    """Interface for the configuration the reset lifecycle reads."""

    @property
    @abstractmethod
    def token_validity_interval(self) -> timedelta:
        """Validity window added to "now" when a token is issued or renewed.

        Read on every issuance, never cached by callers.
        """
        pass


class IPasswordResetEventSink(ABC):
    """Interface receiving issued reset requests.

    Implementations may send the reset email, log, queue a job, etc. The sink
    is notified after the request has been saved; errors it raises are logged
    by the caller and never undo the issuance.
    """

    @abstractmethod
    async def notify_issued(self, request: PasswordResetRequest) -> None:
        """Handle a freshly issued (or renewed) reset request.

        Args:
            request: The saved request
        """
        pass


class IEventPublisher(ABC):
    """Interface for domain event publishing."""

    @abstractmethod
    async def publish(self, event: BaseDomainEvent) -> None:
        """Publish a domain event.

        Args:
            event: Domain event to publish
        """
        pass

    @abstractmethod
    async def publish_many(self, events: List[BaseDomainEvent]) -> None:
        """Publish multiple domain events.

        Args:
            events: List of domain events to publish
        """
        pass
