"""In-process domain event publisher.

Keeps every published event in a list for later inspection and fans each one
out to registered subscribers. Coroutine functions and objects with an async
``__call__`` are awaited; other callables run in the default executor, and an
awaitable they return is awaited too. All subscribers run concurrently; a
failing subscriber is logged and the rest still receive the event.
"""

import asyncio
import inspect
from typing import Awaitable, Callable, Iterable, List, Optional, Type, Union

import structlog

from passreset.domain.events.password_reset_events import BaseDomainEvent
from passreset.domain.interfaces.services import IEventPublisher

logger = structlog.get_logger(__name__)

Subscriber = Callable[[BaseDomainEvent], Union[None, Awaitable[None]]]


class InMemoryEventPublisher(IEventPublisher):
    """`IEventPublisher` that records events in memory."""

    def __init__(self):
        self._events: List[BaseDomainEvent] = []
        self._subscribers: List[Subscriber] = []

    async def publish(self, event: BaseDomainEvent) -> None:
        self._events.append(event)
        await self._fan_out(event)
        logger.info(
            "Domain event published",
            event_type=type(event).__name__,
            user_id=event.user_id,
            correlation_id=event.correlation_id,
        )

    async def publish_many(self, events: Iterable[BaseDomainEvent]) -> None:
        """Publish ``events`` one after the other, preserving their order."""
        for event in events:
            await self.publish(event)

    def add_subscriber(self, subscriber: Subscriber) -> None:
        self._subscribers.append(subscriber)

    def get_published_events(
        self,
        event_type: Optional[Type[BaseDomainEvent]] = None,
        user_id: Optional[int] = None,
    ) -> List[BaseDomainEvent]:
        """Recorded events, oldest first.

        Args:
            event_type: Keep only instances of this class
            user_id: Keep only events of this user
        """
        return [
            event
            for event in self._events
            if (event_type is None or isinstance(event, event_type))
            and (user_id is None or event.user_id == user_id)
        ]

    def clear_published_events(self) -> None:
        self._events = []

    async def _fan_out(self, event: BaseDomainEvent) -> None:
        if not self._subscribers:
            return

        outcomes = await asyncio.gather(
            *(self._deliver(subscriber, event) for subscriber in self._subscribers),
            return_exceptions=True,
        )

        for subscriber, outcome in zip(self._subscribers, outcomes):
            if isinstance(outcome, Exception):
                logger.error(
                    "Event subscriber failed",
                    subscriber=getattr(subscriber, "__name__", repr(subscriber)),
                    event_type=type(event).__name__,
                    error=str(outcome),
                    error_type=type(outcome).__name__,
                )

    @staticmethod
    async def _deliver(subscriber: Subscriber, event: BaseDomainEvent) -> None:
        if inspect.iscoroutinefunction(subscriber) or inspect.iscoroutinefunction(
            getattr(subscriber, "__call__", None)
        ):
            outcome = subscriber(event)
        else:
            outcome = await asyncio.get_running_loop().run_in_executor(None, subscriber, event)

        # Sync callables may still hand back an awaitable.
        if inspect.isawaitable(outcome):
            await outcome
