"""Domain ports.

The reset service depends only on these abstractions; concrete adapters live in
`passreset.infrastructure`.
"""

from .repositories import IPasswordResetRequestRepository, IUserDirectory
from .services import (
    IClock,
    IEventPublisher,
    IPasswordResetEventSink,
    IPasswordResetOptions,
    ITokenGenerator,
)

__all__ = [
    "IClock",
    "IEventPublisher",
    "IPasswordResetEventSink",
    "IPasswordResetOptions",
    "IPasswordResetRequestRepository",
    "ITokenGenerator",
    "IUserDirectory",
]
