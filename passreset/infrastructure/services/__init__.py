from .clock import SystemClock
from .event_publisher import InMemoryEventPublisher
from .event_sinks import NullEventSink, PublishingEventSink
from .password_reset_options import SettingsPasswordResetOptions
from .token_generator import SecureTokenGenerator

__all__ = [
    "InMemoryEventPublisher",
    "NullEventSink",
    "PublishingEventSink",
    "SecureTokenGenerator",
    "SettingsPasswordResetOptions",
    "SystemClock",
]
