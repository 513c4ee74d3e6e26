"""Re-export factory functions and doubles for generating test data."""

# flake8: noqa: F401

from .clock import FrozenClock
from .token import SequenceTokenGenerator, create_fake_token
from .user import create_fake_user

__all__ = [
    "FrozenClock",
    "SequenceTokenGenerator",
    "create_fake_token",
    "create_fake_user",
]
