"""Infrastructure implementation of the reset token generator."""

import secrets
from random import Random
from typing import Optional

import structlog

from passreset.domain.interfaces.services import ITokenGenerator
from passreset.domain.value_objects.reset_token import ResetToken

logger = structlog.get_logger(__name__)


class SecureTokenGenerator(ITokenGenerator):
    """Generates reset tokens from a cryptographically secure random source.

    Tokens are not checked for global uniqueness; each user holds at most one
    request, so a collision between two users' tokens grants nothing.
    """

    def __init__(self, random_source: Optional[Random] = None):
        """Initialize the generator.

        Args:
            random_source: Defaults to `secrets.SystemRandom`. A seeded
                `random.Random` makes tokens predictable and is for tests only.
        """
        self._random = random_source or secrets.SystemRandom()

    def generate(self) -> ResetToken:
        token = ResetToken.generate(self._random)
        logger.debug("Password reset token generated", token=token.mask_for_logging())
        return token
