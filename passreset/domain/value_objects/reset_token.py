"""Reset Token Value Object for secure token management.

This value object encapsulates password reset token format rules, ensuring
tokens are always well formed, and owns the constant-time comparison used when
a caller presents a token for validation.
"""

import secrets
import string
from dataclasses import dataclass
from random import Random
from typing import ClassVar, Optional

from passreset.utils.security import constant_time_equals


@dataclass(frozen=True)
class ResetToken:
    """Password reset token value object.

    Security Features:
        - Fixed length of 24 characters from a 62 character alphanumeric
          alphabet (about 143 bits of entropy)
        - Cryptographically secure generation using SystemRandom
        - Format validation on construction
        - Immutable once created
        - Constant-time comparison against presented values

    Attributes:
        value: The token string
    """

    value: str

    TOKEN_LENGTH: ClassVar[int] = 24
    ALPHABET: ClassVar[str] = string.ascii_lowercase + string.ascii_uppercase + string.digits
    MASK_PREFIX_LENGTH: ClassVar[int] = 4

    def __post_init__(self) -> None:
        """Validate token format on construction."""
        self._validate_format()

    def _validate_format(self) -> None:
        """Validate token format requirements.

        Raises:
            ValueError: If token format is invalid
        """
        if not isinstance(self.value, str) or not self.value:
            raise ValueError("Token cannot be empty")

        if len(self.value) != self.TOKEN_LENGTH:
            raise ValueError(f"Token must be exactly {self.TOKEN_LENGTH} characters long")

        if any(c not in self.ALPHABET for c in self.value):
            raise ValueError("Token may only contain ASCII letters and digits")

    @classmethod
    def generate(cls, random_source: Optional[Random] = None) -> "ResetToken":
        """Generate a new cryptographically secure reset token.

        Every character is drawn independently and uniformly from `ALPHABET`.

        Args:
            random_source: Random number generator to draw from. Defaults to
                `secrets.SystemRandom`; only pass a seeded generator in tests.

        Returns:
            ResetToken: New token
        """
        rng = random_source or secrets.SystemRandom()
        return cls(value="".join(rng.choice(cls.ALPHABET) for _ in range(cls.TOKEN_LENGTH)))

    @classmethod
    def from_existing(cls, token_value: str) -> "ResetToken":
        """Create token from an existing value (e.g., from database)."""
        return cls(value=token_value)

    def matches(self, presented: str) -> bool:
        """Check a caller-supplied value against this token in constant time.

        Presented values are untrusted: wrong lengths, non-alphanumeric
        characters and non-string input simply yield False.
        """
        return constant_time_equals(self.value, presented)

    def mask_for_logging(self) -> str:
        """Get masked token for safe logging.

        Returns:
            str: Token with only the first 4 characters visible
        """
        return f"{self.value[:self.MASK_PREFIX_LENGTH]}..."

    def __repr__(self) -> str:
        return f"ResetToken({self.mask_for_logging()!r})"
