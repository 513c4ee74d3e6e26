"""Centralized, structured exception hierarchy for passreset.

Each exception carries a machine-readable `code` for programmatic error
handling and a human-readable `message` for logging.

"Not found" outcomes are deliberately absent from this module: an unknown
email or a missing reset request is a routine result (``None``/``False``),
never an exception.
"""

from typing import Final

__all__: Final = [
    "PassResetError",
    "PasswordResetStoreError",
    "PasswordResetConflictError",
    "ConcurrentModificationError",
]


class PassResetError(Exception):
    """Base exception class for all custom errors in passreset.

    Attributes:
        message (str): A human-readable error message, suitable for logging.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Persistence errors
# ---------------------------------------------------------------------------


class PasswordResetStoreError(PassResetError):
    """Raised when the reset request store or user directory fails.

    Covers an unreachable database, a store call that exceeded the configured
    timeout, or any unexpected driver error. The original exception is chained
    as ``__cause__``.
    """

    def __init__(self, message: str, code: str = "store_error"):
        super().__init__(message, code)


class PasswordResetConflictError(PasswordResetStoreError):
    """Raised when a reset request could not be saved because concurrent
    writers kept modifying it, even after the configured number of attempts.
    """

    def __init__(
        self,
        message: str = "Password reset request was modified concurrently",
        code: str = "reset_request_conflict",
    ):
        super().__init__(message, code)


class ConcurrentModificationError(PassResetError):
    """Raised by a store when a save lost an optimistic-concurrency race.

    Either another writer inserted a request for the same user first, or the
    stored version no longer matches the version the request was read with.
    The reset service catches this and retries.
    """

    def __init__(
        self,
        message: str = "Stored password reset request changed since it was read",
        code: str = "concurrent_modification",
    ):
        super().__init__(message, code)
