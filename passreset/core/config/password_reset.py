"""
Password reset settings.
"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class PasswordResetSettings(BaseSettings):
    """
    Defines the knobs of the reset token lifecycle.

    Attributes:
        PASSWORD_RESET_TOKEN_VALIDITY_MINUTES: Minutes added to "now" whenever a
            reset request is issued or renewed.
        PASSWORD_RESET_SAVE_MAX_ATTEMPTS: How many times a reset request is
            re-read and saved again after a concurrent modification.
        PASSWORD_RESET_STORE_TIMEOUT_SECONDS: Upper bound for a single store
            call. ``None`` leaves timeouts to the caller.
    """
    PASSWORD_RESET_TOKEN_VALIDITY_MINUTES: int = Field(gt=0, default=60)
    PASSWORD_RESET_SAVE_MAX_ATTEMPTS: int = Field(ge=1, default=3)
    PASSWORD_RESET_STORE_TIMEOUT_SECONDS: Optional[float] = Field(gt=0, default=None)
