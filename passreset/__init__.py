"""Password reset token lifecycle: issuance and validation of reset tokens."""

__version__ = "0.1.0"
