from .password_reset_request import PasswordResetRequest
from .user import User

__all__ = ["PasswordResetRequest", "User"]
