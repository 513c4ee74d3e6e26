from .reset_token import ResetToken

__all__ = ["ResetToken"]
