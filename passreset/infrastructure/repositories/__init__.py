from .in_memory import InMemoryPasswordResetRequestRepository, InMemoryUserDirectory
from .password_reset_request_repository import SqlPasswordResetRequestRepository
from .user_directory import SqlUserDirectory

__all__ = [
    "InMemoryPasswordResetRequestRepository",
    "InMemoryUserDirectory",
    "SqlPasswordResetRequestRepository",
    "SqlUserDirectory",
]
