from .password_reset_events import BaseDomainEvent, PasswordResetRequestedEvent

__all__ = ["BaseDomainEvent", "PasswordResetRequestedEvent"]
