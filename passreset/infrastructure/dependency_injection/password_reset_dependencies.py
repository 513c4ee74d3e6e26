"""Dependency wiring for the password reset service.

Each factory assembles a `PasswordResetService` from concrete adapters. The
event sink is always supplied by the caller; pass `NullEventSink()` when
nothing should react to issued requests.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from passreset.core.config.settings import Settings, settings as default_settings
from passreset.domain.interfaces.repositories import (
    IPasswordResetRequestRepository,
    IUserDirectory,
)
from passreset.domain.interfaces.services import (
    IClock,
    IPasswordResetEventSink,
    ITokenGenerator,
)
from passreset.domain.services.password_reset.password_reset_service import (
    PasswordResetService,
)
from passreset.infrastructure.repositories.password_reset_request_repository import (
    SqlPasswordResetRequestRepository,
)
from passreset.infrastructure.repositories.user_directory import SqlUserDirectory
from passreset.infrastructure.services.clock import SystemClock
from passreset.infrastructure.services.password_reset_options import (
    SettingsPasswordResetOptions,
)
from passreset.infrastructure.services.token_generator import SecureTokenGenerator


def build_password_reset_service(
    user_directory: IUserDirectory,
    request_repository: IPasswordResetRequestRepository,
    event_sink: IPasswordResetEventSink,
    settings: Optional[Settings] = None,
    clock: Optional[IClock] = None,
    token_generator: Optional[ITokenGenerator] = None,
) -> PasswordResetService:
    """Factory that wires the service around the given stores.

    Args:
        user_directory: Directory resolving emails to users
        request_repository: Reset request store
        event_sink: Receives every issued request
        settings: Settings to read options from, defaults to the singleton
        clock: Defaults to `SystemClock`
        token_generator: Defaults to `SecureTokenGenerator`

    Returns:
        PasswordResetService: Ready to use service
    """
    settings = settings or default_settings
    return PasswordResetService(
        user_directory=user_directory,
        request_repository=request_repository,
        token_generator=token_generator or SecureTokenGenerator(),
        clock=clock or SystemClock(),
        options=SettingsPasswordResetOptions(settings),
        event_sink=event_sink,
        max_save_attempts=settings.PASSWORD_RESET_SAVE_MAX_ATTEMPTS,
        store_timeout=settings.PASSWORD_RESET_STORE_TIMEOUT_SECONDS,
    )


def build_sql_password_reset_service(
    session_factory: async_sessionmaker,
    event_sink: IPasswordResetEventSink,
    settings: Optional[Settings] = None,
) -> PasswordResetService:
    """Factory that wires the service to the SQL adapters.

    The adapters open a session from ``session_factory`` per store call, so one
    service may be shared by concurrent tasks.
    """
    return build_password_reset_service(
        user_directory=SqlUserDirectory(session_factory),
        request_repository=SqlPasswordResetRequestRepository(session_factory),
        event_sink=event_sink,
        settings=settings,
    )
