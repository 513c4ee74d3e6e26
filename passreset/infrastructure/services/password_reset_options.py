from datetime import timedelta

from passreset.core.config.settings import Settings, settings as default_settings
from passreset.domain.interfaces.services import IPasswordResetOptions


class SettingsPasswordResetOptions(IPasswordResetOptions):
    """Reads the reset options from application settings on every access.

    Nothing is cached, so a changed ``PASSWORD_RESET_TOKEN_VALIDITY_MINUTES``
    applies to the next issued or renewed token.
    """

    def __init__(self, settings: Settings = None):
        self._settings = settings or default_settings

    @property
    def token_validity_interval(self) -> timedelta:
        return timedelta(minutes=self._settings.PASSWORD_RESET_TOKEN_VALIDITY_MINUTES)
