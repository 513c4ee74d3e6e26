from .settings import Settings, create_settings, env_file_for, settings

__all__ = ["Settings", "create_settings", "env_file_for", "settings"]
