"""Config – 12-factor settings and loaders."""

from tagcache.config.settings import EnvSettingsLoader, Settings, SettingsLoader

__all__ = ["EnvSettingsLoader", "Settings", "SettingsLoader"]
