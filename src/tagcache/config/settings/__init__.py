"""Config settings – immutable, env-loadable configuration."""
from tagcache.config.settings.base import Settings
from tagcache.config.settings.factory import SettingsFactory
from tagcache.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsFactory", "SettingsLoader"]
