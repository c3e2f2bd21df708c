"""Config settings – 12-factor env-based configuration."""
from txbus.config.settings.base import Settings, TxBusSettings
from txbus.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsLoader", "TxBusSettings"]
