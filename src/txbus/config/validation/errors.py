"""Config validation errors.

Raised while settings are loaded, before any bus exists, so they propagate to
the caller of ``bootstrap`` instead of being wrapped in a dispatch Result.
"""
from __future__ import annotations


class ConfigError(Exception):
    """Settings could not be loaded or are invalid."""

    def __init__(self, message: str, *, setting_name: str | None = None) -> None:
        super().__init__(message)
        self.setting_name = setting_name


class MissingRequiredSettingError(ConfigError):
    """A field without a default has no environment variable."""

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Required setting '{setting_name}' is not set", setting_name=setting_name
        )


class InvalidSettingValueError(ConfigError):
    """A setting is present but cannot be used."""

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Invalid value {value!r} for '{setting_name}': {reason}",
            setting_name=setting_name,
        )
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
