"""Config settings – build a Settings dataclass from the process environment.

Each field ``name`` of a settings class with ``_prefix = "TXBUS"`` is read
from ``TXBUS_NAME``. Values are coerced from the field's annotation::

    bool        "1" / "true" / "yes" / "on" (any case) → True, anything else False
    int, float  parsed, InvalidSettingValueError when malformed
    list[str]   comma separated, blanks dropped
"""
from __future__ import annotations

import abc
import dataclasses
import os
import typing
from typing import Any, Callable, TypeVar

from txbus.config.settings.base import Settings
from txbus.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _to_bool(raw: str) -> bool:
    return raw.strip().lower() in _TRUTHY


def _to_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


_COERCERS: dict[Any, Callable[[str], Any]] = {
    bool: _to_bool,
    int: int,
    float: float,
    list: _to_list,
}


def env_key(prefix: str, field_name: str) -> str:
    """``("TXBUS", "log_level")`` → ``"TXBUS_LOG_LEVEL"``."""
    return f"{prefix}_{field_name}".upper() if prefix else field_name.upper()


def _coerce(key: str, raw: str, hint: Any) -> Any:
    target = typing.get_origin(hint) or hint
    coercer = _COERCERS.get(target)
    if coercer is None:
        return raw
    try:
        return coercer(raw)
    except ValueError as exc:
        raise InvalidSettingValueError(key, raw, f"expected {target.__name__}") from exc


class SettingsLoader(abc.ABC):
    """Port: build a settings instance from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Read settings from ``os.environ``.

    Unset variables leave the field default in place; a field without a
    default raises :class:`MissingRequiredSettingError`.
    """

    def load(self, settings_class: type[T]) -> T:
        hints = typing.get_type_hints(settings_class)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):
            key = env_key(settings_class._prefix, field.name)
            raw = os.environ.get(key)
            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING
                ):
                    raise MissingRequiredSettingError(key)
                continue
            kwargs[field.name] = _coerce(key, raw, hints.get(field.name, str))

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load {settings_class.__name__}: {exc}") from exc


class DotenvSettingsLoader(SettingsLoader):
    """Merge a ``.env`` file into the environment, then load like :class:`EnvSettingsLoader`.

    Variables already set in the process win unless *override* is true.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        from dotenv import load_dotenv

        load_dotenv(self._env_file, override=self._override)
        return EnvSettingsLoader().load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader", "env_key"]
