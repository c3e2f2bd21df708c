"""Config settings – Settings base class and the bus settings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from txbus.config.validation.errors import InvalidSettingValueError

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class TxBusSettings(Settings):
    """Settings read by :func:`txbus.application.bootstrap.bootstrap`.

    Environment variables: ``TXBUS_DATABASE_URL``, ``TXBUS_LOG_LEVEL``,
    ``TXBUS_JSON_LOGS``, ``TXBUS_ECHO_SQL``.
    """

    _prefix: ClassVar[str] = "TXBUS"

    database_url: str = "sqlite+aiosqlite:///:memory:"
    log_level: str = "INFO"
    json_logs: bool = True
    echo_sql: bool = False

    def _validate(self) -> None:
        if not self.database_url:
            raise InvalidSettingValueError("database_url", self.database_url, "must not be empty")
        level = self.log_level.upper()
        if level not in _LOG_LEVELS:
            raise InvalidSettingValueError(
                "log_level", self.log_level, f"expected one of {sorted(_LOG_LEVELS)}"
            )
        self.log_level = level


__all__ = ["Settings", "TxBusSettings"]
