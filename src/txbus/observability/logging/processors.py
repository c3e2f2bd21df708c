"""Observability – structlog processors and the get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog


class UnitOfWorkStateProcessor:
    """structlog processor that adds ``uow_state`` while a command is being handled.

    Usage::

        structlog.configure(processors=[UnitOfWorkStateProcessor(), ...])
    """

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        from txbus.application.cqrs.scope import get_unit_of_work

        uow = get_unit_of_work()
        if uow is not None:
            event_dict.setdefault("uow_state", uow.state.value)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["UnitOfWorkStateProcessor", "get_logger"]
