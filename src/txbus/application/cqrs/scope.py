"""Application CQRS – ambient access to the unit of work of the running command.

The command bus binds its unit of work to a ``ContextVar`` for the duration of
the handler call, so handlers reach the transactional connection without the
unit being shared across concurrent executions::

    class CreateUserHandler(CommandHandler[CreateUser, int]):
        async def handle(self, command: CreateUser) -> int:
            session = current_unit_of_work().get_connection()
            ...
"""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

from txbus.kernel.ddd import UnitOfWork

_UOW_VAR: ContextVar[UnitOfWork | None] = ContextVar("_txbus_unit_of_work", default=None)


def current_unit_of_work() -> UnitOfWork:
    """Return the unit of work of the command being handled.

    Raises ``RuntimeError`` outside a command handler.
    """
    uow = _UOW_VAR.get()
    if uow is None:
        raise RuntimeError("No unit of work is active in the current context")
    return uow


def get_unit_of_work() -> UnitOfWork | None:
    return _UOW_VAR.get()


@contextmanager
def bind_unit_of_work(uow: UnitOfWork) -> Iterator[UnitOfWork]:
    token = _UOW_VAR.set(uow)
    try:
        yield uow
    finally:
        _UOW_VAR.reset(token)


__all__ = ["bind_unit_of_work", "current_unit_of_work", "get_unit_of_work"]
