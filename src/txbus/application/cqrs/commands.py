"""Application CQRS – CommandHandler and the transactional CommandBus.

For every command the bus drives one fresh unit of work through::

    begin_transaction → handler.handle(command) → commit
                                   ↘ (any failure) → rollback

and always answers with a :class:`~txbus.kernel.types.Result`.
"""
from __future__ import annotations

import abc
from typing import Any, Callable, Generic, TypeVar

from txbus.application.cqrs.classify import classify_error
from txbus.application.cqrs.registry import HandlerRegistry
from txbus.application.cqrs.requests import Command
from txbus.application.cqrs.resolver import HandlerResolver
from txbus.application.cqrs.scope import bind_unit_of_work
from txbus.kernel.ddd import UnitOfWork
from txbus.kernel.errors import (
    HandlerNotFoundError,
    HttpError,
    TransactionBeginError,
)
from txbus.kernel.types import Failure, Result, Success
from txbus.observability.logging import get_logger

C = TypeVar("C", bound=Command)
R = TypeVar("R")

UnitOfWorkFactory = Callable[[], UnitOfWork]

UNKNOWN_COMMAND_ERROR = "An unknown command execution error occurred."

_log = get_logger(__name__)


class CommandHandler(abc.ABC, Generic[C, R]):
    """Handle a single command type."""

    @abc.abstractmethod
    async def handle(self, command: C) -> R: ...


class CommandBus:
    """Dispatches each command to its handler inside its own transaction."""

    def __init__(
        self,
        registry: HandlerRegistry[Command],
        resolver: HandlerResolver,
        uow_factory: UnitOfWorkFactory,
    ) -> None:
        if not issubclass(registry.kind, Command):
            raise TypeError("CommandBus requires a command registry")
        self._registry = registry
        self._resolver = resolver
        self._uow_factory = uow_factory

    @property
    def registry(self) -> HandlerRegistry[Command]:
        return self._registry

    async def execute(self, command: Command) -> Result[Any]:
        tag = command.request_type
        token = self._registry.resolve(command)
        if token.is_none():
            _log.warning("command.handler_not_found", command=tag)
            return Failure(HandlerNotFoundError("command", type(command).__name__))

        try:
            uow = self._uow_factory()
            await uow.begin_transaction()
        except Exception as exc:
            error = exc if isinstance(exc, HttpError) else TransactionBeginError(
                str(exc) or "Failed to begin transaction", cause=exc
            )
            _log.error("command.begin_failed", command=tag, error=error.detail)
            return Failure(error)

        try:
            with bind_unit_of_work(uow):
                handler = self._resolver.resolve(token.unwrap())
                value = await handler.handle(command)
            await uow.commit()
        except Exception as exc:
            error = classify_error(exc, UNKNOWN_COMMAND_ERROR)
            _log.warning(
                "command.failed",
                command=tag,
                status=error.status,
                error=error.detail,
            )
            await self._rollback(uow, tag, error)
            return Failure(error)
        except BaseException:
            # cancellation: release the transaction, then let it propagate
            await self._rollback(uow, tag, None)
            raise

        _log.info("command.committed", command=tag)
        return Success(value)

    async def _rollback(self, uow: UnitOfWork, tag: str, error: HttpError | None) -> None:
        # a rollback failure is only logged; the caller keeps the original outcome
        try:
            await uow.rollback()
        except Exception as exc:
            _log.error(
                "command.rollback_failed",
                command=tag,
                error=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                original_error=error.detail if error is not None else None,
            )


__all__ = ["CommandBus", "CommandHandler", "UNKNOWN_COMMAND_ERROR", "UnitOfWorkFactory"]
