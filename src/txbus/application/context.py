"""ApplicationContext – the value through which an application dispatches.

Built once by :func:`txbus.application.bootstrap.bootstrap` and passed by
reference to whatever needs to send commands or queries.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Awaitable, Callable

from txbus.application.cqrs.commands import CommandBus
from txbus.application.cqrs.queries import QueryBus
from txbus.application.cqrs.requests import Command, Query, Request
from txbus.kernel.types import Result


@dataclasses.dataclass(frozen=True)
class ApplicationContext:
    command_bus: CommandBus
    query_bus: QueryBus
    on_close: Callable[[], Awaitable[None]] | None = None

    async def dispatch(self, request: Request) -> Result[Any]:
        """Route *request* to the bus matching its category."""
        if isinstance(request, Command):
            return await self.command_bus.execute(request)
        if isinstance(request, Query):
            return await self.query_bus.execute(request)
        raise TypeError(f"Unknown request type: {type(request).__name__}")

    async def aclose(self) -> None:
        """Release resources owned by the context (e.g. the database engine)."""
        if self.on_close is not None:
            await self.on_close()


__all__ = ["ApplicationContext"]
