"""Unit of Work port — transactional boundary driven by the command bus.

State machine::

    IDLE --begin_transaction--> ACTIVE --commit/rollback--> FINALIZED

``begin_transaction`` is legal only from ``IDLE``; ``commit`` and ``rollback``
only from ``ACTIVE``. ``get_connection`` returns the transactional handle only
while ``ACTIVE``. A ``commit`` that raises leaves the unit ``ACTIVE`` so that a
``rollback`` can still follow it.
"""

from __future__ import annotations

import abc
import enum
from typing import Any

from txbus.kernel.errors import TransactionStateError


class TransactionState(enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"
    FINALIZED = "finalized"


class UnitOfWork(abc.ABC):
    """Port: one transaction, owned by exactly one command execution."""

    def __init__(self) -> None:
        self._state = TransactionState.IDLE

    @property
    def state(self) -> TransactionState:
        return self._state

    @abc.abstractmethod
    async def begin_transaction(self) -> None: ...

    @abc.abstractmethod
    async def commit(self) -> None: ...

    @abc.abstractmethod
    async def rollback(self) -> None: ...

    @abc.abstractmethod
    def get_connection(self) -> Any: ...

    def _require_state(self, expected: TransactionState, operation: str) -> None:
        if self._state is not expected:
            raise TransactionStateError(
                f"Cannot {operation} from state {self._state.value!r} "
                f"(expected {expected.value!r})"
            )

    async def __aenter__(self) -> "UnitOfWork":
        await self.begin_transaction()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if exc_type is None:
            try:
                await self.commit()
            except BaseException:
                await self.rollback()
                raise
        else:
            await self.rollback()


__all__ = ["TransactionState", "UnitOfWork"]
