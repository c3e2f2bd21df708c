"""SQLAlchemy adapter – SqlAlchemyUnitOfWork.

One instance per command execution. ``begin_transaction`` opens a session,
begins it and eagerly checks out its connection so that an unreachable
database surfaces as :class:`TransactionBeginError` before any handler runs.
``get_connection`` hands the :class:`AsyncSession` to handlers.
"""
from __future__ import annotations

from typing import Any, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from txbus.kernel.ddd import TransactionState, UnitOfWork
from txbus.kernel.errors import (
    CommitError,
    RollbackError,
    TransactionBeginError,
    TransactionStateError,
)
from txbus.observability.logging import get_logger

_log = get_logger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy async unit of work."""

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        super().__init__()
        self._factory = session_factory
        self._session: AsyncSession | None = None

    async def begin_transaction(self) -> None:
        self._require_state(TransactionState.IDLE, "begin a transaction")
        session = self._factory()
        try:
            await session.begin()
            await session.connection()
        except (SQLAlchemyError, OSError) as exc:
            _log.error("uow.begin_failed", error=str(exc))
            await session.close()
            raise TransactionBeginError(f"Could not begin transaction: {exc}", cause=exc) from exc
        except BaseException:
            # cancellation or any other interruption still returns the connection
            await session.close()
            raise
        self._session = session
        self._state = TransactionState.ACTIVE

    async def commit(self) -> None:
        session = self._active_session("commit")
        try:
            await session.commit()
        except SQLAlchemyError as exc:
            # the unit stays ACTIVE so the caller can still roll back
            _log.error("uow.commit_failed", error=str(exc))
            raise CommitError(f"Commit failed: {exc}", cause=exc) from exc
        await self._release()

    async def rollback(self) -> None:
        session = self._active_session("roll back")
        try:
            await session.rollback()
        except SQLAlchemyError as exc:
            _log.error("uow.rollback_failed", error=str(exc))
            raise RollbackError(f"Rollback failed: {exc}", cause=exc) from exc
        finally:
            await self._release()

    def get_connection(self) -> AsyncSession:
        return self._active_session("get a connection")

    def _active_session(self, operation: str) -> AsyncSession:
        self._require_state(TransactionState.ACTIVE, operation)
        if self._session is None:
            raise TransactionStateError(f"Cannot {operation}: no session is open")
        return self._session

    async def _release(self) -> None:
        session, self._session = self._session, None
        self._state = TransactionState.FINALIZED
        if session is not None:
            await session.close()

    def __repr__(self) -> str:
        return f"SqlAlchemyUnitOfWork(state={self._state.value!r})"


def sqlalchemy_uow_factory(session_factory: Callable[[], AsyncSession]) -> Callable[[], Any]:
    """Return a zero-argument factory producing a fresh unit of work per call."""

    def _factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory)

    return _factory


__all__ = ["SqlAlchemyUnitOfWork", "sqlalchemy_uow_factory"]
