"""Application CQRS – QueryHandler and the non-transactional QueryBus."""
from __future__ import annotations

import abc
from typing import Any, Generic, TypeVar

from txbus.application.cqrs.classify import classify_error
from txbus.application.cqrs.registry import HandlerRegistry
from txbus.application.cqrs.requests import Query
from txbus.application.cqrs.resolver import HandlerResolver
from txbus.kernel.errors import HandlerNotFoundError
from txbus.kernel.types import Failure, Result, Success
from txbus.observability.logging import get_logger

Q = TypeVar("Q", bound=Query)
R = TypeVar("R")

UNKNOWN_QUERY_ERROR = "An unknown query execution error occurred."

_log = get_logger(__name__)


class QueryHandler(abc.ABC, Generic[Q, R]):
    """Handle a single query type and return a result."""

    @abc.abstractmethod
    async def handle(self, query: Q) -> R: ...


class QueryBus:
    """Dispatches queries to their handlers; never opens a transaction."""

    def __init__(self, registry: HandlerRegistry[Query], resolver: HandlerResolver) -> None:
        if not issubclass(registry.kind, Query):
            raise TypeError("QueryBus requires a query registry")
        self._registry = registry
        self._resolver = resolver

    @property
    def registry(self) -> HandlerRegistry[Query]:
        return self._registry

    async def execute(self, query: Query) -> Result[Any]:
        tag = query.request_type
        token = self._registry.resolve(query)
        if token.is_none():
            _log.warning("query.handler_not_found", query=tag)
            return Failure(HandlerNotFoundError("query", type(query).__name__))

        try:
            handler = self._resolver.resolve(token.unwrap())
            value = await handler.handle(query)
        except Exception as exc:
            error = classify_error(exc, UNKNOWN_QUERY_ERROR)
            _log.warning("query.failed", query=tag, status=error.status, error=error.detail)
            return Failure(error)
        return Success(value)


__all__ = ["QueryBus", "QueryHandler", "UNKNOWN_QUERY_ERROR"]
