"""Application-layer errors — failures of the dispatch machinery itself."""

from __future__ import annotations

from typing import Any

from txbus.kernel.errors.base import HttpError


class InternalServerError(HttpError):
    """Generic 500 classification for anything the caller cannot act on."""

    default_status = 500
    default_title = "Internal Server Error"


class HandlerNotFoundError(InternalServerError):
    """No registry entry exists for a request's type tag."""

    def __init__(self, category: str, request_type: str, **kwargs: Any) -> None:
        super().__init__(f"No {category} handler found for {request_type}", **kwargs)
        self.category = category
        self.request_type = request_type


class HandlerResolutionError(InternalServerError):
    """The resolver could not produce a handler instance for a token."""

    def __init__(self, token: Any, reason: str | None = None, **kwargs: Any) -> None:
        super().__init__(reason or f"No handler binding for {token!r}", **kwargs)
        self.token = token


class HandlerExecutionError(InternalServerError):
    """A handler raised an error that carried no classification of its own."""


__all__ = [
    "HandlerExecutionError",
    "HandlerNotFoundError",
    "HandlerResolutionError",
    "InternalServerError",
]
