"""Application CQRS – map any exception raised during dispatch to an HttpError."""
from __future__ import annotations

from txbus.kernel.errors import HandlerExecutionError, HttpError


def classify_error(exc: BaseException, fallback_detail: str) -> HttpError:
    """Return *exc* unchanged when already classified, else wrap it as a 500.

    The wrapper keeps the original message as detail (or *fallback_detail*
    when the message is empty) and chains *exc* as its cause.
    """
    if isinstance(exc, HttpError):
        return exc
    detail = str(exc) or fallback_detail
    return HandlerExecutionError(detail, cause=exc)


__all__ = ["classify_error"]
