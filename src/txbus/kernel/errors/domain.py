"""Domain errors — business rule violations raised by handlers."""

from __future__ import annotations

from typing import Any

from txbus.kernel.errors.base import HttpError


class DomainError(HttpError):
    """Raised when a domain rule is violated."""

    default_status = 422
    default_title = "Unprocessable Entity"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_status = 400
    default_title = "Bad Request"

    def __init__(
        self,
        detail: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(detail, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        if self.errors:
            base["errors"] = self.errors
        return base


class NotFoundError(DomainError):
    """The requested resource does not exist."""

    default_status = 404
    default_title = "Not Found"


class ConflictError(DomainError):
    """The operation conflicts with existing state."""

    default_status = 409
    default_title = "Conflict"


__all__ = [
    "ConflictError",
    "DomainError",
    "NotFoundError",
    "ValidationError",
]
