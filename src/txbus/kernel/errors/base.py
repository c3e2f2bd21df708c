"""Root error class for the txbus error hierarchy."""

from __future__ import annotations

from typing import Any


class HttpError(Exception):
    """Root of the error hierarchy: an error that already carries a classification.

    Args:
        detail: Human-readable description of this particular failure.
        status: Status-like code (defaults to the class ``default_status``).
        title: Short title (defaults to the class ``default_title``).
        cause: Original exception that triggered this error.

    Buses pass instances of this class through to the caller unchanged.
    """

    default_status: int = 500
    default_title: str = "Internal Server Error"

    def __init__(
        self,
        detail: str = "",
        *,
        status: int | None = None,
        title: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(detail)
        self.status = status if status is not None else self.default_status
        self.title = title or self.default_title
        self.detail = detail
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def code(self) -> int:
        """Alias of :attr:`status`, matching the wire field name."""
        return self.status

    def __str__(self) -> str:
        return self.detail

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status!r}, title={self.title!r}, detail={self.detail!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HttpError):
            return NotImplemented
        return (self.status, self.title, self.detail) == (other.status, other.title, other.detail)

    def __hash__(self) -> int:
        return hash((self.status, self.title, self.detail))

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the wire error shape."""
        return {"code": self.status, "title": self.title, "detail": self.detail}


__all__ = ["HttpError"]
