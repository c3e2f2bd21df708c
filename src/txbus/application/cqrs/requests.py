"""Application CQRS – Request, Command, Query with declared type tags.

Every concrete request class carries a ``request_type`` tag, fixed when the
class is defined and used as the registry key::

    @dataclasses.dataclass(frozen=True)
    class CreateUser(Command, request_type="users.create"):
        email: str

When no tag is declared the class name is used.
"""
from __future__ import annotations

from typing import Any, ClassVar


class Request:
    """Base of the two sealed request categories. Pure data, no behavior."""

    request_type: ClassVar[str]
    category: ClassVar[str] = "request"

    def __init_subclass__(cls, *, request_type: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if request_type is not None:
            if not request_type:
                raise ValueError(f"{cls.__name__}: request_type must not be empty")
            cls.request_type = request_type
        elif "request_type" not in cls.__dict__:
            cls.request_type = cls.__name__


class Command(Request):
    """Intent to change state; dispatched inside a transaction."""

    category: ClassVar[str] = "command"


class Query(Request):
    """Intent to read state; dispatched without a transaction."""

    category: ClassVar[str] = "query"


__all__ = ["Command", "Query", "Request"]
