"""Application CQRS – HandlerToken and HandlerRegistry.

The registry maps a request's declared type tag to an opaque
:class:`HandlerToken`. It is populated once during bootstrap from an ordered
sequence of ``(request_type, token)`` pairs and then frozen; after that it is
read-only and may be shared by any number of concurrent dispatches.

Usage::

    CREATE_USER = HandlerToken("create-user")

    registry = HandlerRegistry.from_pairs(Command, [(CreateUser, CREATE_USER)])
    registry.resolve(CreateUser)          # Some(HandlerToken('create-user'))
    registry.resolve(DeleteUser)          # Nothing
"""
from __future__ import annotations

import types
from typing import Any, Generic, Iterable, Mapping, TypeVar

from txbus.application.cqrs.requests import Request
from txbus.kernel.types import Nothing, Option, Some
from txbus.observability.logging import get_logger

H = TypeVar("H")
R = TypeVar("R", bound=Request)

_log = get_logger(__name__)


class HandlerToken(Generic[H]):
    """Opaque, process-unique handle used to resolve a handler instance.

    Tokens compare by identity: two tokens built with the same *name* are
    different tokens. The name only serves diagnostics.
    """

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError("HandlerToken name must not be empty")
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __setattr__(self, key: str, value: Any) -> None:
        if hasattr(self, "_name"):
            raise AttributeError("HandlerToken is immutable")
        object.__setattr__(self, key, value)

    def __repr__(self) -> str:
        return f"HandlerToken({self._name!r})"


class RegistryFrozenError(RuntimeError):
    """Raised when registration is attempted after bootstrap completed."""


class RequestTypeConflictError(ValueError):
    """Raised when two different request classes declare the same type tag."""


class HandlerRegistry(Generic[R]):
    """Type-tag → token mapping for one request category (commands or queries).

    Each tag remembers the class that claimed it. Re-registering that class
    replaces its token; a different class with the same tag is rejected, and
    lookups only match the exact registered class.
    """

    def __init__(self, kind: type[R]) -> None:
        self._kind = kind
        self._entries: dict[str, tuple[type[R], HandlerToken[Any]]] = {}
        self._frozen = False

    @classmethod
    def from_pairs(
        cls,
        kind: type[R],
        pairs: Iterable[tuple[type[R], HandlerToken[Any]]],
    ) -> "HandlerRegistry[R]":
        """Build a registry from ordered pairs, then freeze it."""
        registry = cls(kind)
        for request_type, token in pairs:
            registry.register(request_type, token)
        registry.freeze()
        return registry

    @property
    def kind(self) -> type[R]:
        return self._kind

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, request_type: type[R], token: HandlerToken[Any]) -> None:
        """Map *request_type* to *token*. Last registration for a class wins."""
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register {request_type!r}: registry is frozen"
            )
        if not isinstance(request_type, type) or not issubclass(request_type, self._kind):
            raise TypeError(
                f"{request_type!r} is not a {self._kind.__name__} type"
            )
        if not isinstance(token, HandlerToken):
            raise TypeError(f"Expected a HandlerToken, got {type(token).__name__}")
        tag = request_type.request_type
        existing = self._entries.get(tag)
        if existing is not None:
            owner, previous = existing
            if owner is not request_type:
                raise RequestTypeConflictError(
                    f"Request type tag {tag!r} of {request_type.__module__}.{request_type.__qualname__} "
                    f"is already used by {owner.__module__}.{owner.__qualname__}; "
                    "declare a distinct request_type"
                )
            if previous is not token:
                _log.debug("registry.overwrite", request_type=tag, previous=previous.name, token=token.name)
        self._entries[tag] = (request_type, token)

    def freeze(self) -> None:
        """Seal the registry; no further registration is accepted."""
        if not self._frozen:
            self._entries = types.MappingProxyType(dict(self._entries))  # type: ignore[assignment]
            self._frozen = True

    def resolve(self, request: type[R] | R) -> Option[HandlerToken[Any]]:
        """Return ``Some(token)`` for the registered class, ``Nothing()`` otherwise."""
        request_type = request if isinstance(request, type) else type(request)
        entry = self._entries.get(request_type.request_type)
        if entry is None or entry[0] is not request_type:
            return Nothing()
        return Some(entry[1])

    def entries(self) -> Mapping[str, HandlerToken[Any]]:
        return types.MappingProxyType({tag: token for tag, (_, token) in self._entries.items()})

    def request_types(self) -> tuple[type[R], ...]:
        return tuple(owner for owner, _ in self._entries.values())

    def __contains__(self, request: object) -> bool:
        request_type = request if isinstance(request, type) else type(request)
        if not issubclass(request_type, Request):
            return False
        return self.resolve(request_type).is_some()  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["HandlerRegistry", "HandlerToken", "RegistryFrozenError", "RequestTypeConflictError"]
