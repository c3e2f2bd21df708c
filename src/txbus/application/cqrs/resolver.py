"""Application CQRS – HandlerResolver port and the typed Container.

The buses never construct handlers themselves: they hand the token found in
the registry to a :class:`HandlerResolver` and receive a live instance.
:class:`Container` is the in-process implementation: one factory per token,
an optional expected handler class checked on every resolution, and an
explicit :class:`HandlerResolutionError` instead of an unchecked cast.
"""
from __future__ import annotations

import abc
import dataclasses
from typing import Any, Callable, Generic, TypeVar

from txbus.application.cqrs.registry import HandlerToken, RegistryFrozenError
from txbus.kernel.errors import HandlerResolutionError

H = TypeVar("H")


class HandlerResolver(abc.ABC):
    """Port: produce a handler instance for a token."""

    @abc.abstractmethod
    def resolve(self, token: HandlerToken[H]) -> H: ...


@dataclasses.dataclass
class _Binding(Generic[H]):
    factory: Callable[[], H]
    expects: type | None = None
    singleton: bool = False
    instance: H | None = None


class Container(HandlerResolver):
    """Token → factory bindings, populated at bootstrap."""

    def __init__(self) -> None:
        self._bindings: dict[HandlerToken[Any], _Binding[Any]] = {}
        self._frozen = False

    def bind(
        self,
        token: HandlerToken[H],
        factory: Callable[[], H],
        *,
        expects: type[H] | None = None,
        singleton: bool = False,
    ) -> "Container":
        """Bind *token* to *factory* (fluent API).

        *expects* is checked against every produced instance. With
        *singleton* the factory runs once and its instance is reused.
        """
        if self._frozen:
            raise RegistryFrozenError(f"Cannot bind {token!r}: container is frozen")
        if not callable(factory):
            raise TypeError(f"Factory for {token!r} is not callable")
        self._bindings[token] = _Binding(factory=factory, expects=expects, singleton=singleton)
        return self

    def bind_instance(self, token: HandlerToken[H], instance: H) -> "Container":
        """Bind *token* to an already constructed handler."""
        return self.bind(token, lambda: instance, expects=type(instance), singleton=True)

    def freeze(self) -> None:
        self._frozen = True

    def resolve(self, token: HandlerToken[H]) -> H:
        binding = self._bindings.get(token)
        if binding is None:
            raise HandlerResolutionError(token)
        if binding.singleton and binding.instance is not None:
            return binding.instance
        try:
            instance = binding.factory()
        except Exception as exc:
            raise HandlerResolutionError(
                token, f"Factory for {token.name!r} failed: {exc}", cause=exc
            ) from exc
        if binding.expects is not None and not isinstance(instance, binding.expects):
            raise HandlerResolutionError(
                token,
                f"Factory for {token.name!r} produced {type(instance).__name__}, "
                f"expected {binding.expects.__name__}",
            )
        if binding.singleton:
            binding.instance = instance
        return instance

    def __contains__(self, token: object) -> bool:
        return token in self._bindings


__all__ = ["Container", "HandlerResolver"]
