"""Option[T] — Some and Nothing, the explicit outcome of a lookup."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, NoReturn, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=BaseException)


class Some(Generic[T]):
    """Lookup that found a value."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def is_none(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self._value

    def unwrap_or_raise(self, error: Callable[[], E]) -> T:  # noqa: ARG002
        return self._value

    def __iter__(self) -> Iterator[T]:
        yield self._value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Some) and other._value == self._value

    def __hash__(self) -> int:
        return hash(("some", self._value))

    def __repr__(self) -> str:
        return f"Some({self._value!r})"


class Nothing(Generic[T]):
    """Lookup that found nothing. All instances compare equal."""

    __slots__ = ()

    def is_some(self) -> bool:
        return False

    def is_none(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValueError("Called unwrap() on Nothing")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_raise(self, error: Callable[[], E]) -> NoReturn:
        raise error()

    def __iter__(self) -> Iterator[T]:
        return iter(())

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Nothing)

    def __hash__(self) -> int:
        return hash("nothing")

    def __repr__(self) -> str:
        return "Nothing"


type Option[T] = Some[T] | Nothing[T]

__all__ = ["Nothing", "Option", "Some"]
