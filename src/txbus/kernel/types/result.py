"""Result[T] — Success and Failure variants returned by every dispatch."""

from __future__ import annotations

from typing import Any, Callable, Generic, NoReturn, TypeVar

from txbus.kernel.errors.base import HttpError

T = TypeVar("T")
U = TypeVar("U")


class Success(Generic[T]):
    """Successful result variant."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    @property
    def error(self) -> None:
        return None

    @property
    def success(self) -> bool:
        return True

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self._value

    def map(self, func: Callable[[T], U]) -> "Success[U]":
        return Success(func(self._value))

    def to_dict(self) -> dict[str, Any]:
        return {"success": True, "value": self._value}

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Success) and other._value == self._value

    def __hash__(self) -> int:
        return hash(("success", self._value))

    def __repr__(self) -> str:
        return f"Success({self._value!r})"


class Failure:
    """Error result variant; always carries a classified :class:`HttpError`."""

    __slots__ = ("_error",)

    def __init__(self, error: HttpError) -> None:
        if not isinstance(error, HttpError):
            raise TypeError(f"Failure requires an HttpError, got {type(error).__name__}")
        self._error = error

    @property
    def error(self) -> HttpError:
        return self._error

    @property
    def value(self) -> None:
        return None

    @property
    def success(self) -> bool:
        return False

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise self._error

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, func: Callable[[Any], Any]) -> "Failure":  # noqa: ARG002
        return self

    def to_dict(self) -> dict[str, Any]:
        return {"success": False, "error": self._error.to_dict()}

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Failure) and other._error == self._error

    def __hash__(self) -> int:
        return hash(("failure", self._error))

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"


type Result[T] = Success[T] | Failure

__all__ = ["Failure", "Result", "Success"]
