"""Kernel – framework-agnostic building blocks (errors, result types, UoW port)."""

from txbus.kernel.ddd import TransactionState, UnitOfWork
from txbus.kernel.errors import (
    ConflictError,
    DomainError,
    HttpError,
    InternalServerError,
    NotFoundError,
    ValidationError,
)
from txbus.kernel.types import Failure, Nothing, Option, Result, Some, Success

__all__ = [
    "ConflictError",
    "DomainError",
    "Failure",
    "HttpError",
    "InternalServerError",
    "NotFoundError",
    "Nothing",
    "Option",
    "Result",
    "Some",
    "Success",
    "TransactionState",
    "UnitOfWork",
    "ValidationError",
]
