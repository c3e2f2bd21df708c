"""Infrastructure errors — transaction lifecycle failures."""

from __future__ import annotations

from txbus.kernel.errors.application import InternalServerError


class InfrastructureError(InternalServerError):
    """Infrastructure / I/O failure that is not a business rule violation."""


class TransactionBeginError(InfrastructureError):
    """A transaction could not be started (e.g. no connection available)."""


class CommitError(InfrastructureError):
    """The underlying store rejected the commit."""


class RollbackError(InfrastructureError):
    """The underlying store failed to roll the transaction back."""


class TransactionStateError(InfrastructureError):
    """A unit-of-work transition was requested from the wrong state."""


__all__ = [
    "CommitError",
    "InfrastructureError",
    "RollbackError",
    "TransactionBeginError",
    "TransactionStateError",
]
