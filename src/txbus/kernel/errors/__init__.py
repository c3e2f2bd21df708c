"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    HttpError
    ├── DomainError              (domain.py)
    │   ├── ValidationError
    │   ├── NotFoundError
    │   └── ConflictError
    └── InternalServerError      (application.py)
        ├── HandlerNotFoundError
        ├── HandlerResolutionError
        ├── HandlerExecutionError
        └── InfrastructureError  (infrastructure.py)
            ├── TransactionBeginError
            ├── CommitError
            ├── RollbackError
            └── TransactionStateError
"""

from txbus.kernel.errors.application import (
    HandlerExecutionError,
    HandlerNotFoundError,
    HandlerResolutionError,
    InternalServerError,
)
from txbus.kernel.errors.base import HttpError
from txbus.kernel.errors.domain import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from txbus.kernel.errors.infrastructure import (
    CommitError,
    InfrastructureError,
    RollbackError,
    TransactionBeginError,
    TransactionStateError,
)

__all__ = [
    "CommitError",
    "ConflictError",
    "DomainError",
    "HandlerExecutionError",
    "HandlerNotFoundError",
    "HandlerResolutionError",
    "HttpError",
    "InfrastructureError",
    "InternalServerError",
    "NotFoundError",
    "RollbackError",
    "TransactionBeginError",
    "TransactionStateError",
    "ValidationError",
]
