"""Transactional building blocks — public re-export surface."""

from txbus.kernel.ddd.unit_of_work import TransactionState, UnitOfWork

__all__ = ["TransactionState", "UnitOfWork"]
