"""SQLAlchemy adapter – session factory and unit of work."""
from txbus.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from txbus.adapters.sqlalchemy.uow import SqlAlchemyUnitOfWork, sqlalchemy_uow_factory

__all__ = [
    "SqlAlchemySessionFactory",
    "SqlAlchemyUnitOfWork",
    "sqlalchemy_uow_factory",
]
