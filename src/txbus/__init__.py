"""
txbus – transactional command/query dispatch.

Import path convention::

    from txbus.kernel.errors import NotFoundError
    from txbus.kernel.types import Success, Failure
    from txbus.application.cqrs import Command, CommandHandler, HandlerToken
    from txbus.application import bootstrap
    from txbus.adapters.sqlalchemy import SqlAlchemyUnitOfWork
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
