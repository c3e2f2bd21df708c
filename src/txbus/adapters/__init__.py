"""Adapters – concrete infrastructure for the kernel ports.

Import the sub-package you need; each pulls its own optional dependency::

    from txbus.adapters.sqlalchemy import SqlAlchemyUnitOfWork
    from txbus.adapters.fastapi import result_response
"""
