"""Composition root: build the registries, buses and context at startup.

Usage::

    CREATE_USER = HandlerToken("create-user")
    GET_USER = HandlerToken("get-user")

    container = (
        Container()
        .bind(CREATE_USER, CreateUserHandler, expects=CreateUserHandler)
        .bind(GET_USER, GetUserHandler, expects=GetUserHandler)
    )
    context = bootstrap(
        EnvSettingsLoader().load(TxBusSettings),
        commands=[(CreateUser, CREATE_USER)],
        queries=[(GetUser, GET_USER)],
        container=container,
    )
    result = await context.dispatch(CreateUser(email="a@b.c"))
"""
from __future__ import annotations

from typing import Any, Iterable

from txbus.application.context import ApplicationContext
from txbus.application.cqrs.commands import CommandBus, UnitOfWorkFactory
from txbus.application.cqrs.queries import QueryBus
from txbus.application.cqrs.registry import HandlerRegistry, HandlerToken
from txbus.application.cqrs.requests import Command, Query
from txbus.application.cqrs.resolver import HandlerResolver
from txbus.config.settings import TxBusSettings
from txbus.observability.logging import JsonLoggerFactory, get_logger

_log = get_logger(__name__)


def bootstrap(
    settings: TxBusSettings | None = None,
    *,
    commands: Iterable[tuple[type[Command], HandlerToken[Any]]] = (),
    queries: Iterable[tuple[type[Query], HandlerToken[Any]]] = (),
    container: HandlerResolver,
    uow_factory: UnitOfWorkFactory | None = None,
    configure_logging: bool = True,
) -> ApplicationContext:
    """Build an :class:`ApplicationContext`.

    Both registries are frozen before the context is returned. When no
    *uow_factory* is given a SQLAlchemy engine is created from
    ``settings.database_url`` and each command gets its own
    :class:`~txbus.adapters.sqlalchemy.SqlAlchemyUnitOfWork`; the engine is
    disposed by :meth:`ApplicationContext.aclose`.
    """
    settings = settings or TxBusSettings()
    if configure_logging:
        JsonLoggerFactory.configure(settings.log_level, json=settings.json_logs)

    command_registry = HandlerRegistry.from_pairs(Command, commands)
    query_registry = HandlerRegistry.from_pairs(Query, queries)
    freeze = getattr(container, "freeze", None)
    if callable(freeze):
        freeze()

    on_close = None
    if uow_factory is None:
        from txbus.adapters.sqlalchemy import SqlAlchemySessionFactory, sqlalchemy_uow_factory

        session_factory = SqlAlchemySessionFactory(settings.database_url, echo=settings.echo_sql)
        uow_factory = sqlalchemy_uow_factory(session_factory)
        on_close = session_factory.dispose

    _log.info(
        "bootstrap.completed",
        commands=len(command_registry),
        queries=len(query_registry),
    )
    return ApplicationContext(
        command_bus=CommandBus(command_registry, container, uow_factory),
        query_bus=QueryBus(query_registry, container),
        on_close=on_close,
    )


__all__ = ["bootstrap"]
