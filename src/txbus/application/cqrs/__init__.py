"""Application CQRS – Commands, Queries, registry, resolver, buses."""
from txbus.application.cqrs.classify import classify_error
from txbus.application.cqrs.commands import CommandBus, CommandHandler, UnitOfWorkFactory
from txbus.application.cqrs.queries import QueryBus, QueryHandler
from txbus.application.cqrs.registry import (
    HandlerRegistry,
    HandlerToken,
    RegistryFrozenError,
    RequestTypeConflictError,
)
from txbus.application.cqrs.requests import Command, Query, Request
from txbus.application.cqrs.resolver import Container, HandlerResolver
from txbus.application.cqrs.scope import current_unit_of_work

__all__ = [
    "Command",
    "CommandBus",
    "CommandHandler",
    "Container",
    "HandlerRegistry",
    "HandlerResolver",
    "HandlerToken",
    "Query",
    "QueryBus",
    "QueryHandler",
    "RegistryFrozenError",
    "RequestTypeConflictError",
    "Request",
    "UnitOfWorkFactory",
    "classify_error",
    "current_unit_of_work",
]
