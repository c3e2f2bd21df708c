"""Application – dispatch building blocks (framework-agnostic)."""

from txbus.application.bootstrap import bootstrap
from txbus.application.context import ApplicationContext
from txbus.application.cqrs import (
    Command,
    CommandBus,
    CommandHandler,
    Container,
    HandlerRegistry,
    HandlerResolver,
    HandlerToken,
    Query,
    QueryBus,
    QueryHandler,
    current_unit_of_work,
)

__all__ = [
    "ApplicationContext",
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
    "bootstrap",
    "current_unit_of_work",
]
