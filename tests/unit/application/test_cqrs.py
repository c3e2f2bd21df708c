"""Unit tests for CQRS — command bus and query bus."""

from __future__ import annotations

import asyncio
import dataclasses

import pytest
from structlog.testing import capture_logs

from txbus.application.cqrs import (
    Command,
    CommandBus,
    CommandHandler,
    Container,
    HandlerRegistry,
    HandlerToken,
    Query,
    QueryBus,
    QueryHandler,
    current_unit_of_work,
)
from txbus.kernel.errors import (
    CommitError,
    HandlerExecutionError,
    HandlerNotFoundError,
    HttpError,
    NotFoundError,
    TransactionBeginError,
)
from txbus.kernel.types import Failure, Success
from txbus.testing import RecordingUnitOfWork, RecordingUnitOfWorkFactory


# ---------------------------------------------------------------------------
# Concrete commands / queries / handlers for tests
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class CreateUser(Command):
    email: str


@dataclasses.dataclass(frozen=True)
class DeleteUser(Command):
    user_id: int


@dataclasses.dataclass(frozen=True)
class GetUser(Query):
    user_id: int


@dataclasses.dataclass(frozen=True)
class ListUsers(Query):
    pass


class CreateUserHandler(CommandHandler[CreateUser, int]):
    def __init__(self) -> None:
        self.handled: list[str] = []

    async def handle(self, command: CreateUser) -> int:
        self.handled.append(command.email)
        return 42


class FailingHandler(CommandHandler[CreateUser, int]):
    def __init__(self, error: BaseException) -> None:
        self._error = error

    async def handle(self, command: CreateUser) -> int:
        raise self._error


class ListUsersHandler(QueryHandler[ListUsers, list[str]]):
    async def handle(self, query: ListUsers) -> list[str]:
        return ["alice", "bob"]


class FailingQueryHandler(QueryHandler[ListUsers, list[str]]):
    def __init__(self, error: BaseException) -> None:
        self._error = error

    async def handle(self, query: ListUsers) -> list[str]:
        raise self._error


CREATE_USER = HandlerToken("create-user")
LIST_USERS = HandlerToken("list-users")


def _command_bus(
    handler: CommandHandler,
    uow_factory: RecordingUnitOfWorkFactory | None = None,
) -> tuple[CommandBus, RecordingUnitOfWorkFactory]:
    factory = uow_factory or RecordingUnitOfWorkFactory()
    registry = HandlerRegistry.from_pairs(Command, [(CreateUser, CREATE_USER)])
    container = Container().bind_instance(CREATE_USER, handler)
    return CommandBus(registry, container, factory), factory


def _query_bus(handler: QueryHandler) -> QueryBus:
    registry = HandlerRegistry.from_pairs(Query, [(ListUsers, LIST_USERS)])
    container = Container().bind_instance(LIST_USERS, handler)
    return QueryBus(registry, container)


# ---------------------------------------------------------------------------
# CommandBus
# ---------------------------------------------------------------------------


class TestCommandBus:
    def test_success_commits_once(self) -> None:
        handler = CreateUserHandler()
        bus, factory = _command_bus(handler)

        result = asyncio.run(bus.execute(CreateUser("a@example.com")))

        assert result == Success(42)
        assert handler.handled == ["a@example.com"]
        assert factory.last.calls == ["begin", "commit"]

    def test_unclassified_error_wrapped_as_500_after_rollback(self) -> None:
        bus, factory = _command_bus(FailingHandler(RuntimeError("db down")))

        result = asyncio.run(bus.execute(CreateUser("a@example.com")))

        assert isinstance(result, Failure)
        assert result.error.status == 500
        assert result.error.title == "Internal Server Error"
        assert result.error.detail == "db down"
        assert isinstance(result.error, HandlerExecutionError)
        assert isinstance(result.error.__cause__, RuntimeError)
        assert factory.last.calls == ["begin", "rollback"]

    def test_classified_error_passes_through_unchanged(self) -> None:
        error = NotFoundError("user missing")
        bus, factory = _command_bus(FailingHandler(error))

        result = asyncio.run(bus.execute(CreateUser("a@example.com")))

        assert isinstance(result, Failure)
        assert result.error is error
        assert (result.error.status, result.error.title, result.error.detail) == (
            404,
            "Not Found",
            "user missing",
        )
        assert factory.last.calls == ["begin", "rollback"]

    def test_custom_classification_passes_through(self) -> None:
        error = HttpError("slow down", status=429, title="Too Many Requests")
        bus, _ = _command_bus(FailingHandler(error))

        result = asyncio.run(bus.execute(CreateUser("a@example.com")))

        assert result.to_dict() == {
            "success": False,
            "error": {"code": 429, "title": "Too Many Requests", "detail": "slow down"},
        }

    def test_error_without_message_uses_fallback_detail(self) -> None:
        bus, _ = _command_bus(FailingHandler(ValueError()))

        result = asyncio.run(bus.execute(CreateUser("a@example.com")))

        assert result.error.detail == "An unknown command execution error occurred."

    def test_unregistered_command_fails_without_transaction(self) -> None:
        bus, factory = _command_bus(CreateUserHandler())

        result = asyncio.run(bus.execute(DeleteUser(7)))

        assert isinstance(result, Failure)
        assert isinstance(result.error, HandlerNotFoundError)
        assert result.error.status == 500
        assert result.error.title == "Internal Server Error"
        assert result.error.detail == "No command handler found for DeleteUser"
        assert factory.created == []

    def test_resolution_failure_rolls_back(self) -> None:
        registry = HandlerRegistry.from_pairs(Command, [(CreateUser, CREATE_USER)])
        factory = RecordingUnitOfWorkFactory()
        bus = CommandBus(registry, Container(), factory)

        result = asyncio.run(bus.execute(CreateUser("a@example.com")))

        assert isinstance(result, Failure)
        assert result.error.status == 500
        assert "create-user" in result.error.detail
        assert factory.last.calls == ["begin", "rollback"]

    def test_begin_failure_skips_handler_and_finalization(self) -> None:
        handler = CreateUserHandler()
        factory = RecordingUnitOfWorkFactory(fail_on_begin=OSError("no connection"))
        bus, _ = _command_bus(handler, factory)

        result = asyncio.run(bus.execute(CreateUser("a@example.com")))

        assert isinstance(result, Failure)
        assert isinstance(result.error, TransactionBeginError)
        assert result.error.status == 500
        assert result.error.detail == "no connection"
        assert handler.handled == []
        assert factory.last.calls == ["begin"]

    def test_uow_factory_failure_is_infrastructure_error(self) -> None:
        def broken_factory() -> RecordingUnitOfWork:
            raise RuntimeError("pool exhausted")

        registry = HandlerRegistry.from_pairs(Command, [(CreateUser, CREATE_USER)])
        container = Container().bind_instance(CREATE_USER, CreateUserHandler())
        bus = CommandBus(registry, container, broken_factory)

        result = asyncio.run(bus.execute(CreateUser("a@example.com")))

        assert isinstance(result.error, TransactionBeginError)
        assert result.error.detail == "pool exhausted"

    def test_commit_failure_rolls_back(self) -> None:
        factory = RecordingUnitOfWorkFactory(fail_on_commit=CommitError("constraint violated"))
        bus, _ = _command_bus(CreateUserHandler(), factory)

        result = asyncio.run(bus.execute(CreateUser("a@example.com")))

        assert isinstance(result, Failure)
        assert isinstance(result.error, CommitError)
        assert result.error.detail == "constraint violated"
        assert factory.last.calls == ["begin", "commit", "rollback"]
        assert factory.last.count("rollback") == 1

    def test_rollback_failure_is_logged_and_original_error_kept(self) -> None:
        factory = RecordingUnitOfWorkFactory(fail_on_rollback=RuntimeError("connection lost"))
        bus, _ = _command_bus(FailingHandler(NotFoundError("user missing")), factory)

        with capture_logs() as logs:
            result = asyncio.run(bus.execute(CreateUser("a@example.com")))

        assert result.error.status == 404
        assert result.error.detail == "user missing"
        events = [entry for entry in logs if entry["event"] == "command.rollback_failed"]
        assert len(events) == 1
        assert events[0]["log_level"] == "error"
        assert events[0]["command"] == "CreateUser"
        assert events[0]["original_error"] == "user missing"
        assert events[0]["error"] == "connection lost"

    def test_shared_error_instance_is_not_modified(self) -> None:
        error = NotFoundError("user missing")
        factory = RecordingUnitOfWorkFactory(fail_on_rollback=RuntimeError("connection lost"))
        bus, _ = _command_bus(FailingHandler(error), factory)

        first = asyncio.run(bus.execute(CreateUser("a@example.com")))
        healthy_bus, _ = _command_bus(FailingHandler(error))
        second = asyncio.run(healthy_bus.execute(CreateUser("b@example.com")))

        assert first.error is error
        assert second.error is error
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_unregistered_tagged_command_reports_class_name(self) -> None:
        @dataclasses.dataclass(frozen=True)
        class ArchiveUser(Command, request_type="users.archive"):
            user_id: int

        bus, _ = _command_bus(CreateUserHandler())

        result = asyncio.run(bus.execute(ArchiveUser(3)))

        assert result.error.detail == "No command handler found for ArchiveUser"

    def test_same_named_command_is_not_routed_to_registered_handler(self) -> None:
        class Billing:
            @dataclasses.dataclass(frozen=True)
            class CreateUser(Command):
                email: str

        handler = CreateUserHandler()
        bus, factory = _command_bus(handler)

        result = asyncio.run(bus.execute(Billing.CreateUser("a@example.com")))

        assert isinstance(result.error, HandlerNotFoundError)
        assert result.error.detail == "No command handler found for CreateUser"
        assert handler.handled == []
        assert factory.created == []

    def test_handler_sees_its_own_unit_of_work(self) -> None:
        seen: list[RecordingUnitOfWork] = []

        class CapturingHandler(CommandHandler[CreateUser, str]):
            async def handle(self, command: CreateUser) -> str:
                uow = current_unit_of_work()
                seen.append(uow)  # type: ignore[arg-type]
                await asyncio.sleep(0)
                assert current_unit_of_work() is uow
                return command.email

        bus, factory = _command_bus(CapturingHandler())

        async def _run() -> list:
            return await asyncio.gather(
                *(bus.execute(CreateUser(f"user{i}@example.com")) for i in range(5))
            )

        results = asyncio.run(_run())

        assert all(isinstance(r, Success) for r in results)
        assert len(factory.created) == 5
        assert len({id(u) for u in factory.created}) == 5
        assert {id(u) for u in seen} == {id(u) for u in factory.created}
        for uow in factory.created:
            assert uow.calls == ["begin", "commit"]

    def test_unit_of_work_not_visible_after_execution(self) -> None:
        bus, _ = _command_bus(CreateUserHandler())
        asyncio.run(bus.execute(CreateUser("a@example.com")))
        with pytest.raises(RuntimeError):
            current_unit_of_work()

    def test_cancellation_rolls_back_and_propagates(self) -> None:
        class SlowHandler(CommandHandler[CreateUser, None]):
            async def handle(self, command: CreateUser) -> None:
                await asyncio.sleep(10)

        bus, factory = _command_bus(SlowHandler())

        async def _run() -> None:
            task = asyncio.create_task(bus.execute(CreateUser("a@example.com")))
            await asyncio.sleep(0.01)
            task.cancel()
            await task

        with pytest.raises(asyncio.CancelledError):
            asyncio.run(_run())
        assert factory.last.calls == ["begin", "rollback"]

    def test_success_is_logged(self) -> None:
        bus, _ = _command_bus(CreateUserHandler())
        with capture_logs() as logs:
            asyncio.run(bus.execute(CreateUser("a@example.com")))
        assert {"event": "command.committed", "command": "CreateUser", "log_level": "info"} in logs

    def test_rejects_query_registry(self) -> None:
        with pytest.raises(TypeError):
            CommandBus(HandlerRegistry(Query), Container(), RecordingUnitOfWorkFactory())  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# QueryBus
# ---------------------------------------------------------------------------


class TestQueryBus:
    def test_returns_handler_value(self) -> None:
        bus = _query_bus(ListUsersHandler())
        result = asyncio.run(bus.execute(ListUsers()))
        assert result == Success(["alice", "bob"])

    def test_unregistered_query_fails(self) -> None:
        bus = _query_bus(ListUsersHandler())

        result = asyncio.run(bus.execute(GetUser(1)))

        assert isinstance(result, Failure)
        assert result.error.to_dict() == {
            "code": 500,
            "title": "Internal Server Error",
            "detail": "No query handler found for GetUser",
        }

    def test_unregistered_tagged_query_reports_class_name(self) -> None:
        @dataclasses.dataclass(frozen=True)
        class SearchUsers(Query, request_type="users.search"):
            term: str

        result = asyncio.run(_query_bus(ListUsersHandler()).execute(SearchUsers("al")))

        assert result.error.detail == "No query handler found for SearchUsers"

    def test_classified_error_passes_through(self) -> None:
        error = NotFoundError("user missing")
        bus = _query_bus(FailingQueryHandler(error))
        result = asyncio.run(bus.execute(ListUsers()))
        assert result.error is error

    def test_unclassified_error_wrapped(self) -> None:
        bus = _query_bus(FailingQueryHandler(LookupError("stale cache")))
        result = asyncio.run(bus.execute(ListUsers()))
        assert isinstance(result.error, HandlerExecutionError)
        assert result.error.status == 500
        assert result.error.detail == "stale cache"

    def test_empty_message_uses_fallback(self) -> None:
        bus = _query_bus(FailingQueryHandler(RuntimeError()))
        result = asyncio.run(bus.execute(ListUsers()))
        assert result.error.detail == "An unknown query execution error occurred."

    def test_query_handler_has_no_unit_of_work(self) -> None:
        class ProbeHandler(QueryHandler[ListUsers, bool]):
            async def handle(self, query: ListUsers) -> bool:
                try:
                    current_unit_of_work()
                except RuntimeError:
                    return False
                return True

        bus = _query_bus(ProbeHandler())
        result = asyncio.run(bus.execute(ListUsers()))
        assert result == Success(False)

    def test_rejects_command_registry(self) -> None:
        with pytest.raises(TypeError):
            QueryBus(HandlerRegistry(Command), Container())  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Public surface smoke test
# ---------------------------------------------------------------------------


class TestPublicReExports:
    def test_all_symbols_importable(self) -> None:
        import importlib

        mod = importlib.import_module("txbus.application.cqrs")
        for name in mod.__all__:
            assert hasattr(mod, name), f"{name!r} missing"
