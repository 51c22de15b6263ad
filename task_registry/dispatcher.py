"""Request dispatcher mapping named operations onto the task service.

Requests name an operation (``getTasks``, ``addTask``, ...) and carry a list
of JSON-compatible arguments. Responses are result envelopes: ``{"Ok": value}``
on success and ``{"Err": message}`` when the addressed task does not exist.

Typical usage example:
    dispatcher = RequestDispatcher(service)
    dispatcher.dispatch("addTask", [{"title": "A", "description": "d", "completed": False}])
    dispatcher.dispatch_json("getTask", '["<id>"]')
"""

import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .core.errors import DispatchError, TaskNotFoundError
from .schemas.unified_models import TaskCore, TaskPayload
from .services.task_service import TaskService


logger = logging.getLogger(__name__)


class OperationKind(StrEnum):
    """Whether an operation only reads or also writes the store."""

    QUERY = "query"
    UPDATE = "update"


@dataclass(frozen=True)
class Operation:
    """A named entry point of the request surface."""

    name: str
    kind: OperationKind
    params: tuple[type, ...]
    handler: Callable[..., Any]


def encode_result(value: Any) -> Any:
    """Convert service results into JSON-compatible values."""
    if isinstance(value, TaskCore):
        return value.to_wire()
    if isinstance(value, list):
        return [encode_result(item) for item in value]
    return value


class RequestDispatcher:
    """Routes named requests to ``TaskService`` calls."""

    def __init__(self, service: TaskService):
        self.service = service
        self._operations = {op.name: op for op in self._build_operations()}
        self._adapters: dict[type, TypeAdapter] = {
            param: TypeAdapter(param)
            for op in self._operations.values()
            for param in op.params
        }

    def _build_operations(self) -> list[Operation]:
        service = self.service
        query, update = OperationKind.QUERY, OperationKind.UPDATE
        return [
            Operation("getTasks", query, (), service.get_tasks),
            Operation("getTask", query, (str,), service.get_task),
            Operation("addTask", update, (TaskPayload,), service.add_task),
            Operation("updateTask", update, (str, TaskPayload), service.update_task),
            Operation("completeTask", update, (str,), service.complete_task),
            Operation("deleteTask", update, (str,), service.delete_task),
            Operation("listCompletedTasks", query, (), service.list_completed_tasks),
            Operation(
                "listIncompleteTasks", query, (), service.list_incomplete_tasks
            ),
            Operation("countTotalTasks", query, (), service.count_total_tasks),
            Operation(
                "archiveCompletedTasks", update, (), service.archive_completed_tasks
            ),
            Operation("clearAllTasks", update, (), service.clear_all_tasks),
        ]

    def operations(self) -> dict[str, OperationKind]:
        """Operation names and their kinds."""
        return {name: op.kind for name, op in self._operations.items()}

    def _parse_args(self, op: Operation, args: Sequence[Any]) -> list[Any]:
        if len(args) != len(op.params):
            raise DispatchError(
                op.name, f"expected {len(op.params)} argument(s), got {len(args)}"
            )
        try:
            return [
                self._adapters[param].validate_python(arg)
                for param, arg in zip(op.params, args, strict=True)
            ]
        except ValidationError as e:
            raise DispatchError(op.name, "invalid arguments", e) from e

    def dispatch(self, name: str, args: Sequence[Any] = ()) -> dict[str, Any]:
        """Run one request and wrap its outcome in a result envelope.

        Raises:
            DispatchError: If the operation is unknown or the arguments do not
                validate.

        """
        op = self._operations.get(name)
        if op is None:
            raise DispatchError(name, "unknown operation")

        parsed = self._parse_args(op, args)
        logger.debug(f"Dispatching {op.kind} {name}")

        try:
            value = op.handler(*parsed)
        except TaskNotFoundError as e:
            return {"Err": str(e)}
        return {"Ok": encode_result(value)}

    def dispatch_json(self, name: str, raw_args: str = "[]") -> str:
        """Like ``dispatch`` but with JSON-encoded arguments and response."""
        try:
            args = json.loads(raw_args)
        except json.JSONDecodeError as e:
            raise DispatchError(name, f"arguments are not valid JSON: {e}", e) from e
        if not isinstance(args, list):
            raise DispatchError(name, "arguments must be a JSON array")
        return json.dumps(self.dispatch(name, args))


__all__ = ["Operation", "OperationKind", "RequestDispatcher", "encode_result"]
