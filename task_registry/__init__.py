"""Task Registry - persistent task store.

This package contains a small task registry backed by a durable, ordered
key-value store.

Core Components:
- repositories: ordered-map TaskStore over the SQLite ``tasks`` table
- services: TaskService implementing the registry operations
- dispatcher: named-request surface with result envelopes
- cli: Typer command-line interface
"""

from .core import (
    Clock,
    DispatchError,
    IdFactory,
    MonotonicClock,
    TaskNotFoundError,
    TaskRegistryError,
    uuid4_id_factory,
)
from .database import Database
from .dispatcher import OperationKind, RequestDispatcher
from .repositories import TaskStore
from .schemas import Absent, Stamped, TaskCore, TaskPayload, TaskRecord
from .services import TaskService

__all__ = [
    "Absent",
    "Clock",
    "Database",
    "DispatchError",
    "IdFactory",
    "MonotonicClock",
    "OperationKind",
    "RequestDispatcher",
    "Stamped",
    "TaskCore",
    "TaskNotFoundError",
    "TaskPayload",
    "TaskRecord",
    "TaskRegistryError",
    "TaskService",
    "TaskStore",
    "uuid4_id_factory",
]
