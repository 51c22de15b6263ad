"""Core protocols and errors shared across the registry."""

from .errors import DispatchError, TaskNotFoundError, TaskRegistryError
from .protocols import Clock, IdFactory, MonotonicClock, uuid4_id_factory


__all__ = [
    "Clock",
    "DispatchError",
    "IdFactory",
    "MonotonicClock",
    "TaskNotFoundError",
    "TaskRegistryError",
    "uuid4_id_factory",
]
