"""Service layer for the task registry operations."""

from .task_service import (
    CLEARED_MESSAGE,
    TaskService,
    apply_payload,
    mark_completed,
    new_task,
)

__all__ = [
    "CLEARED_MESSAGE",
    "TaskService",
    "apply_payload",
    "mark_completed",
    "new_task",
]
