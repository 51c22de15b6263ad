"""Exceptions raised by the task registry."""


class TaskRegistryError(Exception):
    """Base class for task registry errors."""


class TaskNotFoundError(TaskRegistryError):
    """Raised when an operation addresses an id with no live task."""

    def __init__(self, task_id: str):
        """Initialize with the requested id."""
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found")


class DispatchError(TaskRegistryError):
    """Raised when a request names an unknown operation or carries bad arguments."""

    def __init__(self, operation: str, message: str, cause: Exception | None = None):
        """Initialize with request context."""
        self.operation = operation
        self.cause = cause
        super().__init__(f"Cannot dispatch {operation}: {message}")
