"""Schema package for the task registry.

Quick usage:
    from task_registry.schemas import TaskCore, TaskPayload, TaskRecord
"""

from .database import TaskRecord
from .unified_models import (
    Absent,
    BaseBusinessModel,
    Stamped,
    TaskCore,
    TaskPayload,
    UnifiedConfig,
    UpdatedAt,
    stamp_from_optional,
    stamp_or_none,
)


__all__ = [
    "Absent",
    "BaseBusinessModel",
    "Stamped",
    "TaskCore",
    "TaskPayload",
    "TaskRecord",
    "UnifiedConfig",
    "UpdatedAt",
    "stamp_from_optional",
    "stamp_or_none",
]
