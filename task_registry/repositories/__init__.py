"""Repository layer bridging business models with database persistence."""

from .base import BaseRepository
from .task_store import TaskStore


__all__ = ["BaseRepository", "TaskStore"]
