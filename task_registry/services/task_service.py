"""Task service: the operations of the task registry.

Every public method is one unit of work: it takes the database lock, opens a
session, re-reads whatever it needs from the store, writes, and commits. No
task is cached between calls.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager

from ..core.errors import TaskNotFoundError
from ..core.protocols import Clock, IdFactory, MonotonicClock, uuid4_id_factory
from ..database import Database
from ..repositories import TaskStore
from ..schemas.unified_models import Absent, Stamped, TaskCore, TaskPayload


logger = logging.getLogger(__name__)

CLEARED_MESSAGE = "All tasks cleared"


def new_task(task_id: str, payload: TaskPayload, now: int) -> TaskCore:
    """Build a fresh task from a payload."""
    return TaskCore(
        id=task_id,
        title=payload.title,
        description=payload.description,
        completed=payload.completed,
        created_at=now,
        updated_at=Absent(),
    )


def apply_payload(task: TaskCore, payload: TaskPayload, now: int) -> TaskCore:
    """Replace title, description and completed from the payload.

    ``id`` and ``created_at`` are carried over from the existing task.
    """
    return TaskCore(
        id=task.id,
        title=payload.title,
        description=payload.description,
        completed=payload.completed,
        created_at=task.created_at,
        updated_at=Stamped(at=now),
    )


def mark_completed(task: TaskCore, now: int) -> TaskCore:
    """Set the completed flag, leaving every other field untouched."""
    return TaskCore(
        id=task.id,
        title=task.title,
        description=task.description,
        completed=True,
        created_at=task.created_at,
        updated_at=Stamped(at=now),
    )


class TaskService:
    """Operation set over the task store.

    Holds the database, an id factory and a clock. Operations take the
    database's lock, so services sharing a database never interleave.
    """

    def __init__(
        self,
        database: Database,
        *,
        id_factory: IdFactory = uuid4_id_factory,
        clock: Clock | None = None,
    ):
        """Initialize task service.

        Args:
            database: Owner of the engine backing the store.
            id_factory: Supplies unique ids to ``add_task``.
            clock: Supplies timestamps. Defaults to a ``MonotonicClock``.

        """
        self.database = database
        self.id_factory = id_factory
        self.clock = clock if clock is not None else MonotonicClock()

    @contextmanager
    def _unit_of_work(self) -> Generator[TaskStore, None, None]:
        with self.database.lock, self.database.session() as session:
            yield TaskStore(session)

    @staticmethod
    def _require(store: TaskStore, task_id: str) -> TaskCore:
        task = store.get(task_id)
        if task is None:
            logger.warning(f"Task {task_id} not found")
            raise TaskNotFoundError(task_id)
        return task

    # ---- queries ----

    def get_tasks(self) -> list[TaskCore]:
        """Get all tasks in key order."""
        with self._unit_of_work() as store:
            return store.values()

    def get_task(self, task_id: str) -> TaskCore:
        """Get a task by id.

        Raises:
            TaskNotFoundError: If no live task has this id.

        """
        with self._unit_of_work() as store:
            return self._require(store, task_id)

    def list_completed_tasks(self) -> list[TaskCore]:
        """Get tasks whose completed flag is set."""
        with self._unit_of_work() as store:
            return [task for task in store.values() if task.completed]

    def list_incomplete_tasks(self) -> list[TaskCore]:
        """Get tasks whose completed flag is not set."""
        with self._unit_of_work() as store:
            return [task for task in store.values() if not task.completed]

    def count_total_tasks(self) -> int:
        """Count live tasks."""
        with self._unit_of_work() as store:
            return store.size()

    # ---- updates ----

    def add_task(self, payload: TaskPayload) -> TaskCore:
        """Create a task with a fresh id and no update timestamp."""
        with self._unit_of_work() as store:
            task = new_task(self.id_factory(), payload, self.clock.now())
            store.insert(task.id, task)
        logger.info(f"Added task {task.id}: {task.title}")
        return task

    def update_task(self, task_id: str, payload: TaskPayload) -> TaskCore:
        """Replace a task's title, description and completed flag.

        Raises:
            TaskNotFoundError: If no live task has this id.

        """
        with self._unit_of_work() as store:
            updated = apply_payload(
                self._require(store, task_id), payload, self.clock.now()
            )
            store.insert(task_id, updated)
        logger.info(f"Updated task {task_id}")
        return updated

    def complete_task(self, task_id: str) -> TaskCore:
        """Mark a task completed and refresh its update timestamp.

        Raises:
            TaskNotFoundError: If no live task has this id.

        """
        with self._unit_of_work() as store:
            completed = mark_completed(self._require(store, task_id), self.clock.now())
            store.insert(task_id, completed)
        logger.info(f"Completed task {task_id}")
        return completed

    def delete_task(self, task_id: str) -> TaskCore:
        """Delete a task and return it.

        Raises:
            TaskNotFoundError: If no live task has this id.

        """
        with self._unit_of_work() as store:
            removed = store.remove(task_id)
            if removed is None:
                logger.warning(f"Task {task_id} not found")
                raise TaskNotFoundError(task_id)
        logger.info(f"Deleted task {task_id}")
        return removed

    def archive_completed_tasks(self) -> list[TaskCore]:
        """Remove every completed task and return the removed tasks."""
        with self._unit_of_work() as store:
            archived = [task for task in store.values() if task.completed]
            for task in archived:
                store.remove(task.id)
        logger.info(f"Archived {len(archived)} completed tasks")
        return archived

    def clear_all_tasks(self) -> str:
        """Remove every task."""
        with self._unit_of_work() as store:
            removed = store.clear()
        logger.info(f"Cleared {removed} tasks")
        return CLEARED_MESSAGE
