"""Task store: the ordered map of live tasks keyed by task id."""

from ..schemas.database import TaskRecord
from ..schemas.unified_models import TaskCore
from .base import BaseRepository


class TaskStore(BaseRepository[TaskRecord, TaskCore]):
    """Repository for task records.

    Values are always returned as ``TaskCore`` business models, never as live
    ORM rows, so nothing read from the store outlives its session.
    """

    def get_entity_class(self) -> type[TaskRecord]:
        """Return the database entity class for this repository."""
        return TaskRecord

    def to_business(self, entity: TaskRecord) -> TaskCore:
        return entity.to_core_model()

    def to_entity(self, key: str, model: TaskCore) -> TaskRecord:
        entity = TaskRecord.from_core_model(model)
        entity.id = key
        return entity

    def update_entity(self, entity: TaskRecord, model: TaskCore) -> None:
        entity.update_from_core_model(model)
