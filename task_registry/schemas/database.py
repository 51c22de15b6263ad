"""SQLModel table definition for persisted tasks.

The ``tasks`` table is the durable ordered map behind the task store: one row
per live task, keyed by the task id.
"""

from sqlalchemy import BigInteger, Column
from sqlmodel import Field, SQLModel

from .unified_models import TaskCore, stamp_from_optional, stamp_or_none


class TaskRecord(SQLModel, table=True):
    """SQLModel task table.

    ``updated_at`` is nullable here and becomes ``Absent | Stamped`` on the
    business model.
    """

    __tablename__ = "tasks"

    id: str = Field(primary_key=True, max_length=64)
    title: str = Field(default="")
    description: str = Field(default="")
    completed: bool = Field(default=False)
    created_at: int = Field(sa_column=Column(BigInteger, nullable=False))
    updated_at: int | None = Field(
        default=None, sa_column=Column(BigInteger, nullable=True)
    )

    def to_core_model(self) -> TaskCore:
        """Convert to TaskCore business model."""
        return TaskCore(
            id=self.id,
            title=self.title,
            description=self.description,
            completed=self.completed,
            created_at=self.created_at,
            updated_at=stamp_from_optional(self.updated_at),
        )

    @classmethod
    def from_core_model(cls, core_model: TaskCore) -> "TaskRecord":
        """Create from TaskCore business model."""
        return cls(
            id=core_model.id,
            title=core_model.title,
            description=core_model.description,
            completed=core_model.completed,
            created_at=core_model.created_at,
            updated_at=stamp_or_none(core_model.updated_at),
        )

    def update_from_core_model(self, core_model: TaskCore) -> None:
        """Overwrite the mutable columns from a business model."""
        self.title = core_model.title
        self.description = core_model.description
        self.completed = core_model.completed
        self.created_at = core_model.created_at
        self.updated_at = stamp_or_none(core_model.updated_at)
