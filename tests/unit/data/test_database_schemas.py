"""Tests for the TaskRecord table entity and its business-model conversions."""

from sqlmodel import Session, select

from task_registry.schemas.database import TaskRecord
from task_registry.schemas.unified_models import Absent, Stamped, TaskCore


class TestTaskRecordConversion:
    """Test conversion between TaskRecord and TaskCore."""

    def test_from_core_model_absent_update(self):
        """Test that an absent update stamp is stored as NULL."""
        core = TaskCore(id="t1", title="A", description="d", created_at=5)

        record = TaskRecord.from_core_model(core)

        assert record.id == "t1"
        assert record.title == "A"
        assert record.description == "d"
        assert record.completed is False
        assert record.created_at == 5
        assert record.updated_at is None

    def test_to_core_model_restores_variants(self):
        """Test that NULL and integer columns map back to the sum type."""
        fresh = TaskRecord(id="a", title="A", created_at=1, updated_at=None)
        touched = TaskRecord(id="b", title="B", created_at=1, updated_at=9)

        assert fresh.to_core_model().updated_at == Absent()
        assert touched.to_core_model().updated_at == Stamped(at=9)

    def test_update_from_core_model(self):
        """Test overwriting an entity from a business model."""
        record = TaskRecord(id="t1", title="Old", description="", created_at=1)
        core = TaskCore(
            id="t1",
            title="New",
            description="changed",
            completed=True,
            created_at=1,
            updated_at=Stamped(at=3),
        )

        record.update_from_core_model(core)

        assert record.title == "New"
        assert record.description == "changed"
        assert record.completed is True
        assert record.updated_at == 3


class TestTaskRecordPersistence:
    """Test the tasks table against a real SQLite database."""

    def test_large_timestamps_survive_storage(self, database):
        """Test that nanosecond timestamps fit the BIGINT columns."""
        created = 1_700_000_000_123_456_789
        with Session(database.engine) as session:
            session.add(
                TaskRecord(id="t1", title="A", created_at=created, updated_at=created + 1)
            )
            session.commit()

        with Session(database.engine) as session:
            stored = session.exec(select(TaskRecord)).one()
            assert stored.created_at == created
            assert stored.updated_at == created + 1

    def test_table_name(self):
        """Test the persisted table name."""
        assert TaskRecord.__tablename__ == "tasks"
