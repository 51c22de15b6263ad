"""Pytest configuration and fixtures for task registry tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from task_registry.config import get_settings
from task_registry.database import Database
from task_registry.schemas.unified_models import TaskPayload
from task_registry.services.task_service import TaskService


class FakeClock:
    """Deterministic clock advancing by a fixed step on every reading."""

    def __init__(self, start: int = 1_700_000_000_000_000_000, step: int = 1_000):
        self.current = start
        self.step = step
        self.readings: list[int] = []

    def now(self) -> int:
        value = self.current
        self.current += self.step
        self.readings.append(value)
        return value


class SequentialIds:
    """Id factory producing task-1, task-2, ..."""

    def __init__(self, prefix: str = "task"):
        self.prefix = prefix
        self.issued: list[str] = []

    def __call__(self) -> str:
        task_id = f"{self.prefix}-{len(self.issued) + 1}"
        self.issued.append(task_id)
        return task_id


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point default settings at a per-test database and reset the cache."""
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "default" / "tasks.db"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Database file path for one test."""
    return tmp_path / "registry" / "tasks.db"


@pytest.fixture
def database(db_path: Path) -> Generator[Database, None, None]:
    """Fresh file-backed database with the tasks table created."""
    db = Database.from_path(db_path)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def clock() -> FakeClock:
    """Deterministic clock."""
    return FakeClock()


@pytest.fixture
def ids() -> SequentialIds:
    """Deterministic id factory."""
    return SequentialIds()


@pytest.fixture
def service(database: Database, ids: SequentialIds, clock: FakeClock) -> TaskService:
    """TaskService wired with deterministic collaborators."""
    return TaskService(database, id_factory=ids, clock=clock)


@pytest.fixture
def sample_payload() -> TaskPayload:
    """Sample payload for task creation."""
    return TaskPayload(
        title="Write release notes",
        description="Summarize the changes since the last tag",
        completed=False,
    )
