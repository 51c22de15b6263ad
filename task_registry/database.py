"""Database ownership and session management.

A ``Database`` owns one SQLAlchemy engine for the lifetime of the process (or
of a test). It creates the ``tasks`` table, hands out sessions that commit on
success and roll back on error, and disposes the engine on shutdown.
"""

import logging
import threading
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

from .config import DatabaseSettings
from .schemas.database import TaskRecord


logger = logging.getLogger(__name__)


class Database:
    """Owner of the engine backing the task store.

    Also owns the re-entrant lock that serializes units of work, so every
    service built over the same database shares one exclusion boundary.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.lock = threading.RLock()

    @classmethod
    def from_path(
        cls, path: str | Path, *, echo: bool = False, busy_timeout: float = 30.0
    ) -> "Database":
        """Open (creating if needed) a SQLite database file."""
        db_path = Path(path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            f"sqlite:///{db_path}",
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": busy_timeout},
        )
        return cls(engine)

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> "Database":
        """Open the database described by settings."""
        return cls.from_path(
            settings.path, echo=settings.echo_sql, busy_timeout=settings.busy_timeout
        )

    @classmethod
    def in_memory(cls) -> "Database":
        """Private in-memory database, gone when disposed."""
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        return cls(engine)

    def create_all(self) -> None:
        """Create the tasks table if it does not exist.

        Safe to call multiple times.
        """
        SQLModel.metadata.create_all(self.engine, tables=[TaskRecord.__table__])
        logger.debug(f"Tables ready on {self.engine.url}")

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Session scope that commits on success and rolls back on error.

        Usage:
            with database.session() as session:
                # Use session here
                pass

        """
        session = Session(self.engine)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def verify(self) -> bool:
        """Check that the tasks table is reachable.

        Returns:
            True if database is healthy, False otherwise

        """
        try:
            with self.session() as session:
                count = session.exec(
                    select(func.count()).select_from(TaskRecord)
                ).one()
            logger.info(f"Database verification successful: {count} tasks")
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database verification failed: {e}")
            return False

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    def __enter__(self) -> "Database":
        self.create_all()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()


__all__ = ["Database"]
