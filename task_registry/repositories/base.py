"""Base repository pattern for keyed collections.

Provides an ordered-map view over a single SQLModel table: point lookups,
upserts and removals by primary key, ordered enumeration, count and clear.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from sqlalchemy import func
from sqlmodel import Session, SQLModel, select


EntityT = TypeVar("EntityT", bound=SQLModel)
BusinessT = TypeVar("BusinessT")


class BaseRepository(Generic[EntityT, BusinessT], ABC):
    """Ordered map from string key to business model, backed by one table.

    The repository flushes but never commits; the owner of the session decides
    when a unit of work ends.
    """

    def __init__(self, session: Session):
        self.session = session

    @abstractmethod
    def get_entity_class(self) -> type[EntityT]:
        """Return the SQLModel entity class."""
        pass

    @abstractmethod
    def to_business(self, entity: EntityT) -> BusinessT:
        """Convert a stored entity into its business model."""
        pass

    @abstractmethod
    def to_entity(self, key: str, model: BusinessT) -> EntityT:
        """Build a new entity stored under ``key``."""
        pass

    @abstractmethod
    def update_entity(self, entity: EntityT, model: BusinessT) -> None:
        """Overwrite an existing entity with the values of ``model``."""
        pass

    def _get_entity(self, key: str) -> EntityT | None:
        return self.session.get(self.get_entity_class(), key)

    def get(self, key: str) -> BusinessT | None:
        """Get the value stored under ``key``."""
        entity = self._get_entity(key)
        return None if entity is None else self.to_business(entity)

    def contains(self, key: str) -> bool:
        """Check if a value is stored under ``key``."""
        return self._get_entity(key) is not None

    def insert(self, key: str, model: BusinessT) -> None:
        """Insert or replace the value stored under ``key``."""
        entity = self._get_entity(key)
        if entity is None:
            entity = self.to_entity(key, model)
        else:
            self.update_entity(entity, model)
        self.session.add(entity)
        self.session.flush()

    def remove(self, key: str) -> BusinessT | None:
        """Remove and return the value under ``key``, if any."""
        entity = self._get_entity(key)
        if entity is None:
            return None
        removed = self.to_business(entity)
        self.session.delete(entity)
        self.session.flush()
        return removed

    def values(self) -> list[BusinessT]:
        """Get all values in key order."""
        entity_class = self.get_entity_class()
        key_columns = entity_class.__table__.primary_key.columns
        statement = select(entity_class).order_by(*key_columns)
        return [self.to_business(entity) for entity in self.session.exec(statement)]

    def size(self) -> int:
        """Count stored values."""
        statement = select(func.count()).select_from(self.get_entity_class())
        return self.session.exec(statement).one()

    def clear(self) -> int:
        """Remove every value and return how many were removed."""
        entities = self.session.exec(select(self.get_entity_class())).all()
        for entity in entities:
            self.session.delete(entity)
        self.session.flush()
        return len(entities)
