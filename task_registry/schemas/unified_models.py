"""Business models for the task registry.

This module holds the pydantic models that flow between the service layer,
the store and the request boundary:

- ``TaskPayload``: caller-supplied fields used to create or replace a task
- ``TaskCore``: the task record as seen by callers
- ``Absent`` / ``Stamped``: the optional ``updated_at`` timestamp, modelled as
  a discriminated union so that every read site has to handle both cases
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# UNIFIED CONFIGURATION
# ============================================================================


class UnifiedConfig:
    """Centralized configuration shared by all registry models."""

    PYDANTIC_CONFIG = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=False,
        frozen=False,
        from_attributes=True,
    )

    TIMESTAMP_CONFIG = ConfigDict(
        extra="forbid",
        frozen=True,
    )


class BaseBusinessModel(BaseModel):
    """Base for pure business logic models."""

    model_config = UnifiedConfig.PYDANTIC_CONFIG


# ============================================================================
# OPTIONAL TIMESTAMP
# ============================================================================


class Absent(BaseModel):
    """Marker for a timestamp that has not been set yet."""

    model_config = UnifiedConfig.TIMESTAMP_CONFIG

    kind: Literal["absent"] = "absent"


class Stamped(BaseModel):
    """A timestamp in nanoseconds since the epoch."""

    model_config = UnifiedConfig.TIMESTAMP_CONFIG

    kind: Literal["stamped"] = "stamped"
    at: int = Field(..., ge=0, description="Nanoseconds since the epoch")


UpdatedAt = Annotated[Absent | Stamped, Field(discriminator="kind")]


def stamp_or_none(value: Absent | Stamped) -> int | None:
    """Collapse an optional timestamp into a nullable integer for storage."""
    match value:
        case Stamped(at=at):
            return at
        case Absent():
            return None
    raise TypeError(f"Unsupported timestamp value: {value!r}")


def stamp_from_optional(value: int | None) -> Absent | Stamped:
    """Inverse of ``stamp_or_none``."""
    return Absent() if value is None else Stamped(at=value)


# ============================================================================
# TASK MODELS
# ============================================================================


class TaskPayload(BaseBusinessModel):
    """Fields a caller supplies to create a task or replace its content."""

    title: str
    description: str
    completed: bool


class TaskCore(BaseBusinessModel):
    """A task record.

    ``id`` and ``created_at`` are fixed at creation. ``updated_at`` stays
    ``Absent`` until the first update or completion.
    """

    id: str = Field(..., min_length=1)
    title: str
    description: str = Field(default="")
    completed: bool = False
    created_at: int = Field(..., ge=0, description="Nanoseconds since the epoch")
    updated_at: UpdatedAt = Field(default_factory=Absent)

    @property
    def last_modified(self) -> int:
        """Most recent timestamp recorded on the task."""
        match self.updated_at:
            case Stamped(at=at):
                return at
            case Absent():
                return self.created_at
        raise TypeError(f"Unsupported timestamp value: {self.updated_at!r}")

    def to_wire(self) -> dict[str, Any]:
        """Serialize using the camelCase field names of the request surface."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "createdAt": self.created_at,
            "updatedAt": stamp_or_none(self.updated_at),
        }
