"""Base classes for domain value objects and services."""

from abc import ABC

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Base class for value objects (immutable, defined by their values)."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class DomainService(ABC):
    """Base class for domain services (business logic that doesn't belong to a single entity)."""

    pass
