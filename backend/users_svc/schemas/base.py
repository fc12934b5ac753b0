"""
Capability roles for request/response payloads.

The generic repository only talks to these roles:

- ``Creatable`` turns itself into a new entity
- ``Updatable`` describes a partial update
- ``Filterable`` produces a MongoDB filter
- ``Projectable`` is a read shape; its projection comes from the type, not an instance
"""
from abc import abstractmethod
from typing import Any, Mapping

from pydantic import BaseModel

from users_svc.models.base import Entity


class Creatable(BaseModel):
    """Payload that can be converted into a persistable entity."""

    @abstractmethod
    def to_entity(self) -> Entity:
        """Build the entity to insert (hashing, default role, ...)."""


class Updatable(BaseModel):
    """Payload describing a partial update."""

    @abstractmethod
    def update_definition(self) -> dict[str, Any]:
        """MongoDB update document; empty when there is nothing to change."""


class Filterable(BaseModel):
    """Payload that selects entities."""

    @abstractmethod
    def filter_expression(self) -> dict[str, Any]:
        """MongoDB filter document."""


class Projectable(BaseModel):
    """Read shape derived from an entity."""

    @classmethod
    def projection(cls) -> dict[str, int]:
        """Server-side projection listing the fields of this shape."""
        return {("_id" if name == "id" else name): 1 for name in cls.model_fields}

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]):
        data = {k: v for k, v in doc.items() if k != "_id"}
        if "_id" in doc:
            data["id"] = str(doc["_id"])
        return cls.model_validate(data)
