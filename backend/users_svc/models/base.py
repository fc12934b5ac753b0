"""
Base model for documents persisted in MongoDB.
"""
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class Entity(BaseModel):
    """
    A persisted document with a store-generated identifier.

    The identifier is an ObjectId in MongoDB and its hex string here.
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]):
        data = dict(doc)
        if data.get("_id") is not None:
            data["_id"] = str(data["_id"])
        return cls.model_validate(data)

    def to_document(self) -> dict[str, Any]:
        """Document body for insertion; the store assigns ``_id``."""
        return self.model_dump(by_alias=True, exclude={"id"})
