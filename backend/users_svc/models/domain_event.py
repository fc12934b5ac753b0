"""
Domain event model for the append-only ``Events`` collection.

Event payloads accept arbitrary values; they are converted into plain
document values (primitives, nested dicts, lists) when the event is built.
"""
import dataclasses
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from bson import ObjectId
from bson.decimal128 import Decimal128
from pydantic import BaseModel, ConfigDict, Field

# Aggregate id for events not scoped to a single entity
EMPTY_AGGREGATE_ID = ObjectId("0" * 24)


def to_aggregate_id(value: Union[str, ObjectId, None]) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if value and ObjectId.is_valid(value):
        return ObjectId(value)
    return EMPTY_AGGREGATE_ID


def to_document_value(value: Any) -> Any:
    """Recursively convert a payload value into something BSON can store."""
    if value is None:
        return None
    if isinstance(value, Enum):
        return to_document_value(value.value)
    if isinstance(value, (str, bool, int, float, datetime, ObjectId, bytes, Decimal128)):
        return value
    if isinstance(value, Decimal):
        return Decimal128(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return to_document_value(value.model_dump())
    if isinstance(value, Mapping):
        return {str(k): to_document_value(v) for k, v in value.items()}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_document_value(dataclasses.asdict(value))
    if isinstance(value, Iterable):
        return [to_document_value(item) for item in value]
    if hasattr(value, "__dict__"):
        public = {k: v for k, v in vars(value).items() if not k.startswith("_")}
        return to_document_value(public)
    return str(value)


class DomainEvent(BaseModel):
    """
    Immutable audit record of a domain-significant operation.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    aggregate_id: ObjectId = Field(default=EMPTY_AGGREGATE_ID)
    event_type: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    seq: Optional[int] = None
    data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def create(
        cls,
        aggregate_id: Union[str, ObjectId, None],
        event_type: str,
        data: Mapping[str, Any],
        seq: Optional[int] = None,
    ) -> "DomainEvent":
        """
        Build an event stamped with the current UTC time.

        Args:
            aggregate_id: Subject entity id, or None for non-entity events
            event_type: Free-form type tag, e.g. ``UserCreated``
            data: Payload; values are converted to document form
            seq: Optional caller-assigned sequence number
        """
        return cls(
            aggregate_id=to_aggregate_id(aggregate_id),
            event_type=event_type,
            seq=seq,
            data={str(k): to_document_value(v) for k, v in data.items()},
        )

    @property
    def is_entity_scoped(self) -> bool:
        return self.aggregate_id != EMPTY_AGGREGATE_ID

    def to_document(self) -> dict[str, Any]:
        return {
            "aggregate_id": self.aggregate_id,
            "type": self.event_type,
            "timestamp": self.timestamp,
            "seq": self.seq,
            "data": self.data,
        }
