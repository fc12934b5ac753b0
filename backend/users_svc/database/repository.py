"""
Generic MongoDB repository.

The repository knows nothing about concrete payloads: it is parameterized by
an entity type and accepts values implementing the capability roles from
``users_svc.schemas.base``. Read operations take the projection shape as a
type, since a projection is derived from the shape itself.
"""
import logging
from contextlib import contextmanager
from typing import Any, Generic, Iterator, Optional, TypeVar

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from users_svc.core.exceptions import PersistenceError
from users_svc.database.databases import users_db
from users_svc.models.base import Entity
from users_svc.models.user import User
from users_svc.schemas.base import Creatable, Filterable, Projectable, Updatable

logger = logging.getLogger(__name__)

TEntity = TypeVar("TEntity", bound=Entity)
TShape = TypeVar("TShape", bound=Projectable)


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse an id, returning None for anything that is not an ObjectId."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


@contextmanager
def persistence_errors(operation: str, collection: str) -> Iterator[None]:
    """Translate driver failures into PersistenceError."""
    try:
        yield
    except PyMongoError as e:
        logger.error("MongoDB %s on %s failed: %s", operation, collection, e)
        raise PersistenceError(f"Failed to {operation} in {collection}") from e


class BaseRepository(Generic[TEntity]):
    """Entity-agnostic persistence operations over one collection."""

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        entity_type: type[TEntity],
        collection_name: Optional[str] = None,
    ):
        self.entity_type = entity_type
        self.collection_name = collection_name or entity_type.__name__
        self.collection = db[self.collection_name]

    # ==================== Create ====================

    async def create(self, dto: Creatable) -> TEntity:
        """
        Convert a payload into an entity and insert it.

        Returns:
            The stored entity with its generated id
        """
        entity = dto.to_entity()
        with persistence_errors("insert", self.collection_name):
            result = await self.collection.insert_one(entity.to_document())
        entity.id = str(result.inserted_id)
        return entity

    # ==================== Projected reads ====================

    async def get_by_id(self, entity_id: Any, shape: type[TShape]) -> Optional[TShape]:
        oid = to_object_id(entity_id)
        if oid is None:
            return None
        with persistence_errors("read", self.collection_name):
            doc = await self.collection.find_one({"_id": oid}, shape.projection())
        return shape.from_document(doc) if doc else None

    async def get_all(self, shape: type[TShape]) -> list[TShape]:
        """All documents in store order (no ordering guarantee)."""
        with persistence_errors("read", self.collection_name):
            cursor = self.collection.find({}, shape.projection())
            docs = await cursor.to_list(length=None)
        return [shape.from_document(doc) for doc in docs]

    async def find(self, dto: Filterable, shape: type[TShape]) -> list[TShape]:
        with persistence_errors("read", self.collection_name):
            cursor = self.collection.find(dto.filter_expression(), shape.projection())
            docs = await cursor.to_list(length=None)
        return [shape.from_document(doc) for doc in docs]

    async def find_first(self, dto: Filterable, shape: type[TShape]) -> Optional[TShape]:
        with persistence_errors("read", self.collection_name):
            doc = await self.collection.find_one(dto.filter_expression(), shape.projection())
        return shape.from_document(doc) if doc else None

    # ==================== Entity reads ====================

    async def find_one(self, predicate: dict[str, Any]) -> Optional[TEntity]:
        """Ad hoc single-entity lookup by a raw MongoDB filter."""
        with persistence_errors("read", self.collection_name):
            doc = await self.collection.find_one(predicate)
        return self.entity_type.from_document(doc) if doc else None

    async def find_entities(self, predicate: dict[str, Any]) -> list[TEntity]:
        with persistence_errors("read", self.collection_name):
            docs = await self.collection.find(predicate).to_list(length=None)
        return [self.entity_type.from_document(doc) for doc in docs]

    # ==================== Update / Delete ====================

    async def update(self, entity_id: Any, dto: Updatable) -> None:
        """Apply a partial update; a payload with nothing set is a no-op."""
        oid = to_object_id(entity_id)
        definition = dto.update_definition()
        if oid is None or not definition:
            return
        with persistence_errors("update", self.collection_name):
            await self.collection.update_one({"_id": oid}, definition)

    async def delete(self, entity_id: Any) -> None:
        """Delete by id; deleting an absent id is not an error."""
        oid = to_object_id(entity_id)
        if oid is None:
            return
        with persistence_errors("delete", self.collection_name):
            await self.collection.delete_one({"_id": oid})


class UserRepository(BaseRepository[User]):
    """Repository over the ``User`` collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        super().__init__(db, User, users_db.Collections.USERS)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.find_one({"email": email})
