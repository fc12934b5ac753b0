"""
Append-only event log.
"""
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from users_svc.database.databases import users_db
from users_svc.database.repository import persistence_errors
from users_svc.models.domain_event import DomainEvent

logger = logging.getLogger(__name__)


class EventRepository:
    """Writes domain events to the ``Events`` collection; never updates or deletes."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.events = db[users_db.Collections.EVENTS]

    async def append_event(self, event: DomainEvent) -> None:
        """
        Append one event.

        Raises:
            PersistenceError: If the store rejects the insert
        """
        with persistence_errors("append event", users_db.Collections.EVENTS):
            await self.events.insert_one(event.to_document())
        logger.debug("Appended %s for %s", event.event_type, event.aggregate_id)
