"""
Index management for the users database.
"""
from motor.motor_asyncio import AsyncIOMotorDatabase

from users_svc.database.databases import users_db


async def create_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create necessary indexes for users and events."""

    # Email is looked up on register/login; uniqueness is checked by lookup, not enforced here
    users = db[users_db.Collections.USERS]
    await users.create_index("email")
    await users.create_index("role")

    events = db[users_db.Collections.EVENTS]
    await events.create_index([("aggregate_id", 1), ("timestamp", 1)])
    await events.create_index("type")
