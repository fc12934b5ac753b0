"""
Database connection management for MongoDB.
"""
import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from users_svc.config import get_settings
from users_svc.core.secrets import get_secret_resolver

logger = logging.getLogger(__name__)

# Global connection instance
_mongo_client: Optional[AsyncIOMotorClient] = None


async def get_mongo_client() -> AsyncIOMotorClient:
    """Get or create MongoDB client from the resolved connection string."""
    global _mongo_client
    if _mongo_client is None:
        mongo_uri = await run_in_threadpool(get_secret_resolver().resolve_mongo_uri)
        _mongo_client = AsyncIOMotorClient(mongo_uri)
        logger.info("MongoDB client created")
    return _mongo_client


async def close_connections():
    """Close all database connections."""
    global _mongo_client

    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None


async def get_database() -> AsyncIOMotorDatabase:
    """
    Get the users database.

    The database named in the connection string wins; otherwise the
    configured ``mongo_db_name`` is used.
    """
    client = await get_mongo_client()
    return client.get_default_database(default=get_settings().mongo_db_name)
