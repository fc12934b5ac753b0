"""
Database module - MongoDB connection, repositories and event log.
"""
from users_svc.database.connections import (
    close_connections,
    get_database,
    get_mongo_client,
)
from users_svc.database.databases import users_db
from users_svc.database.event_store import EventRepository
from users_svc.database.indexes import create_indexes
from users_svc.database.repository import BaseRepository, UserRepository

__all__ = [
    "close_connections",
    "get_database",
    "get_mongo_client",
    "users_db",
    "EventRepository",
    "create_indexes",
    "BaseRepository",
    "UserRepository",
]
