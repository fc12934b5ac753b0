"""
Models package - MongoDB document models.
"""
from users_svc.models.base import Entity
from users_svc.models.domain_event import EMPTY_AGGREGATE_ID, DomainEvent
from users_svc.models.user import User, UserRole

__all__ = [
    "Entity",
    "EMPTY_AGGREGATE_ID",
    "DomainEvent",
    "User",
    "UserRole",
]
