"""
Audit trail for service operations.

``audited`` wraps an async service method: the operation runs first, then a
describer turns its result and arguments into a DomainEvent, which is
appended before the result is returned. Appending is best-effort: a store
failure is logged and the operation's result still goes back to the caller.
There is no rollback of an operation whose event could not be written.
"""
import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

from users_svc.core.exceptions import PersistenceError
from users_svc.database.event_store import EventRepository
from users_svc.models.domain_event import DomainEvent

logger = logging.getLogger(__name__)

R = TypeVar("R")

Describer = Callable[..., DomainEvent]


class AuditTrail:
    """Best-effort writer in front of the event log."""

    def __init__(self, events: EventRepository):
        self.events = events

    async def record(self, event: DomainEvent) -> None:
        try:
            await self.events.append_event(event)
        except PersistenceError:
            logger.exception(
                "Failed to append %s event for aggregate %s",
                event.event_type,
                event.aggregate_id,
            )


def audited(describe: Describer) -> Callable[[Callable[..., Awaitable[R]]], Callable[..., Awaitable[R]]]:
    """
    Record one event per call of the decorated method.

    The decorated method's owner must expose an ``audit`` AuditTrail. The
    describer is called as ``describe(result, *args, **kwargs)`` with the
    method's own arguments.
    """
    def decorator(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(self, *args: Any, **kwargs: Any) -> R:
            result = await func(self, *args, **kwargs)
            await self.audit.record(describe(result, *args, **kwargs))
            return result
        return wrapper
    return decorator
