"""
Capability interface shared by every event store variant.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..domain import Event


EDITABLE_FIELDS = ('title', 'description', 'url', 'location', 'date', 'recurrence')

# Assigned by the store, never taken from the caller
MANAGED_FIELDS = ('id', 'created_at', 'updated_at')


def editable_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Drop store-managed fields and reject names that are not event fields."""
    unknown = set(fields) - set(EDITABLE_FIELDS) - set(MANAGED_FIELDS)
    if unknown:
        raise TypeError(f"Unknown event fields: {', '.join(sorted(unknown))}")
    return {name: value for name, value in fields.items() if name in EDITABLE_FIELDS}


class EventStore(ABC):
    """
    Reads and writes event definitions.
    Implementations raise StorageError when the backing store fails and
    EventNotFound when updating an id that does not exist.
    """

    name = None

    @abstractmethod
    def get_events(self) -> List[Event]:
        """All events, in insertion order."""

    @abstractmethod
    def get_event(self, event_id: str) -> Optional[Event]:
        """The event with this id, or None."""

    @abstractmethod
    def create_event(self, **fields) -> Event:
        """Store a new event; assigns id, created_at and updated_at."""

    @abstractmethod
    def update_event(self, event_id: str, **fields) -> Event:
        """Apply changed fields; keeps id and created_at, refreshes updated_at."""

    @abstractmethod
    def delete_event(self, event_id: str) -> bool:
        """Remove the event. Returns False when nothing was removed."""
