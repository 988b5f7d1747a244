"""Event store backed by the Django ORM ``Event`` table."""

import logging
from typing import List, Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError

from ..domain import Event
from ..exceptions import EventNotFound, StorageError
from ..models import Event as EventRecord
from .base import EventStore, editable_fields


logger = logging.getLogger(__name__)


class OrmEventStore(EventStore):
    name = 'orm'

    def _get_record(self, event_id) -> Optional[EventRecord]:
        try:
            return EventRecord.objects.filter(pk=event_id).first()
        except ValidationError:
            # Not a UUID, so it cannot name a stored event
            return None
        except DatabaseError as exc:
            raise StorageError(f"Could not read event {event_id}: {exc}") from exc

    def get_events(self) -> List[Event]:
        try:
            return [record.to_domain() for record in EventRecord.objects.all()]
        except DatabaseError as exc:
            raise StorageError(f"Could not read events: {exc}") from exc

    def get_event(self, event_id: str) -> Optional[Event]:
        record = self._get_record(event_id)
        return record.to_domain() if record else None

    def create_event(self, **fields) -> Event:
        record = EventRecord()
        record.apply_fields(**editable_fields(fields))
        try:
            record.save()
        except DatabaseError as exc:
            raise StorageError(f"Could not create event: {exc}") from exc
        logger.info("Created event %s (%s)", record.id, record.title)
        return record.to_domain()

    def update_event(self, event_id: str, **fields) -> Event:
        record = self._get_record(event_id)
        if record is None:
            raise EventNotFound(event_id)
        record.apply_fields(**editable_fields(fields))
        try:
            record.save()
        except DatabaseError as exc:
            raise StorageError(f"Could not update event {event_id}: {exc}") from exc
        logger.info("Updated event %s", event_id)
        return record.to_domain()

    def delete_event(self, event_id: str) -> bool:
        record = self._get_record(event_id)
        if record is None:
            return False
        try:
            record.delete()
        except DatabaseError as exc:
            raise StorageError(f"Could not delete event {event_id}: {exc}") from exc
        logger.info("Deleted event %s", event_id)
        return True
