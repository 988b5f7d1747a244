"""
Event store kept as one JSON document on disk, a list of event objects
with ISO-8601 dates. The whole list is rewritten on every change.
"""

import json
import logging
import os
import uuid
from pathlib import Path
from typing import List, Optional

from django.utils import timezone

from ..domain import Event, EventDate, event_from_dict, event_to_dict
from ..exceptions import EventNotFound, StorageError
from .base import EventStore, editable_fields


logger = logging.getLogger(__name__)


class JsonFileEventStore(EventStore):
    name = 'json'

    def __init__(self, path):
        self.path = Path(path)

    def _load(self) -> List[Event]:
        if not self.path.exists():
            return []
        try:
            with self.path.open(encoding='utf-8') as handle:
                documents = json.load(handle)
            return [event_from_dict(document) for document in documents]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise StorageError(f"Could not read events from {self.path}: {exc}") from exc

    def _save(self, events: List[Event]):
        temp_path = self.path.with_name(self.path.name + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with temp_path.open('w', encoding='utf-8') as handle:
                json.dump([event_to_dict(event) for event in events], handle, indent=2)
            os.replace(temp_path, self.path)
        except OSError as exc:
            raise StorageError(f"Could not write events to {self.path}: {exc}") from exc

    def get_events(self) -> List[Event]:
        return self._load()

    def get_event(self, event_id: str) -> Optional[Event]:
        for event in self._load():
            if event.id == event_id:
                return event
        return None

    def create_event(self, **fields) -> Event:
        events = self._load()
        now = timezone.now()
        values = editable_fields(fields)
        event = Event(
            id=str(uuid.uuid4()),
            title=values.get('title', ''),
            description=values.get('description') or '',
            url=values.get('url') or '',
            location=values.get('location'),
            date=values.get('date') or EventDate(),
            recurrence=values.get('recurrence'),
            created_at=now,
            updated_at=now,
        )
        events.append(event)
        self._save(events)
        logger.info("Created event %s (%s) in %s", event.id, event.title, self.path)
        return event

    def update_event(self, event_id: str, **fields) -> Event:
        events = self._load()
        for index, event in enumerate(events):
            if event.id == event_id:
                updated = event.with_changes(updated_at=timezone.now(), **editable_fields(fields))
                events[index] = updated
                self._save(events)
                logger.info("Updated event %s in %s", event_id, self.path)
                return updated
        raise EventNotFound(event_id)

    def delete_event(self, event_id: str) -> bool:
        events = self._load()
        remaining = [event for event in events if event.id != event_id]
        if len(remaining) == len(events):
            return False
        self._save(remaining)
        logger.info("Deleted event %s from %s", event_id, self.path)
        return True
