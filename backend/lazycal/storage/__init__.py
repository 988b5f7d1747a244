from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .base import EventStore
from .json_file import JsonFileEventStore
from .orm import OrmEventStore


STORE_NAMES = (OrmEventStore.name, JsonFileEventStore.name)


def get_event_store(name: str = None) -> EventStore:
    """
    Build the store variant called ``name``, or the one configured in
    ``settings.LAZYCAL['EVENT_STORE']`` when no name is given.
    """
    config = getattr(settings, 'LAZYCAL', {})
    name = name or config.get('EVENT_STORE', OrmEventStore.name)

    if name == OrmEventStore.name:
        return OrmEventStore()
    if name == JsonFileEventStore.name:
        path = config.get('JSON_STORE_PATH')
        if not path:
            raise ImproperlyConfigured("LAZYCAL['JSON_STORE_PATH'] is required for the json event store")
        return JsonFileEventStore(path)
    raise ValueError(f"Unknown event store {name!r}, expected one of: {', '.join(STORE_NAMES)}")
