class LazyCalError(Exception):
    """Base class for errors raised by the calendar backend."""


class StorageError(LazyCalError):
    """The event store could not be read or written."""


class EventNotFound(LazyCalError):
    """No event exists with the requested id."""

    def __init__(self, event_id):
        self.event_id = event_id
        super().__init__(f"Event with id {event_id} not found")
