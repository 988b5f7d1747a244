"""
Merge the instances of every stored event into one date-ordered list.
"""

import logging
from datetime import date
from typing import List

from ..domain import EventInstance
from ..storage.base import EventStore
from .expand import generate_instances


logger = logging.getLogger(__name__)


class InstanceAggregator:
    """
    Expands all events of a store over a window.
    The store is passed in explicitly; a failing read fails the whole query.
    """

    def __init__(self, store: EventStore):
        self.store = store

    def get_instances(self, window_start: date, window_end: date) -> List[EventInstance]:
        """
        Expand all events within the given window.

        Args:
            window_start: Start of window (inclusive)
            window_end: End of window (inclusive)

        Returns:
            List of all instances from all events, sorted by instance date
        """
        events = self.store.get_events()

        all_instances = []
        for event in events:
            all_instances.extend(generate_instances(event, window_start, window_end))

        # list.sort is stable, so same-day instances keep event order
        all_instances.sort(key=lambda instance: instance.instance_date)

        logger.debug(
            "Expanded %d events into %d instances for %s..%s",
            len(events), len(all_instances), window_start, window_end,
        )
        return all_instances
