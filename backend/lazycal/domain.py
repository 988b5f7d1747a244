"""
Plain value types for events and their expanded instances.
These are what the expansion service and the event stores exchange;
the ORM model converts into them via ``Event.to_domain()``.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

from django.utils.dateparse import parse_date, parse_datetime


EXACT = 'exact'
TIME_OF_MONTH = 'timeOfMonth'

MONTHLY = 'monthly'
YEARLY = 'yearly'

WEEK_POSITIONS = {'first': 1, 'second': 2, 'third': 3, 'fourth': 4}

WEEKDAY_NAMES = (
    'monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday'
)


@dataclass(frozen=True)
class EventLocation:
    name: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class EventDate:
    """
    When an event happens. ``mode`` selects which fields apply:
    ``exact`` uses start/end, ``timeOfMonth`` uses week_position/weekdays.
    """
    mode: str = EXACT
    start: Optional[date] = None
    end: Optional[date] = None
    week_position: Optional[str] = None
    weekdays: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RecurrenceRule:
    frequency: str = MONTHLY
    month: Optional[int] = None
    count: Optional[int] = None
    until: Optional[date] = None


@dataclass(frozen=True)
class Event:
    id: str
    title: str
    date: EventDate
    description: str = ''
    url: str = ''
    location: Optional[EventLocation] = None
    recurrence: Optional[RecurrenceRule] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def with_changes(self, **changes) -> 'Event':
        return replace(self, **changes)


@dataclass(frozen=True)
class EventInstance:
    """One concrete occurrence of an event."""
    event: Event
    instance_date: date
    instance_end: Optional[date] = None


def _iso(value):
    return value.isoformat() if value is not None else None


def _parse_date(value):
    if value in (None, ''):
        return None
    if isinstance(value, date):
        return value
    parsed = parse_date(value[:10])
    if parsed is None:
        raise ValueError(f"Invalid ISO date: {value!r}")
    return parsed


def _parse_datetime(value):
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return value
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValueError(f"Invalid ISO datetime: {value!r}")
    return parsed


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def _weekday_list(weekdays):
    return list(weekdays) if isinstance(weekdays, (list, tuple)) else weekdays


def _weekday_tuple(weekdays):
    # Anything other than a list is kept as-is; expansion treats it as malformed
    if not weekdays:
        return ()
    return tuple(weekdays) if isinstance(weekdays, list) else weekdays


def location_to_dict(location: Optional[EventLocation]) -> Optional[Dict[str, Any]]:
    if location is None:
        return None
    # An all-empty location is written as absent, matching location_from_dict
    return _drop_none({
        'name': location.name,
        'address': location.address,
        'latitude': location.latitude,
        'longitude': location.longitude,
    }) or None


def date_to_dict(event_date: EventDate) -> Dict[str, Any]:
    data = {'mode': event_date.mode}
    if event_date.mode == TIME_OF_MONTH:
        data['weekPosition'] = event_date.week_position
        data['weekdays'] = _weekday_list(event_date.weekdays)
    else:
        data['start'] = _iso(event_date.start)
        data['end'] = _iso(event_date.end)
    return _drop_none(data)


def recurrence_to_dict(rule: Optional[RecurrenceRule]) -> Optional[Dict[str, Any]]:
    if rule is None:
        return None
    return _drop_none({
        'frequency': rule.frequency,
        'month': rule.month,
        'count': rule.count,
        'until': _iso(rule.until),
    })


def event_to_dict(event: Event) -> Dict[str, Any]:
    """Serialize an event to its camelCase JSON document with ISO dates."""
    return _drop_none({
        'id': event.id,
        'title': event.title,
        'description': event.description,
        'url': event.url,
        'location': location_to_dict(event.location),
        'date': date_to_dict(event.date),
        'recurrence': recurrence_to_dict(event.recurrence),
        'createdAt': _iso(event.created_at),
        'updatedAt': _iso(event.updated_at),
    })


def location_from_dict(data: Optional[Dict[str, Any]]) -> Optional[EventLocation]:
    if not data:
        return None
    return EventLocation(
        name=data.get('name'),
        address=data.get('address'),
        latitude=data.get('latitude'),
        longitude=data.get('longitude'),
    )


def date_from_dict(data: Optional[Dict[str, Any]]) -> EventDate:
    data = data or {}
    return EventDate(
        mode=data.get('mode', EXACT),
        start=_parse_date(data.get('start')),
        end=_parse_date(data.get('end')),
        week_position=data.get('weekPosition'),
        weekdays=_weekday_tuple(data.get('weekdays')),
    )


def recurrence_from_dict(data: Optional[Dict[str, Any]]) -> Optional[RecurrenceRule]:
    if not data:
        return None
    return RecurrenceRule(
        frequency=data.get('frequency', MONTHLY),
        month=data.get('month'),
        count=data.get('count'),
        until=_parse_date(data.get('until')),
    )


def event_from_dict(data: Dict[str, Any]) -> Event:
    """Inverse of ``event_to_dict``. Raises ValueError on unparseable dates."""
    return Event(
        id=data['id'],
        title=data.get('title', ''),
        description=data.get('description', ''),
        url=data.get('url', ''),
        location=location_from_dict(data.get('location')),
        date=date_from_dict(data.get('date')),
        recurrence=recurrence_from_dict(data.get('recurrence')),
        created_at=_parse_datetime(data.get('createdAt')),
        updated_at=_parse_datetime(data.get('updatedAt')),
    )


def instance_to_dict(instance: EventInstance) -> Dict[str, Any]:
    return _drop_none({
        'event': event_to_dict(instance.event),
        'instanceDate': _iso(instance.instance_date),
        'instanceEnd': _iso(instance.instance_end),
    })
