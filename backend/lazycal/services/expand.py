"""
Service for expanding event definitions into individual instances.
Handles exact-date and time-of-month anchors with monthly/yearly recurrence.
"""

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional

from dateutil.relativedelta import relativedelta, weekday
from dateutil.rrule import MO, TU, WE, TH, FR, SA, SU

from ..domain import (
    EXACT, TIME_OF_MONTH, MONTHLY, YEARLY, WEEK_POSITIONS,
    Event, EventInstance,
)


logger = logging.getLogger(__name__)

# Hard ceiling on loop steps so a pathological rule still terminates
MAX_ITERATIONS = 1000

# Mapping weekday names to dateutil constants
WEEKDAY_MAP = {
    'monday': MO, 'tuesday': TU, 'wednesday': WE, 'thursday': TH,
    'friday': FR, 'saturday': SA, 'sunday': SU,
}

STEPS = {
    MONTHLY: relativedelta(months=1),
    YEARLY: relativedelta(years=1),
}


def nth_weekday_of_month(year: int, month: int, day: weekday, position: int) -> Optional[date]:
    """
    Date of the ``position``-th ``day`` in the given month.

    Args:
        year: Calendar year
        month: Month number (1-12)
        day: dateutil weekday constant (MO, TU, ...)
        position: 1-based occurrence within the month

    Returns:
        The matching date, or None when the month has fewer occurrences
    """
    try:
        candidate = date(year, month, 1) + relativedelta(day=1, weekday=day(+position))
    except (ValueError, OverflowError):
        return None
    # A missing position rolls into the next month; that is no match, not a clamp
    if candidate.month != month:
        return None
    return candidate


def month_matches(year: int, month: int, position: int, weekdays: List[weekday]) -> List[date]:
    """All dates in the month matching the position for any of the weekdays, sorted."""
    matches = set()
    for day in weekdays:
        match = nth_weekday_of_month(year, month, day, position)
        if match is not None:
            matches.add(match)
    return sorted(matches)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_date(value) -> bool:
    return isinstance(value, date) and not isinstance(value, datetime)


def _weekdays(event: Event) -> List[weekday]:
    names = event.date.weekdays
    if not isinstance(names, (list, tuple)):
        return []
    return [WEEKDAY_MAP[name] for name in names if isinstance(name, str) and name in WEEKDAY_MAP]


def _malformed_reason(event: Event) -> Optional[str]:
    event_date = event.date
    rule = event.recurrence

    if event_date.mode == EXACT:
        if not _is_date(event_date.start):
            return 'exact date without a valid start'
        if event_date.end is not None and not _is_date(event_date.end):
            return f'invalid end {event_date.end!r}'
    elif event_date.mode == TIME_OF_MONTH:
        position = event_date.week_position
        if not isinstance(position, str) or position not in WEEK_POSITIONS:
            return f'unknown week position {position!r}'
        if not _weekdays(event):
            return 'time of month without weekdays'
    else:
        return f'unknown date mode {event_date.mode!r}'

    if rule is not None:
        if not isinstance(rule.frequency, str) or rule.frequency not in STEPS:
            return f'unknown frequency {rule.frequency!r}'
        if rule.count is not None and (not _is_int(rule.count) or rule.count <= 0):
            return f'invalid count {rule.count!r}'
        if rule.until is not None and not _is_date(rule.until):
            return f'invalid until {rule.until!r}'
        if rule.month is not None and not _is_int(rule.month):
            return f'invalid month {rule.month!r}'
        if (
            event_date.mode == TIME_OF_MONTH
            and rule.frequency == YEARLY
            and rule.month not in range(1, 13)
        ):
            return 'yearly time of month without a valid month'
    return None


def _advance(value: date, step: relativedelta) -> Optional[date]:
    """``value + step``, or None once the result would pass the last representable year."""
    try:
        return value + step
    except (ValueError, OverflowError):
        return None


def _make_instance(event: Event, instance_date: date, span: Optional[timedelta]) -> EventInstance:
    instance_end = None
    if span is not None:
        try:
            instance_end = instance_date + span
        except OverflowError:
            instance_end = date.max
    return EventInstance(event=event, instance_date=instance_date, instance_end=instance_end)


def _expand_exact(event: Event, window_start: date, window_end: date) -> List[EventInstance]:
    start = event.date.start
    end = event.date.end
    rule = event.recurrence

    if rule is None:
        if window_start <= start <= window_end:
            return [EventInstance(event=event, instance_date=start, instance_end=end)]
        return []

    span = end - start if end is not None else None
    step = STEPS[rule.frequency]
    instances = []

    # Every position counts toward ``count``, including those before the window.
    # Steps are measured from the original start so a clamped day never drifts.
    for position in range(MAX_ITERATIONS):
        if rule.count is not None and position >= rule.count:
            break
        anchor = _advance(start, step * position)
        if anchor is None or anchor > window_end:
            break
        if rule.until is not None and anchor > rule.until:
            break
        if anchor >= window_start:
            instances.append(_make_instance(event, anchor, span))

    return instances


def _first_eligible_month(month_start: date, pinned_month: int) -> Optional[date]:
    if month_start.month <= pinned_month:
        return month_start.replace(month=pinned_month)
    return _advance(month_start.replace(month=pinned_month), relativedelta(years=1))


def _expand_time_of_month(event: Event, window_start: date, window_end: date) -> List[EventInstance]:
    position = WEEK_POSITIONS[event.date.week_position]
    weekdays = _weekdays(event)
    rule = event.recurrence
    month_start = window_start.replace(day=1)

    if rule is None:
        # Single occurrence: earliest match on or after the window start
        for _ in range(MAX_ITERATIONS):
            if month_start is None or month_start > window_end:
                break
            for candidate in month_matches(month_start.year, month_start.month, position, weekdays):
                if candidate >= window_start:
                    if candidate <= window_end:
                        return [EventInstance(event=event, instance_date=candidate)]
                    return []
            month_start = _advance(month_start, relativedelta(months=1))
        return []

    if rule.frequency == YEARLY:
        month_start = _first_eligible_month(month_start, rule.month)
    step = STEPS[rule.frequency]

    instances = []
    generated = 0
    for _ in range(MAX_ITERATIONS):
        if month_start is None or month_start > window_end:
            break
        for candidate in month_matches(month_start.year, month_start.month, position, weekdays):
            if rule.count is not None and generated >= rule.count:
                return instances
            if rule.until is not None and candidate > rule.until:
                return instances
            generated += 1
            if window_start <= candidate <= window_end:
                instances.append(EventInstance(event=event, instance_date=candidate))
        month_start = _advance(month_start, step)

    return instances


def generate_instances(event: Event, window_start: date, window_end: date) -> List[EventInstance]:
    """
    Expand an event into its instances within the given window.
    Malformed events expand to nothing rather than raising.

    Args:
        event: Event to expand
        window_start: First date of the window (inclusive)
        window_end: Last date of the window (inclusive)

    Returns:
        List of EventInstance ordered by instance_date
    """
    if window_end < window_start:
        return []

    reason = _malformed_reason(event)
    if reason:
        logger.debug("Skipping event %s: %s", event.id, reason)
        return []

    if event.date.mode == EXACT:
        return _expand_exact(event, window_start, window_end)
    return _expand_time_of_month(event, window_start, window_end)
