import uuid

from django.db import models
from django.core.exceptions import ValidationError

from . import domain


# Choices defined at module level so they can be shared
DATE_MODE_CHOICES = [
    (domain.EXACT, 'Exact date'),
    (domain.TIME_OF_MONTH, 'Time of month'),
]

WEEK_POSITION_CHOICES = [
    ('first', 'First'),
    ('second', 'Second'),
    ('third', 'Third'),
    ('fourth', 'Fourth'),
]

FREQUENCY_CHOICES = [
    ('', 'Does not repeat'),
    (domain.MONTHLY, 'Monthly'),
    (domain.YEARLY, 'Yearly'),
]


class Event(models.Model):
    """
    A stored event definition, either one-off or recurring.
    Flattened columns for location, date anchor and recurrence rule;
    ``to_domain`` rebuilds the nested value used by the expansion service.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    url = models.URLField(blank=True)

    location_name = models.CharField(max_length=255, blank=True)
    location_address = models.CharField(max_length=255, blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    date_mode = models.CharField(max_length=20, choices=DATE_MODE_CHOICES, default=domain.EXACT)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True, help_text="Defaults to start date when empty")
    week_position = models.CharField(max_length=10, choices=WEEK_POSITION_CHOICES, blank=True)
    weekdays = models.JSONField(
        default=list,
        blank=True,
        help_text="List of weekday names like ['monday', 'tuesday']"
    )

    frequency = models.CharField(max_length=10, choices=FREQUENCY_CHOICES, blank=True, default='')
    recurrence_month = models.PositiveSmallIntegerField(
        null=True, blank=True, help_text="Pinned month (1-12) for yearly time-of-month events"
    )
    recurrence_count = models.PositiveIntegerField(null=True, blank=True, help_text="Maximum occurrences")
    recurrence_until = models.DateField(null=True, blank=True, help_text="Last permissible occurrence date")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return f"{self.title} ({self.get_frequency_display()})"

    def clean(self):
        """Validate model constraints"""
        if not self.title.strip():
            raise ValidationError("Title must not be blank")

        if self.date_mode == domain.EXACT:
            if self.start_date is None:
                raise ValidationError("Exact events need a start date")
            if self.end_date is not None and self.end_date < self.start_date:
                raise ValidationError("End date must not be before start date")
        else:
            if not self.week_position or not self.weekdays:
                raise ValidationError("Time of month events need a week position and weekdays")
            if self.frequency == domain.YEARLY and self.recurrence_month is None:
                raise ValidationError("Yearly time of month events need a month")

        if self.recurrence_month is not None and not 1 <= self.recurrence_month <= 12:
            raise ValidationError("Month must be between 1 and 12")

        if self.recurrence_count is not None and self.recurrence_count < 1:
            raise ValidationError("Count must be at least 1")

    def apply_fields(self, **fields):
        """Copy domain-level values (``date``, ``location``...) onto the columns."""
        for name in ('title', 'description', 'url'):
            if name in fields:
                setattr(self, name, fields[name] or '')

        if 'location' in fields:
            location = fields['location'] or domain.EventLocation()
            self.location_name = location.name or ''
            self.location_address = location.address or ''
            self.latitude = location.latitude
            self.longitude = location.longitude

        if 'date' in fields:
            event_date = fields['date']
            self.date_mode = event_date.mode
            self.start_date = event_date.start
            self.end_date = event_date.end
            self.week_position = event_date.week_position or ''
            self.weekdays = list(event_date.weekdays)

        if 'recurrence' in fields:
            rule = fields['recurrence']
            if rule is None:
                self.frequency = ''
                self.recurrence_month = None
                self.recurrence_count = None
                self.recurrence_until = None
            else:
                self.frequency = rule.frequency
                self.recurrence_month = rule.month
                self.recurrence_count = rule.count
                self.recurrence_until = rule.until

    def to_domain(self) -> domain.Event:
        location = None
        if self.location_name or self.location_address or self.latitude is not None or self.longitude is not None:
            location = domain.EventLocation(
                name=self.location_name or None,
                address=self.location_address or None,
                latitude=self.latitude,
                longitude=self.longitude,
            )

        recurrence = None
        if self.frequency:
            recurrence = domain.RecurrenceRule(
                frequency=self.frequency,
                month=self.recurrence_month,
                count=self.recurrence_count,
                until=self.recurrence_until,
            )

        return domain.Event(
            id=str(self.id),
            title=self.title,
            description=self.description,
            url=self.url,
            location=location,
            date=domain.EventDate(
                mode=self.date_mode,
                start=self.start_date,
                end=self.end_date,
                week_position=self.week_position or None,
                weekdays=tuple(self.weekdays or ()),
            ),
            recurrence=recurrence,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
