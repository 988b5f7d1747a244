"""
Test cases for the Event model.
"""

from datetime import date
from django.test import TestCase
from django.core.exceptions import ValidationError
from lazycal import domain
from lazycal.models import Event


class EventModelTest(TestCase):
    """Test Event model validation and conversion"""

    def test_create_valid_event(self):
        """Test creating a valid exact event"""
        event = Event.objects.create(title="Test Event", start_date=date(2024, 3, 1))
        self.assertEqual(event.title, "Test Event")
        self.assertEqual(event.date_mode, domain.EXACT)
        self.assertEqual(event.frequency, '')
        self.assertIsNotNone(event.created_at)
        event.clean()  # Should not raise

    def test_blank_title_validation(self):
        event = Event(title="   ", start_date=date(2024, 3, 1))
        with self.assertRaises(ValidationError):
            event.clean()

    def test_exact_requires_start(self):
        event = Event(title="No Start")
        with self.assertRaises(ValidationError):
            event.clean()

    def test_end_before_start_validation(self):
        event = Event(title="Backwards", start_date=date(2024, 3, 5), end_date=date(2024, 3, 1))
        with self.assertRaises(ValidationError):
            event.clean()

    def test_time_of_month_validation(self):
        """Time of month events need a position and weekdays; yearly ones a month"""
        event = Event(title="Market", date_mode=domain.TIME_OF_MONTH, week_position='first')
        with self.assertRaises(ValidationError):
            event.clean()

        event.weekdays = ['monday']
        event.clean()  # Should not raise

        event.frequency = domain.YEARLY
        with self.assertRaises(ValidationError):
            event.clean()

        event.recurrence_month = 6
        event.clean()  # Should not raise

    def test_count_validation(self):
        event = Event(
            title="Zero", start_date=date(2024, 3, 1), frequency=domain.MONTHLY, recurrence_count=0
        )
        with self.assertRaises(ValidationError):
            event.clean()

    def test_updated_at_refreshed_on_save(self):
        event = Event.objects.create(title="Test Event", start_date=date(2024, 3, 1))
        first_update = event.updated_at

        event.title = "Renamed"
        event.save()

        self.assertGreaterEqual(event.updated_at, first_update)
        self.assertLessEqual(event.created_at, event.updated_at)

    def test_to_domain(self):
        event = Event.objects.create(
            title="Festival",
            description="Music all day",
            location_address="Central Park",
            date_mode=domain.TIME_OF_MONTH,
            week_position='third',
            weekdays=['friday'],
            frequency=domain.YEARLY,
            recurrence_month=6,
            recurrence_count=5,
        )
        value = event.to_domain()

        self.assertEqual(value.id, str(event.id))
        self.assertEqual(value.title, "Festival")
        self.assertEqual(
            value.date,
            domain.EventDate(mode=domain.TIME_OF_MONTH, week_position='third', weekdays=('friday',))
        )
        self.assertEqual(value.recurrence, domain.RecurrenceRule(frequency=domain.YEARLY, month=6, count=5))
        self.assertEqual(value.location, domain.EventLocation(address="Central Park"))

    def test_to_domain_without_recurrence_or_location(self):
        value = Event.objects.create(title="Once", start_date=date(2024, 3, 1)).to_domain()
        self.assertIsNone(value.recurrence)
        self.assertIsNone(value.location)
        self.assertEqual(value.date, domain.EventDate(mode=domain.EXACT, start=date(2024, 3, 1)))

    def test_apply_fields(self):
        event = Event(title="Draft")
        event.apply_fields(
            title="Final",
            date=domain.EventDate(mode=domain.EXACT, start=date(2024, 5, 1), end=date(2024, 5, 3)),
            recurrence=domain.RecurrenceRule(frequency=domain.MONTHLY, until=date(2024, 12, 31)),
            location=domain.EventLocation(name="Home", latitude=1.5),
        )

        self.assertEqual(event.title, "Final")
        self.assertEqual(event.start_date, date(2024, 5, 1))
        self.assertEqual(event.end_date, date(2024, 5, 3))
        self.assertEqual(event.frequency, domain.MONTHLY)
        self.assertEqual(event.recurrence_until, date(2024, 12, 31))
        self.assertEqual(event.location_name, "Home")
        self.assertEqual(event.latitude, 1.5)
        self.assertEqual(event.location_address, '')
