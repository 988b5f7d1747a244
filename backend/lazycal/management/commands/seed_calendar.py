"""
Management command to seed the calendar with sample data.
Creates one-off, monthly, yearly and time-of-month events.
"""

from django.core.management.base import BaseCommand
from django.utils import timezone
from datetime import timedelta
from lazycal.domain import EventDate, EventLocation, RecurrenceRule, EXACT, TIME_OF_MONTH, MONTHLY, YEARLY
from lazycal.storage import STORE_NAMES, get_event_store


class Command(BaseCommand):
    help = 'Seed the calendar with sample events'

    def add_arguments(self, parser):
        parser.add_argument(
            '--store',
            choices=STORE_NAMES,
            help='Event store to seed (defaults to the configured one)',
        )

    def handle(self, *args, **options):
        store = get_event_store(options['store'])

        # Check if data already exists
        existing = store.get_events()
        if existing:
            self.stdout.write(
                self.style.WARNING(
                    f'Calendar already has {len(existing)} events. '
                    'Skipping seed to avoid duplicates. Use clear_calendar command first if needed.'
                )
            )
            return

        self.stdout.write('Seeding calendar data...')

        today = timezone.localdate()

        # 1. One-off event next week
        kickoff = store.create_event(
            title="Project Kickoff",
            description="Initial project planning and kickoff session",
            date=EventDate(mode=EXACT, start=today + timedelta(days=7)),
        )
        self.stdout.write(f'Created one-off {kickoff.title} on {kickoff.date.start}')

        # 2. Monthly three-day event, twelve times
        retreat_start = today.replace(day=min(today.day, 28))
        retreat = store.create_event(
            title="Book Club Weekend",
            description="Read, discuss, repeat",
            date=EventDate(mode=EXACT, start=retreat_start, end=retreat_start + timedelta(days=2)),
            recurrence=RecurrenceRule(frequency=MONTHLY, count=12),
            location=EventLocation(name="Public Library", address="1 Main Street"),
        )
        self.stdout.write(f'Created monthly {retreat.title} starting {retreat_start}')

        # 3. Yearly birthday
        birthday = store.create_event(
            title="Birthday",
            date=EventDate(mode=EXACT, start=today + timedelta(days=30)),
            recurrence=RecurrenceRule(frequency=YEARLY),
        )
        self.stdout.write(f'Created yearly {birthday.title} on {birthday.date.start}')

        # 4. First Monday or Tuesday of every month
        market = store.create_event(
            title="Farmers Market",
            url="https://example.com/market",
            date=EventDate(mode=TIME_OF_MONTH, week_position='first', weekdays=('monday', 'tuesday')),
            recurrence=RecurrenceRule(frequency=MONTHLY),
        )
        self.stdout.write(f'Created monthly {market.title} on first Monday/Tuesday')

        # 5. Third Friday of June, every year
        festival = store.create_event(
            title="Summer Festival",
            date=EventDate(mode=TIME_OF_MONTH, week_position='third', weekdays=('friday',)),
            recurrence=RecurrenceRule(frequency=YEARLY, month=6),
        )
        self.stdout.write(f'Created yearly {festival.title} on third Friday of June')

        self.stdout.write(
            self.style.SUCCESS(
                f'Successfully seeded calendar with {len(store.get_events())} events'
            )
        )
