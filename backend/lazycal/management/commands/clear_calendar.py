"""
Management command to clear all calendar events
"""

from django.core.management.base import BaseCommand
from lazycal.storage import STORE_NAMES, get_event_store


class Command(BaseCommand):
    help = 'Clear all calendar events'

    def add_arguments(self, parser):
        parser.add_argument(
            '--confirm',
            action='store_true',
            help='Confirm that you want to delete all data',
        )
        parser.add_argument(
            '--store',
            choices=STORE_NAMES,
            help='Event store to clear (defaults to the configured one)',
        )

    def handle(self, *args, **options):
        if not options['confirm']:
            self.stdout.write(
                self.style.WARNING(
                    'This will delete ALL calendar data. Use --confirm to proceed.'
                )
            )
            return

        store = get_event_store(options['store'])
        deleted = sum(1 for event in store.get_events() if store.delete_event(event.id))

        self.stdout.write(
            self.style.SUCCESS(f'Successfully cleared {deleted} events')
        )
