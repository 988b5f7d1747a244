"""
Print the expanded instances of all events within a date window
"""

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone
from django.utils.dateparse import parse_date
from dateutil.relativedelta import relativedelta
from lazycal.exceptions import StorageError
from lazycal.services.aggregate import InstanceAggregator
from lazycal.storage import STORE_NAMES, get_event_store


def _date_argument(value):
    try:
        parsed = parse_date(value)
    except ValueError:
        parsed = None
    if parsed is None:
        raise CommandError(f'Invalid ISO date: {value}')
    return parsed


class Command(BaseCommand):
    help = 'List event instances between two dates (defaults to the current month)'

    def add_arguments(self, parser):
        parser.add_argument('--start', help='First date (YYYY-MM-DD), inclusive')
        parser.add_argument('--end', help='Last date (YYYY-MM-DD), inclusive')
        parser.add_argument(
            '--store',
            choices=STORE_NAMES,
            help='Event store to read (defaults to the configured one)',
        )

    def handle(self, *args, **options):
        month_start = timezone.localdate().replace(day=1)
        window_start = _date_argument(options['start']) if options['start'] else month_start
        window_end = (
            _date_argument(options['end']) if options['end']
            else window_start + relativedelta(months=1, days=-1)
        )
        if window_end < window_start:
            raise CommandError('--end must not be before --start')

        aggregator = InstanceAggregator(get_event_store(options['store']))
        try:
            instances = aggregator.get_instances(window_start, window_end)
        except StorageError as exc:
            raise CommandError(str(exc))

        self.stdout.write(f'=== Instances {window_start} to {window_end} ===')
        for instance in instances:
            span = f' - {instance.instance_end}' if instance.instance_end else ''
            self.stdout.write(f'{instance.instance_date}{span}  {instance.event.title} ({instance.event.id})')

        self.stdout.write(self.style.SUCCESS(f'{len(instances)} instances'))
