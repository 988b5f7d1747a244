"""
Test cases for the calendar management commands.
"""

from io import StringIO
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from lazycal.models import Event


class CalendarCommandsTest(TestCase):

    def run_command(self, *args):
        out = StringIO()
        call_command(*args, stdout=out)
        return out.getvalue()

    def test_seed_then_skip(self):
        output = self.run_command('seed_calendar')
        self.assertIn('Successfully seeded calendar with 5 events', output)
        self.assertEqual(Event.objects.count(), 5)

        output = self.run_command('seed_calendar')
        self.assertIn('Skipping seed', output)
        self.assertEqual(Event.objects.count(), 5)

    def test_clear_requires_confirm(self):
        self.run_command('seed_calendar')

        self.run_command('clear_calendar')
        self.assertEqual(Event.objects.count(), 5)

        output = self.run_command('clear_calendar', '--confirm')
        self.assertIn('Successfully cleared 5 events', output)
        self.assertEqual(Event.objects.count(), 0)

    def test_show_instances(self):
        self.run_command('seed_calendar')
        output = self.run_command('show_instances', '--start', '2024-01-01', '--end', '2024-12-31')

        self.assertIn('=== Instances 2024-01-01 to 2024-12-31 ===', output)
        self.assertIn('Farmers Market', output)

    def test_show_instances_rejects_bad_dates(self):
        with self.assertRaises(CommandError):
            self.run_command('show_instances', '--start', '2024-03-01', '--end', '2024-01-01')
        with self.assertRaises(CommandError):
            self.run_command('show_instances', '--start', 'someday')
