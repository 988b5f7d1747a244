import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('url', models.URLField(blank=True)),
                ('location_name', models.CharField(blank=True, max_length=255)),
                ('location_address', models.CharField(blank=True, max_length=255)),
                ('latitude', models.FloatField(blank=True, null=True)),
                ('longitude', models.FloatField(blank=True, null=True)),
                ('date_mode', models.CharField(choices=[('exact', 'Exact date'), ('timeOfMonth', 'Time of month')], default='exact', max_length=20)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('end_date', models.DateField(blank=True, help_text='Defaults to start date when empty', null=True)),
                ('week_position', models.CharField(blank=True, choices=[('first', 'First'), ('second', 'Second'), ('third', 'Third'), ('fourth', 'Fourth')], max_length=10)),
                ('weekdays', models.JSONField(blank=True, default=list, help_text="List of weekday names like ['monday', 'tuesday']")),
                ('frequency', models.CharField(blank=True, choices=[('', 'Does not repeat'), ('monthly', 'Monthly'), ('yearly', 'Yearly')], default='', max_length=10)),
                ('recurrence_month', models.PositiveSmallIntegerField(blank=True, help_text='Pinned month (1-12) for yearly time-of-month events', null=True)),
                ('recurrence_count', models.PositiveIntegerField(blank=True, help_text='Maximum occurrences', null=True)),
                ('recurrence_until', models.DateField(blank=True, help_text='Last permissible occurrence date', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['created_at'],
            },
        ),
    ]
