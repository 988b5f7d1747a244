from dataclasses import replace

from rest_framework import serializers

from . import domain


def stored_value(serializer, name):
    """On a partial update, the value the event already holds for ``name``"""
    root = serializer.root
    if getattr(root, 'partial', False) and root.instance is not None:
        return getattr(root.instance, name, None)
    return None


class EventLocationSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    latitude = serializers.FloatField(required=False, allow_null=True, min_value=-90, max_value=90)
    longitude = serializers.FloatField(required=False, allow_null=True, min_value=-180, max_value=180)

    def validate(self, data):
        stored = stored_value(self, 'location')
        if stored is not None:
            return replace(stored, **data)
        return domain.EventLocation(**data)


class EventDateSerializer(serializers.Serializer):
    """Date anchor; ``mode`` decides which of the other keys are required"""

    mode = serializers.ChoiceField(choices=[domain.EXACT, domain.TIME_OF_MONTH])
    start = serializers.DateField(required=False, allow_null=True)
    end = serializers.DateField(required=False, allow_null=True)
    weekPosition = serializers.ChoiceField(
        source='week_position', choices=list(domain.WEEK_POSITIONS), required=False, allow_null=True
    )
    weekdays = serializers.ListField(
        child=serializers.ChoiceField(choices=domain.WEEKDAY_NAMES), required=False
    )

    def validate(self, data):
        # A partial update only sends the keys that change
        stored = stored_value(self, 'date')
        if stored is not None:
            data = {
                'mode': stored.mode,
                'start': stored.start,
                'end': stored.end,
                'week_position': stored.week_position,
                'weekdays': list(stored.weekdays),
                **data,
            }

        mode = data.get('mode', domain.EXACT)
        if mode == domain.EXACT:
            start = data.get('start')
            end = data.get('end')
            if start is None:
                raise serializers.ValidationError({'start': "Exact dates need a start"})
            if end is not None and end < start:
                raise serializers.ValidationError({'end': "End must not be before start"})
            return domain.EventDate(mode=mode, start=start, end=end)

        if not data.get('week_position'):
            raise serializers.ValidationError({'weekPosition': "Time of month dates need a week position"})
        weekdays = data.get('weekdays') or []
        if not weekdays:
            raise serializers.ValidationError({'weekdays': "Time of month dates need at least one weekday"})
        # Keep the caller's order, drop repeats
        return domain.EventDate(
            mode=mode,
            week_position=data['week_position'],
            weekdays=tuple(dict.fromkeys(weekdays)),
        )


class RecurrenceRuleSerializer(serializers.Serializer):
    frequency = serializers.ChoiceField(choices=[domain.MONTHLY, domain.YEARLY])
    month = serializers.IntegerField(required=False, allow_null=True, min_value=1, max_value=12)
    count = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    until = serializers.DateField(required=False, allow_null=True)

    def validate(self, data):
        stored = stored_value(self, 'recurrence')
        if stored is not None:
            return replace(stored, **data)
        if 'frequency' not in data:
            raise serializers.ValidationError({'frequency': "This field is required."})
        return domain.RecurrenceRule(
            frequency=data['frequency'],
            month=data.get('month'),
            count=data.get('count'),
            until=data.get('until'),
        )


class EventSerializer(serializers.Serializer):
    """
    Validates incoming event documents into domain values and renders
    domain events back to the same camelCase document.
    """

    id = serializers.CharField(read_only=True)
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)
    url = serializers.URLField(required=False, allow_blank=True)
    location = EventLocationSerializer(required=False, allow_null=True)
    date = EventDateSerializer()
    recurrence = RecurrenceRuleSerializer(required=False, allow_null=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    def validate(self, data):
        """Cross-field validation"""
        event_date = data.get('date') or getattr(self.instance, 'date', None)
        if 'recurrence' in data:
            recurrence = data['recurrence']
        else:
            recurrence = getattr(self.instance, 'recurrence', None)

        if (
            event_date is not None
            and recurrence is not None
            and event_date.mode == domain.TIME_OF_MONTH
            and recurrence.frequency == domain.YEARLY
            and recurrence.month is None
        ):
            raise serializers.ValidationError(
                {'recurrence': "Yearly time of month events need a month"}
            )
        return data

    def to_representation(self, instance):
        return domain.event_to_dict(instance)
