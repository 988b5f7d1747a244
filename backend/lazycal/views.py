"""
Views for the calendar API.
Provides CRUD operations for events and the expanded instance listing.
"""

import logging

from django.http import JsonResponse
from django.utils.dateparse import parse_date
from rest_framework import viewsets, status
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.request import Request
from rest_framework.response import Response

from .domain import instance_to_dict
from .exceptions import EventNotFound, StorageError
from .serializers import EventSerializer
from .services.aggregate import InstanceAggregator
from .storage import get_event_store


logger = logging.getLogger(__name__)


class StorageUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Event storage is unavailable.'
    default_code = 'storage_unavailable'


class EventViewSet(viewsets.ViewSet):
    """
    ViewSet for CRUD operations on events.
    Every action goes through the configured event store; ``?store=`` picks
    a different variant for a single request.
    """
    serializer_class = EventSerializer

    def get_store(self):
        try:
            return get_event_store(self.request.query_params.get('store'))
        except ValueError as exc:
            raise ValidationError({'store': str(exc)})

    def get_event_or_404(self, store, pk):
        event = store.get_event(pk)
        if event is None:
            raise NotFound(f"Event with id {pk} not found")
        return event

    def handle_exception(self, exc):
        if isinstance(exc, EventNotFound):
            exc = NotFound(str(exc))
        elif isinstance(exc, StorageError):
            logger.error("Event storage failed: %s", exc)
            exc = StorageUnavailable(str(exc))
        return super().handle_exception(exc)

    def list(self, request: Request):
        events = self.get_store().get_events()
        return Response(EventSerializer(events, many=True).data)

    def retrieve(self, request: Request, pk=None):
        event = self.get_event_or_404(self.get_store(), pk)
        return Response(EventSerializer(event).data)

    def create(self, request: Request):
        serializer = EventSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = self.get_store().create_event(**serializer.validated_data)
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk=None, partial=False):
        store = self.get_store()
        event = self.get_event_or_404(store, pk)
        serializer = EventSerializer(event, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        updated = store.update_event(pk, **serializer.validated_data)
        return Response(EventSerializer(updated).data)

    def partial_update(self, request: Request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request: Request, pk=None):
        if not self.get_store().delete_event(pk):
            raise NotFound(f"Event with id {pk} not found")
        return Response(status=status.HTTP_204_NO_CONTENT)


def instances_view(request):
    """
    Get expanded event instances within a date window.

    Query parameters:
    - start: ISO date string (required, inclusive)
    - end: ISO date string (required, inclusive)
    - store: Event store variant (optional, e.g. 'orm' or 'json')

    Returns instances sorted by date, each with its source event.
    """
    start_str = request.GET.get('start')
    end_str = request.GET.get('end')

    if not start_str or not end_str:
        return JsonResponse(
            {'error': 'Both start and end query parameters are required'},
            status=400
        )

    # Parse date strings
    try:
        window_start = parse_date(start_str)
        window_end = parse_date(end_str)
    except ValueError:
        window_start = window_end = None
    if not window_start or not window_end:
        return JsonResponse(
            {'error': 'start and end must be valid ISO dates (YYYY-MM-DD)'},
            status=400
        )

    if window_end < window_start:
        return JsonResponse({'error': 'end must not be before start'}, status=400)

    try:
        store = get_event_store(request.GET.get('store'))
    except ValueError as exc:
        return JsonResponse({'error': str(exc)}, status=400)

    try:
        instances = InstanceAggregator(store).get_instances(window_start, window_end)
    except StorageError as exc:
        logger.error("Could not expand instances: %s", exc)
        return JsonResponse({'error': 'Event storage is unavailable'}, status=503)

    return JsonResponse({'instances': [instance_to_dict(instance) for instance in instances]})
