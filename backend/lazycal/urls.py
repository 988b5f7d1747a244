"""
URL configuration for lazycal.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import EventViewSet, instances_view

# Create router for viewsets
router = DefaultRouter()
router.register(r'events', EventViewSet, basename='event')

urlpatterns = [
    # Include viewset URLs
    path('', include(router.urls)),

    # Expanded instances for the calendar grid and list views
    path('instances/', instances_view, name='instances'),
]
