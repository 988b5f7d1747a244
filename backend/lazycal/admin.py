from django.contrib import admin
from .models import Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ['title', 'date_mode', 'start_date', 'frequency', 'updated_at', 'created_at']
    list_filter = ['date_mode', 'frequency', 'created_at']
    search_fields = ['title', 'description', 'location_name']
    readonly_fields = ['id', 'created_at', 'updated_at']
    ordering = ['-created_at']
