"""
Admin interface for daily entries.

Values are edited through the correction endpoint so the audit snapshot is
kept; the admin site shows entries read-only, and deleting an entry here is
the administrative escape hatch.
"""

from django.contrib import admin
from django.utils.html import format_html
from .models import DailyEntry


@admin.register(DailyEntry)
class DailyEntryAdmin(admin.ModelAdmin):
    list_display = [
        'entry_date', 'shed', 'worker', 'production_crates', 'production_birds',
        'total_birds', 'non_production', 'mortality', 'correction_badge'
    ]
    list_filter = ['shed__variant', 'shed', 'entry_date']
    search_fields = ['shed__name', 'worker__username', 'worker__full_name', 'notes']
    date_hierarchy = 'entry_date'
    ordering = ['-entry_date']

    readonly_fields = [
        'id', 'shed', 'worker', 'entry_date', 'production_crates', 'production_birds',
        'total_birds', 'non_production', 'mortality', 'notes',
        'corrected_by', 'corrected_at', 'original_values', 'created_at', 'updated_at'
    ]

    fieldsets = [
        ('Entry', {
            'fields': ['id', 'shed', 'worker', 'entry_date']
        }),
        ('Production', {
            'fields': [
                'production_crates', 'production_birds', 'total_birds',
                'non_production', 'mortality', 'notes'
            ]
        }),
        ('Correction History', {
            'fields': ['corrected_by', 'corrected_at', 'original_values'],
            'classes': ['collapse']
        }),
        ('Timestamps', {
            'fields': ['created_at', 'updated_at'],
            'classes': ['collapse']
        }),
    ]

    def has_add_permission(self, request):
        return False

    def correction_badge(self, obj):
        if obj.is_corrected:
            return format_html('<span style="color: {};">{}</span>', '#d97706', 'Corrected')
        return format_html('<span style="color: {};">{}</span>', '#16a34a', 'Original')
    correction_badge.short_description = 'State'
