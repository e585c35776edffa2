"""
Admin interface for the shed registry.
"""

from django.contrib import admin
from .models import Shed, WorkerAssignment


class WorkerAssignmentInline(admin.TabularInline):
    model = WorkerAssignment
    extra = 0
    fk_name = 'shed'
    fields = ['worker', 'assigned_by', 'assigned_at', 'is_active']
    readonly_fields = ['assigned_at']


@admin.register(Shed)
class ShedAdmin(admin.ModelAdmin):
    list_display = ['name', 'variant', 'capacity', 'number_of_birds', 'is_active', 'created_at']
    list_filter = ['variant', 'is_active']
    search_fields = ['name', 'description']
    readonly_fields = ['id', 'created_by', 'created_at', 'updated_at']
    inlines = [WorkerAssignmentInline]

    def save_model(self, request, obj, form, change):
        if not change and not obj.created_by_id:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)


@admin.register(WorkerAssignment)
class WorkerAssignmentAdmin(admin.ModelAdmin):
    list_display = ['worker', 'shed', 'assigned_by', 'assigned_at', 'is_active']
    list_filter = ['is_active', 'shed__variant']
    search_fields = ['worker__username', 'worker__full_name', 'shed__name']
