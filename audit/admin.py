"""
Audit Log Admin - READ ONLY

Audit logs are immutable and cannot be edited or deleted via admin.
"""

import json

from django.contrib import admin
from django.utils.html import format_html
from audit.models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """
    Read-only admin for audit logs.
    """

    list_display = [
        'created_at',
        'user_display',
        'action',
        'entity_type',
        'entity_id',
        'change_count',
        'ip_address',
    ]

    list_filter = [
        'action',
        'entity_type',
        'created_at',
    ]

    search_fields = [
        'user_name',
        'entity_id',
        'ip_address',
    ]

    readonly_fields = [
        'entity_type',
        'entity_id',
        'action',
        'user',
        'user_name',
        'ip_address',
        'user_agent',
        'changes_display',
        'previous_data_display',
        'new_data_display',
        'created_at',
    ]

    fieldsets = (
        ('Action Details', {
            'fields': ('action', 'entity_type', 'entity_id', 'changes_display')
        }),
        ('User Information', {
            'fields': ('user', 'user_name', 'ip_address', 'user_agent')
        }),
        ('Snapshots', {
            'fields': ('previous_data_display', 'new_data_display', 'created_at'),
            'classes': ('collapse',)
        }),
    )

    date_hierarchy = 'created_at'

    ordering = ['-created_at']

    # Disable all editing
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_actions(self, request):
        """Disable bulk actions"""
        actions = super().get_actions(request)
        if 'delete_selected' in actions:
            del actions['delete_selected']
        return actions

    @admin.display(description='Changes')
    def change_count(self, obj):
        return len(obj.changes or [])

    @staticmethod
    def _pretty(data):
        if data:
            return format_html('<pre>{}</pre>', json.dumps(data, indent=2))
        return "-"

    @admin.display(description='Changes')
    def changes_display(self, obj):
        return self._pretty(obj.changes)

    @admin.display(description='Previous data')
    def previous_data_display(self, obj):
        return self._pretty(obj.previous_data)

    @admin.display(description='New data')
    def new_data_display(self, obj):
        return self._pretty(obj.new_data)
