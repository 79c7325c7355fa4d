from django.contrib import admin
from .models import DirectoryUser


@admin.register(DirectoryUser)
class DirectoryUserAdmin(admin.ModelAdmin):
    list_display = ['display_name', 'email', 'employee_id', 'department', 'is_active', 'last_sync_at']
    list_filter = ['is_active', 'department']
    search_fields = ['display_name', 'email', 'employee_id', 'department']
    readonly_fields = ['last_sync_at', 'created_at', 'updated_at']

    fieldsets = (
        ('Identity', {
            'fields': ('display_name', 'email', 'employee_id', 'is_active')
        }),
        ('Organization', {
            'fields': ('department', 'title', 'manager', 'office_location', 'phone')
        }),
        ('Sync', {
            'fields': ('last_sync_at', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
