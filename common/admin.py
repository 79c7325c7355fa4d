from django.contrib import admin
from .models import SiteSettings


@admin.register(SiteSettings)
class SiteSettingsAdmin(admin.ModelAdmin):
    """
    Site Settings - Configure system-wide settings

    IMPORTANT: This is a singleton - only one instance exists.
    """
    list_display = ['site_name', 'company_name', 'default_theme', 'updated_at']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('site_name', 'company_name', 'support_email')
        }),
        ('Appearance', {
            'fields': ('default_theme',)
        }),
        ('Notifications', {
            'fields': (
                'enable_email_notifications',
                'notify_on_asset_changes',
                'notify_on_directory_sync',
                'warranty_alert_days',
            )
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def has_add_permission(self, request):
        return not SiteSettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False
