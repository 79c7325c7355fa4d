from django.contrib import admin
from .models import Asset


@admin.register(Asset)
class AssetAdmin(admin.ModelAdmin):
    list_display = ['asset_tag', 'name', 'category', 'assigned_user', 'status', 'location', 'created_at']
    list_filter = ['status', 'category']
    search_fields = ['asset_tag', 'name', 'serial_number', 'manufacturer', 'model']
    readonly_fields = ['created_at', 'updated_at']
    list_select_related = ['category', 'assigned_user']

    fieldsets = (
        ('Basic Information', {
            'fields': ('asset_tag', 'name', 'description', 'category', 'status')
        }),
        ('Assignment', {
            'fields': ('assigned_user', 'location')
        }),
        ('Hardware', {
            'fields': ('manufacturer', 'model', 'serial_number')
        }),
        ('Purchase', {
            'fields': ('purchase_date', 'purchase_cost', 'warranty_expiry')
        }),
        ('Other', {
            'fields': ('notes', 'custom_fields', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
