from django.contrib import admin
from .models import ImportTemplate


@admin.register(ImportTemplate)
class ImportTemplateAdmin(admin.ModelAdmin):
    list_display = ['name', 'created_by', 'created_at']
    search_fields = ['name']
    readonly_fields = ['created_by', 'created_at', 'updated_at']
