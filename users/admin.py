from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Local login accounts.

    Roles:
    - admin: full access, can run directory sync
    - user: can create, edit and delete assets, categories and directory users
    - readonly: can browse everything but cannot change anything
    """
    list_display = ['email', 'first_name', 'last_name', 'role', 'is_admin', 'is_active', 'date_joined']
    list_filter = ['role', 'is_admin', 'is_active', 'is_staff']
    search_fields = ['email', 'first_name', 'last_name']
    ordering = ['email']

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Personal info', {'fields': ('first_name', 'last_name')}),
        ('Access', {
            'fields': ('role', 'is_admin', 'is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'description': 'Role controls what the user can change in the application.'
        }),
        ('Important dates', {'fields': ('last_login', 'date_joined')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2', 'role', 'is_admin'),
        }),
    )
