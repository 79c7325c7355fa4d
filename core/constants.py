"""
Application-wide constants.
Centralized constants following DRY principle.
"""

# User Roles
class UserRole:
    ADMIN = 'admin'
    USER = 'user'
    READONLY = 'readonly'

    CHOICES = [
        (ADMIN, 'Admin'),
        (USER, 'User'),
        (READONLY, 'Read Only'),
    ]


# Asset Status
class AssetStatus:
    ACTIVE = 'active'
    INACTIVE = 'inactive'
    MAINTENANCE = 'maintenance'
    RETIRED = 'retired'
    DISPOSED = 'disposed'
    LOST = 'lost'
    STOLEN = 'stolen'

    CHOICES = [
        (ACTIVE, 'Active'),
        (INACTIVE, 'Inactive'),
        (MAINTENANCE, 'Maintenance'),
        (RETIRED, 'Retired'),
        (DISPOSED, 'Disposed'),
        (LOST, 'Lost'),
        (STOLEN, 'Stolen'),
    ]

    VALUES = [value for value, _ in CHOICES]


# Audit entity types
class EntityType:
    ASSET = 'asset'
    CATEGORY = 'category'
    USER = 'user'
    SYSTEM = 'system'

    CHOICES = [
        (ASSET, 'Asset'),
        (CATEGORY, 'Category'),
        (USER, 'User'),
        (SYSTEM, 'System'),
    ]


# Audit actions
class AuditAction:
    CREATE = 'create'
    UPDATE = 'update'
    DELETE = 'delete'
    SYNC = 'sync'
    IMPORT = 'import'
    LOGIN = 'login'
    LOGOUT = 'logout'

    CHOICES = [
        (CREATE, 'Create'),
        (UPDATE, 'Update'),
        (DELETE, 'Delete'),
        (SYNC, 'Sync'),
        (IMPORT, 'Import'),
        (LOGIN, 'Login'),
        (LOGOUT, 'Logout'),
    ]


# System entity ids used for audit rows that are not tied to a record
class SystemEntity:
    DIRECTORY_SYNC = 'ad-sync'
    IMPORT = 'import'


# Category defaults
class CategoryDefaults:
    ICON = 'folder'
    COLOR = '#3b82f6'


# Pagination
class Pagination:
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100


# Dashboard
RECENT_CHANGES_DAYS = 7
