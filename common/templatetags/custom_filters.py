"""
Custom template filters for the application
"""
from django import template

from core.constants import AssetStatus

register = template.Library()

STATUS_BADGES = {
    AssetStatus.ACTIVE: 'success',
    AssetStatus.INACTIVE: 'secondary',
    AssetStatus.MAINTENANCE: 'warning',
    AssetStatus.RETIRED: 'dark',
    AssetStatus.DISPOSED: 'dark',
    AssetStatus.LOST: 'danger',
    AssetStatus.STOLEN: 'danger',
}

ACTION_BADGES = {
    'create': 'success',
    'update': 'primary',
    'delete': 'danger',
    'sync': 'info',
    'import': 'info',
    'login': 'secondary',
    'logout': 'secondary',
}


@register.filter
def status_badge(status):
    """
    Bootstrap badge colour for an asset status
    Usage: <span class="badge bg-{{ asset.status|status_badge }}">
    """
    return STATUS_BADGES.get(status, 'secondary')


@register.filter
def action_badge(action):
    """Bootstrap badge colour for an audit action"""
    return ACTION_BADGES.get(action, 'secondary')


@register.filter
def percent_of(value, total):
    """
    Percentage of value in total, as an int
    Usage: {{ count|percent_of:total }}
    """
    try:
        if float(total) == 0:
            return 0
        return int(round(float(value) * 100 / float(total)))
    except (ValueError, TypeError):
        return 0


@register.filter
def display_value(value):
    """Render audit values; empty ones as a dash"""
    if value is None or value == '':
        return '-'
    return value
