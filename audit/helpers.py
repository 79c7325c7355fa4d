"""
Audit Logging Helper Functions

Provides a centralized way to log all system actions.
"""

import json
import logging

from django.core.serializers.json import DjangoJSONEncoder

from audit.repositories import AuditLogRepository
from core.constants import AuditAction, EntityType

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"
SYSTEM_USER_NAME = "System"
USER_AGENT_MAX_LENGTH = 500


def compute_changes(old, new):
    """
    Shallow field-by-field diff of two snapshots.

    Every key of ``new`` whose value differs from ``old[key]`` produces one
    ``{field, old_value, new_value}`` entry, in ``new``'s key order. Keys that
    only exist in ``old`` are ignored.
    """
    old = old or {}
    changes = []
    for field, new_value in (new or {}).items():
        old_value = old.get(field)
        if old_value != new_value:
            changes.append({
                'field': field,
                'old_value': old_value,
                'new_value': new_value,
            })
    return changes


def to_snapshot(data):
    """Make serializer output JSON-safe (UUIDs, dates, decimals)"""
    if data is None:
        return None
    return json.loads(json.dumps(data, cls=DjangoJSONEncoder))


def get_client_ip(request):
    """
    Extract client IP address from request.
    Handles proxies and load balancers.
    """
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')

    if x_forwarded_for:
        # X-Forwarded-For can contain multiple IPs, get the first one
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')

    return ip or UNKNOWN


def get_user_agent(request):
    return (request.META.get('HTTP_USER_AGENT') or UNKNOWN)[:USER_AGENT_MAX_LENGTH]


def get_actor_name(user):
    """Full name, else email, else 'System'"""
    if user is None or not getattr(user, 'is_authenticated', False):
        return SYSTEM_USER_NAME
    full_name = user.get_full_name().strip()
    return full_name or user.email or SYSTEM_USER_NAME


def log_action(request, entity_type, entity_id, action,
               previous_data=None, new_data=None, changes=None, user=None):
    """
    Log an action to the audit log.

    Args:
        request: Django/DRF request the action came from (None for system jobs)
        entity_type: asset, category, user or system
        entity_id: ID of the entity, or a system scope such as 'ad-sync'
        action: create, update, delete, sync, import, login, logout
        previous_data: Snapshot before the change (optional)
        new_data: Snapshot after the change (optional)
        changes: List of {field, old_value, new_value} (optional)
        user: Actor override; defaults to request.user

    Returns:
        AuditLog instance

    Example:
        log_action(
            request,
            EntityType.ASSET,
            asset.id,
            AuditAction.CREATE,
            new_data=snapshot,
        )
    """
    if user is None and request is not None:
        user = getattr(request, 'user', None)
    if user is not None and not getattr(user, 'is_authenticated', False):
        user = None

    ip_address = UNKNOWN
    user_agent = UNKNOWN
    if request is not None:
        ip_address = get_client_ip(request)
        user_agent = get_user_agent(request)

    audit_log = AuditLogRepository().create_audit_log(
        entity_type=entity_type,
        entity_id=str(entity_id),
        action=action,
        user=user,
        user_name=get_actor_name(user),
        previous_data=to_snapshot(previous_data),
        new_data=to_snapshot(new_data),
        changes=to_snapshot(changes),
        ip_address=ip_address,
        user_agent=user_agent,
    )

    logger.info(f"Audit: {audit_log.user_name} - {action} - {entity_type} #{entity_id}")

    return audit_log


def log_login(user, request):
    """Log user login"""
    return log_action(
        request,
        EntityType.USER,
        user.pk,
        AuditAction.LOGIN,
        new_data={'email': user.email},
        user=user,
    )


def log_logout(user, request):
    """Log user logout"""
    return log_action(
        request,
        EntityType.USER,
        user.pk,
        AuditAction.LOGOUT,
        previous_data={'email': user.email},
        user=user,
    )
