"""
Audit Log Model

IMMUTABLE: Audit logs cannot be edited or deleted after creation.
Purpose: Compliance trail of every change made to assets, categories,
directory users and of system events (sync, import, login, logout).
"""

import uuid

from django.db import models
from django.conf import settings
from django.core.exceptions import PermissionDenied

from core.constants import AuditAction, EntityType


# ============================================================================
# CUSTOM MANAGER AND QUERYSET
# ============================================================================

class AuditLogQuerySet(models.QuerySet):
    """Custom queryset for audit logs with filtering helpers"""

    def for_user(self, user):
        """Filter logs for a specific user"""
        return self.filter(user=user)

    def for_entity(self, entity_type, entity_id):
        """Filter logs for a specific entity"""
        return self.filter(entity_type=entity_type, entity_id=str(entity_id))

    def for_action(self, action):
        """Filter logs for a specific action"""
        return self.filter(action=action)

    def recent(self, limit=100):
        """Get recent logs"""
        return self.order_by('-created_at')[:limit]


class AuditLogManager(models.Manager.from_queryset(AuditLogQuerySet)):
    """Custom manager for audit logs"""
    pass


# ============================================================================
# AUDIT LOG MODEL
# ============================================================================

class AuditLog(models.Model):
    """
    Immutable audit log for tracking all system actions.

    Security:
    - Logs CANNOT be edited after creation
    - Logs CANNOT be deleted
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    entity_type = models.CharField(
        max_length=20,
        choices=EntityType.CHOICES,
        db_index=True,
        help_text="Type of entity affected"
    )

    entity_id = models.CharField(
        max_length=64,
        help_text="ID of the entity affected, or a system scope such as 'ad-sync'"
    )

    action = models.CharField(
        max_length=20,
        choices=AuditAction.CHOICES,
        db_index=True,
        help_text="Type of action performed"
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
        help_text="User who performed the action"
    )

    user_name = models.CharField(
        max_length=255,
        blank=True,
        null=True,
        help_text="Display name of the actor at the time of the action"
    )

    previous_data = models.JSONField(null=True, blank=True)
    new_data = models.JSONField(null=True, blank=True)
    changes = models.JSONField(
        null=True,
        blank=True,
        help_text="List of {field, old_value, new_value}"
    )

    # Request metadata
    ip_address = models.CharField(max_length=64, blank=True, null=True)
    user_agent = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    objects = AuditLogManager()

    class Meta:
        verbose_name = "Audit Log"
        verbose_name_plural = "Audit Logs"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['entity_type', 'entity_id'], name='audit_entity_idx'),
            models.Index(fields=['user'], name='audit_user_idx'),
        ]

    def __str__(self):
        return f"{self.user_display} - {self.action} - {self.entity_type} #{self.entity_id} - {self.created_at}"

    def save(self, *args, **kwargs):
        """
        Override save to enforce immutability.
        Only allow creation, not updates.
        """
        if not self._state.adding:
            raise PermissionDenied(
                "Audit logs are immutable and cannot be modified after creation."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """
        Override delete to prevent deletion.
        """
        raise PermissionDenied(
            "Audit logs are immutable and cannot be deleted."
        )

    @property
    def user_display(self):
        return self.user_name or "System"

    @property
    def action_display(self):
        """Get human-readable action"""
        return dict(AuditAction.CHOICES).get(self.action, self.action)
