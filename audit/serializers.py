"""
Audit Log Serializers
"""

from rest_framework import serializers
from audit.models import AuditLog


class AuditLogSerializer(serializers.ModelSerializer):
    """
    Serializer for AuditLog model.

    Read-only: Audit logs cannot be created/updated via API.
    """

    user_display = serializers.CharField(read_only=True)
    action_display = serializers.CharField(read_only=True)

    class Meta:
        model = AuditLog
        fields = [
            'id',
            'entity_type',
            'entity_id',
            'action',
            'action_display',
            'user',
            'user_name',
            'user_display',
            'previous_data',
            'new_data',
            'changes',
            'ip_address',
            'user_agent',
            'created_at',
        ]
        read_only_fields = fields
