from rest_framework import serializers
from .models import DirectoryUser


class DirectoryUserSerializer(serializers.ModelSerializer):
    """Directory user; uniqueness is checked by DirectoryUserService"""

    class Meta:
        model = DirectoryUser
        fields = [
            'id', 'employee_id', 'display_name', 'email', 'department', 'title',
            'manager', 'office_location', 'phone', 'is_active', 'last_sync_at',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'last_sync_at', 'created_at', 'updated_at']
        extra_kwargs = {
            'employee_id': {'validators': [], 'allow_blank': True},
            'email': {'validators': [], 'allow_blank': True},
            'display_name': {'allow_blank': True},
        }


class DirectoryUserSummarySerializer(serializers.ModelSerializer):
    """Lightweight serializer nested inside assets"""

    class Meta:
        model = DirectoryUser
        fields = ['id', 'display_name', 'email', 'department']
        read_only_fields = fields
