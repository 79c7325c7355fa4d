from django.contrib.auth import get_user_model
from rest_framework import serializers

from core.validators import PasswordValidator

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Safe user representation - never includes the password hash"""
    display_name = serializers.CharField(read_only=True)
    can_write = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'first_name', 'last_name', 'display_name',
            'role', 'is_admin', 'is_active', 'can_write', 'date_joined', 'updated_at',
        ]
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(
        min_length=PasswordValidator.MIN_LENGTH,
        write_only=True,
        error_messages={'min_length': f"Password must be at least {PasswordValidator.MIN_LENGTH} characters"},
    )
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(write_only=True)
