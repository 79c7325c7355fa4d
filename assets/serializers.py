from rest_framework import serializers

from categories.models import Category
from categories.serializers import CategorySummarySerializer
from core.constants import AssetStatus
from directory.models import DirectoryUser
from directory.serializers import DirectoryUserSummarySerializer
from .models import Asset


class AssetSerializer(serializers.ModelSerializer):
    """
    Flat asset representation used for writes and audit snapshots.
    Tag uniqueness and status are checked by AssetService.
    """
    category_id = serializers.PrimaryKeyRelatedField(
        source='category',
        queryset=Category.objects.all(),
        allow_null=True,
        required=False,
    )
    assigned_user_id = serializers.PrimaryKeyRelatedField(
        source='assigned_user',
        queryset=DirectoryUser.objects.all(),
        allow_null=True,
        required=False,
    )
    status = serializers.CharField(required=False, default=AssetStatus.ACTIVE)

    class Meta:
        model = Asset
        fields = [
            'id', 'asset_tag', 'name', 'description', 'category_id', 'assigned_user_id',
            'status', 'manufacturer', 'model', 'serial_number', 'purchase_date',
            'purchase_cost', 'warranty_expiry', 'location', 'notes', 'custom_fields',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'asset_tag': {'validators': []},
        }

    def validate_custom_fields(self, value):
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise serializers.ValidationError("Custom fields must be an object")
        return {str(key): '' if item is None else str(item) for key, item in value.items()}


class AssetDetailSerializer(AssetSerializer):
    """Asset with its category and assigned user embedded"""
    category = CategorySummarySerializer(read_only=True)
    assigned_user = DirectoryUserSummarySerializer(read_only=True)

    class Meta(AssetSerializer.Meta):
        fields = AssetSerializer.Meta.fields + ['category', 'assigned_user']
        read_only_fields = AssetSerializer.Meta.read_only_fields + ['category', 'assigned_user']
