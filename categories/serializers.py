from rest_framework import serializers
from .models import Category


class CategorySerializer(serializers.ModelSerializer):
    """Category with its parent id; also the audit snapshot shape"""
    parent_id = serializers.PrimaryKeyRelatedField(
        source='parent',
        queryset=Category.objects.all(),
        allow_null=True,
        required=False,
    )

    class Meta:
        model = Category
        fields = [
            'id', 'name', 'description', 'parent_id', 'icon', 'color',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        # Blank names reach the service, which reports them as missing
        extra_kwargs = {'name': {'allow_blank': True}}


class CategorySummarySerializer(serializers.ModelSerializer):
    """Lightweight serializer nested inside assets"""

    class Meta:
        model = Category
        fields = ['id', 'name', 'icon', 'color']
        read_only_fields = fields
