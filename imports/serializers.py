from rest_framework import serializers
from .models import ImportTemplate


class ImportTemplateSerializer(serializers.ModelSerializer):
    created_by_email = serializers.CharField(source='created_by.email', read_only=True, allow_null=True)

    class Meta:
        model = ImportTemplate
        fields = ['id', 'name', 'mappings', 'created_by', 'created_by_email', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_by', 'created_by_email', 'created_at', 'updated_at']


class ImportRequestSerializer(serializers.Serializer):
    rows = serializers.JSONField()
    category_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class SuggestMappingSerializer(serializers.Serializer):
    headers = serializers.ListField(child=serializers.CharField(allow_blank=True), allow_empty=True)


class PreviewUploadSerializer(serializers.Serializer):
    file = serializers.FileField()

    def validate_file(self, value):
        if not value.name.lower().endswith('.csv'):
            raise serializers.ValidationError("Please upload a CSV file")
        return value
