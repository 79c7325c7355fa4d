"""
Bulk import API views
"""
import logging

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import api_view, parser_classes, permission_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.response import Response

from api.permissions import CanWrite
from core.exceptions import ValidationError as AppValidationError
from .mapping import parse_csv, suggest_mappings
from .serializers import (
    ImportRequestSerializer, ImportTemplateSerializer,
    PreviewUploadSerializer, SuggestMappingSerializer,
)
from .services import ImportService, summarize_preview

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([CanWrite])
def import_assets(request):
    """
    Create assets from mapped rows.

    Body: {"rows": [{"asset_tag": ..., "name": ...}], "category_id": optional}
    Returns: {"success": n, "failed": n, "total": n, "errors": [...]}
    """
    serializer = ImportRequestSerializer(data=request.data)
    if not serializer.is_valid():
        raise AppValidationError(message="Invalid import data", code="INVALID_IMPORT_DATA")

    result = ImportService().import_rows(
        serializer.validated_data['rows'],
        category_id=serializer.validated_data.get('category_id') or None,
        request=request,
    )
    return Response(result.as_dict())


@api_view(['POST'])
@permission_classes([CanWrite])
@parser_classes([MultiPartParser, FormParser])
def import_preview(request):
    """
    Parse an uploaded CSV and suggest column mappings.

    Returns: {"headers", "rows", "total_rows", "mappings", "suggestions"}
    """
    serializer = PreviewUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    upload = serializer.validated_data['file']
    try:
        text = upload.read().decode('utf-8-sig')
    except UnicodeDecodeError:
        raise AppValidationError(message="File must be UTF-8 encoded", code="INVALID_ENCODING")

    headers, rows = parse_csv(text)
    if not headers:
        raise AppValidationError(message="The file is empty", code="EMPTY_FILE")

    logger.info(f"CSV preview: {upload.name}, {len(headers)} columns, {len(rows)} rows")
    return Response(summarize_preview(headers, rows))


@api_view(['POST'])
@permission_classes([CanWrite])
def suggest_mapping(request):
    """
    Suggest asset fields for spreadsheet headers.

    Body: {"headers": [...]}
    Returns: {"mappings": {header: field}, "suggestions": {header: {field, confidence}}}
    """
    serializer = SuggestMappingSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    mappings, suggestions = suggest_mappings(serializer.validated_data['headers'])
    return Response({'mappings': mappings, 'suggestions': suggestions})


class ImportTemplateViewSet(mixins.ListModelMixin,
                            mixins.RetrieveModelMixin,
                            mixins.CreateModelMixin,
                            viewsets.GenericViewSet):
    """List and save column mapping templates"""
    serializer_class = ImportTemplateSerializer
    permission_classes = [CanWrite]
    service = ImportService()

    def get_queryset(self):
        return self.service.list_templates()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        template = self.service.save_template(
            serializer.validated_data['name'],
            serializer.validated_data['mappings'],
            user=request.user,
        )
        return Response(self.get_serializer(template).data, status=status.HTTP_201_CREATED)
