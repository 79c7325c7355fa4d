"""
Asset API views
"""
from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.response import Response

from api.filters import AssetFilterBackend
from api.permissions import CanWrite
from audit.serializers import AuditLogSerializer
from .serializers import AssetSerializer, AssetDetailSerializer
from .services import AssetService


class AssetViewSet(viewsets.ModelViewSet):
    """
    ViewSet for assets.

    - ?search= matches name, asset tag and serial number
    - ?status= and ?category= filter the list
    - GET {id}/history/ returns the asset's audit trail
    """
    permission_classes = [CanWrite]
    filter_backends = [filters.SearchFilter, AssetFilterBackend]
    search_fields = ['name', 'asset_tag', 'serial_number']
    service = AssetService()

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return AssetSerializer
        return AssetDetailSerializer

    def get_queryset(self):
        return self.service.list_assets()

    def get_object(self):
        return self.service.get(self.kwargs['pk'])

    def _detail(self, asset):
        asset.refresh_from_db()
        return AssetDetailSerializer(asset, context=self.get_serializer_context()).data

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        asset = self.service.create(serializer.validated_data, request=request)
        return Response(self._detail(asset), status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        asset = self.service.update(instance.pk, serializer.validated_data, request=request)
        return Response(self._detail(asset))

    def destroy(self, request, *args, **kwargs):
        self.service.delete(self.kwargs['pk'], request=request)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def history(self, request, pk=None):
        """
        Audit trail of one asset.

        Example: GET /api/assets/{id}/history/
        """
        logs = self.service.history(pk)
        return Response(AuditLogSerializer(logs, many=True).data)
