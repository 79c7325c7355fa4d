"""
Asset service - business logic for assets.
"""
from typing import Any, Dict

from django.db import IntegrityError, transaction

from audit.repositories import AuditLogRepository
from audit.services import AuditedService
from categories.repositories import CategoryRepository
from core.constants import EntityType
from core.exceptions import DuplicateError, ValidationError as AppValidationError
from core.validators import AssetStatusValidator
from .repositories import AssetRepository
from .serializers import AssetSerializer

DUPLICATE_TAG_MESSAGE = "Asset tag already exists"


class AssetService(AuditedService):
    """Create, update and delete assets with audit rows"""

    entity_type = EntityType.ASSET
    entity_label = "Asset"
    repository_class = AssetRepository
    serializer_class = AssetSerializer

    def list_assets(self, search: str = None, status: str = None, category_id=None):
        queryset = self.repository.get_assets_with_relations()
        if search:
            queryset = self.repository.search(queryset, search)
        if status:
            queryset = queryset.filter(status=status)
        if category_id:
            if CategoryRepository().get_category(category_id) is None:
                return queryset.none()
            queryset = queryset.filter(category_id=category_id)
        return queryset

    def history(self, asset_id):
        """Audit trail of one asset, newest first"""
        asset = self.get(asset_id)
        return AuditLogRepository().get_audit_logs_by_entity(self.entity_type, asset.pk)

    def clean(self, data: Dict[str, Any], instance=None) -> Dict[str, Any]:
        for field in ('asset_tag', 'name'):
            if instance is None or field in data:
                value = (data.get(field) or '').strip()
                if not value:
                    label = field.replace('_', ' ').capitalize()
                    raise AppValidationError(message=f"{label} is required", code="REQUIRED")
                data[field] = value

        if 'asset_tag' in data:
            existing = self.repository.get_asset_by_tag(data['asset_tag'])
            if existing is not None and (instance is None or existing.pk != instance.pk):
                raise DuplicateError(message=DUPLICATE_TAG_MESSAGE, code="DUPLICATE_ASSET_TAG")

        if instance is None or 'status' in data:
            data['status'] = data.get('status') or AssetStatusValidator.normalize_status(None)
            AssetStatusValidator.validate_status(data['status'])

        if data.get('custom_fields') is None and 'custom_fields' in data:
            data['custom_fields'] = {}
        return data

    def create(self, data, request=None, audit_extra=None):
        try:
            with transaction.atomic():
                return super().create(data, request=request, audit_extra=audit_extra)
        except IntegrityError as e:
            # Concurrent insert of the same tag
            self.log_error("Asset insert rejected by database", error=e, asset_tag=data.get('asset_tag'))
            raise DuplicateError(message=DUPLICATE_TAG_MESSAGE, code="DUPLICATE_ASSET_TAG") from e

    def update(self, pk, data, request=None):
        try:
            with transaction.atomic():
                return super().update(pk, data, request=request)
        except IntegrityError as e:
            self.log_error("Asset update rejected by database", error=e, id=str(pk))
            raise DuplicateError(message=DUPLICATE_TAG_MESSAGE, code="DUPLICATE_ASSET_TAG") from e
