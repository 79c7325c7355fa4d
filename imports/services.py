"""
Import service - bulk asset creation from mapped spreadsheet rows.
"""
from typing import Any, Dict, List, Optional

from django.db import DatabaseError

from assets.models import Asset
from assets.services import AssetService
from audit.helpers import log_action
from categories.repositories import CategoryRepository
from common.utils import blank_to_none, parse_iso_date
from core.constants import AuditAction, EntityType, SystemEntity
from core.dto import ImportResultDTO
from core.exceptions import BaseApplicationException, ValidationError as AppValidationError
from core.services import BaseService
from core.validators import AssetStatusValidator
from .mapping import ASSET_FIELDS, FIELD_KEYS, suggest_mappings
from .repositories import ImportTemplateRepository

DATE_FIELDS = ('purchase_date', 'warranty_expiry')


class ImportService(BaseService):
    """
    Creates one asset per row.

    Rows missing asset_tag or name, or whose tag is already taken (in the
    database or earlier in the same batch), are counted as failed. Unknown
    statuses fall back to active. Date cells are used when ISO formatted.
    """

    def __init__(self):
        super().__init__()
        self.asset_service = AssetService()
        self.category_repository = CategoryRepository()
        self.template_repository = ImportTemplateRepository()

    def import_rows(self, rows, category_id=None, request=None) -> ImportResultDTO:
        if not isinstance(rows, list):
            raise AppValidationError(message="Invalid import data", code="INVALID_IMPORT_DATA")

        category = None
        if category_id:
            category = self.category_repository.get_category(category_id)
            if category is None:
                raise AppValidationError(message="Category not found", code="INVALID_CATEGORY")

        result = ImportResultDTO(total=len(rows))

        for index, row in enumerate(rows, start=1):
            try:
                data = self._row_to_asset_data(row, category)
                self.asset_service.create(data, request=request, audit_extra={'source': 'import'})
                result.success += 1
            except BaseApplicationException as e:
                result.failed += 1
                result.errors.append({'row': index, 'message': e.message})
            except DatabaseError as e:
                # The row's savepoint is rolled back, the rest of the batch continues
                self.log_error("Import row rejected by database", error=e, row=index)
                result.failed += 1
                result.errors.append({'row': index, 'message': "Row could not be saved"})

        log_action(
            request,
            EntityType.SYSTEM,
            SystemEntity.IMPORT,
            AuditAction.IMPORT,
            new_data={
                'total_rows': result.total,
                'success': result.success,
                'failed': result.failed,
            },
        )

        self.log_info("Asset import finished", total=result.total, success=result.success, failed=result.failed)
        return result

    def _row_to_asset_data(self, row, category) -> Dict[str, Any]:
        if not isinstance(row, dict):
            raise AppValidationError(message="Row must be an object", code="INVALID_ROW")

        values = {
            key: blank_to_none(str(row[key])) if row.get(key) is not None else None
            for key in FIELD_KEYS
            if key in row
        }

        if not values.get('asset_tag') or not values.get('name'):
            raise AppValidationError(message="Asset tag and name are required", code="REQUIRED")

        data = dict(values)
        data['status'] = AssetStatusValidator.normalize_status(values.get('status'))
        for field in DATE_FIELDS:
            if field in data:
                data[field] = parse_iso_date(data[field])
        self._check_lengths(data)
        data['category'] = category
        return data

    @staticmethod
    def _check_lengths(values: Dict[str, Any]):
        """Reject cells longer than their column before they reach the database"""
        labels = {field.key: field.label for field in ASSET_FIELDS}
        for key, value in values.items():
            max_length = getattr(Asset._meta.get_field(key), 'max_length', None)
            if max_length and isinstance(value, str) and len(value) > max_length:
                raise AppValidationError(
                    message=f"{labels[key]} is too long (max {max_length} characters)",
                    code="TOO_LONG",
                )

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def list_templates(self):
        return self.template_repository.get_import_templates()

    def save_template(self, name: str, mappings: Dict[str, str], user=None):
        name = (name or '').strip()
        if not name:
            raise AppValidationError(message="Template name is required", code="NAME_REQUIRED")
        if not isinstance(mappings, dict) or not mappings:
            raise AppValidationError(message="Mappings are required", code="MAPPINGS_REQUIRED")

        unknown = sorted({field for field in mappings.values() if field and field not in FIELD_KEYS})
        if unknown:
            raise AppValidationError(
                message=f"Unknown asset fields: {', '.join(unknown)}",
                code="UNKNOWN_FIELDS",
                details={'fields': unknown}
            )

        template = self.template_repository.create_import_template(
            name=name,
            mappings=mappings,
            created_by=user if user is not None and user.is_authenticated else None,
        )
        self.log_info("Import template saved", id=str(template.pk), name=name)
        return template

    def get_template(self, template_id) -> Optional[Any]:
        return self.template_repository.get_by_id(template_id)


def summarize_preview(headers: List[str], rows: List[List[str]], limit: int = 10) -> Dict[str, Any]:
    mappings, suggestions = suggest_mappings(headers)
    return {
        'headers': headers,
        'rows': rows[:limit],
        'total_rows': len(rows),
        'mappings': mappings,
        'suggestions': suggestions,
    }
