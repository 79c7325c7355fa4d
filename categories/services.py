"""
Category service - business logic for asset categories.
"""
from typing import Any, Dict

from audit.services import AuditedService
from core.constants import CategoryDefaults, EntityType
from core.exceptions import ValidationError as AppValidationError
from core.validators import CategoryHierarchyValidator
from .repositories import CategoryRepository
from .serializers import CategorySerializer


class CategoryService(AuditedService):
    """Create, update and delete categories with audit rows"""

    entity_type = EntityType.CATEGORY
    entity_label = "Category"
    repository_class = CategoryRepository
    serializer_class = CategorySerializer

    def list_categories(self):
        return self.repository.get_categories()

    def clean(self, data: Dict[str, Any], instance=None) -> Dict[str, Any]:
        if instance is None or 'name' in data:
            name = (data.get('name') or '').strip()
            if not name:
                raise AppValidationError(message="Name is required", code="NAME_REQUIRED")
            data['name'] = name

        if instance is None:
            data['icon'] = data.get('icon') or CategoryDefaults.ICON
            data['color'] = data.get('color') or CategoryDefaults.COLOR

        if 'parent' in data:
            CategoryHierarchyValidator.validate_parent(instance, data['parent'])
        return data
