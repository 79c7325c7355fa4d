from django.db.models import QuerySet
from core.repositories import BaseRepository
from .models import ImportTemplate


class ImportTemplateRepository(BaseRepository[ImportTemplate]):
    """Repository for ImportTemplate model"""

    def __init__(self):
        super().__init__(ImportTemplate)

    def get_import_templates(self) -> QuerySet[ImportTemplate]:
        """Templates, newest first"""
        return self.get_queryset().select_related('created_by').order_by('-created_at')

    def create_import_template(self, name, mappings, created_by=None) -> ImportTemplate:
        return self.create(name=name, mappings=mappings, created_by=created_by)
