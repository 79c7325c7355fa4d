"""
Category repository - Data access layer for the Category domain.
"""
from typing import Optional
from django.db.models import QuerySet, Count
from core.repositories import BaseRepository
from .models import Category


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model"""

    def __init__(self):
        super().__init__(Category)

    def get_categories(self) -> QuerySet[Category]:
        """All categories ordered by name"""
        return self.get_queryset().select_related('parent').order_by('name')

    def get_category(self, category_id) -> Optional[Category]:
        return self.get_by_id(category_id)

    def get_with_asset_counts(self) -> QuerySet[Category]:
        """Categories annotated with the number of assets in each"""
        return self.get_categories().annotate(num_assets=Count('assets'))
