"""
Asset repository - Data access layer for the Asset domain.
"""
from typing import Optional
from django.db.models import QuerySet, Q
from core.repositories import BaseRepository
from .models import Asset


class AssetRepository(BaseRepository[Asset]):
    """Repository for Asset model"""

    def __init__(self):
        super().__init__(Asset)

    def get_assets(self) -> QuerySet[Asset]:
        """All assets, newest first"""
        return self.get_queryset().order_by('-created_at')

    def get_assets_with_relations(self) -> QuerySet[Asset]:
        """Assets with category and assigned user joined"""
        return self.get_assets().with_relations()

    def get_asset(self, asset_id) -> Optional[Asset]:
        return self.get_by_id(asset_id)

    def get_asset_by_tag(self, asset_tag) -> Optional[Asset]:
        if not asset_tag:
            return None
        return self.get_queryset().filter(asset_tag=asset_tag).first()

    def search(self, queryset: QuerySet[Asset], term: str) -> QuerySet[Asset]:
        """Match name, tag or serial number"""
        return queryset.filter(
            Q(name__icontains=term) |
            Q(asset_tag__icontains=term) |
            Q(serial_number__icontains=term)
        )
