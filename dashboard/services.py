"""
Dashboard statistics
"""
from datetime import timedelta
from typing import Any, Dict

from django.db.models import Count, Q
from django.utils import timezone

from assets.repositories import AssetRepository
from audit.repositories import AuditLogRepository
from categories.repositories import CategoryRepository
from core.constants import AssetStatus, RECENT_CHANGES_DAYS
from core.services import BaseService
from directory.repositories import DirectoryUserRepository


class StatsService(BaseService):
    """Aggregates counts for the dashboard and /api/stats/"""

    def __init__(self):
        super().__init__()
        self.assets = AssetRepository()
        self.categories = CategoryRepository()
        self.directory_users = DirectoryUserRepository()
        self.audit_logs = AuditLogRepository()

    def get_stats(self) -> Dict[str, Any]:
        since = timezone.now() - timedelta(days=RECENT_CHANGES_DAYS)

        asset_counts = self.assets.get_queryset().aggregate(
            total=Count('id'),
            active=Count('id', filter=Q(status=AssetStatus.ACTIVE)),
            maintenance=Count('id', filter=Q(status=AssetStatus.MAINTENANCE)),
        )

        return {
            'total_assets': asset_counts['total'] or 0,
            'active_assets': asset_counts['active'] or 0,
            'total_categories': self.categories.count(),
            'total_users': self.directory_users.count(),
            'recent_changes': self.audit_logs.count(created_at__gte=since),
            'assets_in_maintenance': asset_counts['maintenance'] or 0,
            'assets_by_status': self.assets_by_status(),
            'assets_by_category': self.assets_by_category(),
        }

    def assets_by_status(self) -> Dict[str, int]:
        """Count per status, every status present (zero when unused)"""
        counts = dict(
            self.assets.get_queryset()
            .values_list('status')
            .annotate(count=Count('id'))
            .order_by()
        )
        return {status: counts.get(status, 0) for status in AssetStatus.VALUES}

    def assets_by_category(self):
        """[{id, name, color, count}] for categories with assets, plus uncategorized"""
        rows = [
            {
                'id': str(category.pk),
                'name': category.name,
                'color': category.color,
                'count': category.num_assets,
            }
            for category in self.categories.get_with_asset_counts()
            if category.num_assets
        ]
        rows.sort(key=lambda row: row['count'], reverse=True)

        uncategorized = self.assets.count(category__isnull=True)
        if uncategorized:
            rows.append({'id': None, 'name': 'Uncategorized', 'color': None, 'count': uncategorized})
        return rows
