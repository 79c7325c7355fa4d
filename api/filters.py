"""
Query-string filters for asset listings
"""
from rest_framework import filters

from categories.repositories import CategoryRepository
from core.constants import AssetStatus


class AssetFilterBackend(filters.BaseFilterBackend):
    """
    Filter assets by ?status= and ?category=

    Unknown statuses and malformed category ids match nothing.
    """

    def filter_queryset(self, request, queryset, view):
        status = request.query_params.get('status')
        if status:
            if status not in AssetStatus.VALUES:
                return queryset.none()
            queryset = queryset.filter(status=status)

        category = request.query_params.get('category')
        if category:
            if CategoryRepository().get_category(category) is None:
                return queryset.none()
            queryset = queryset.filter(category_id=category)

        return queryset
