"""
Dashboard statistics API
"""

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .services import StatsService


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def stats(request):
    """
    Get dashboard statistics.

    Returns:
        total_assets, active_assets, total_categories, total_users,
        recent_changes (audit rows in the last 7 days), assets_in_maintenance,
        assets_by_status, assets_by_category
    """
    return Response(StatsService().get_stats())
