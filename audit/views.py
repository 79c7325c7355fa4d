"""
Audit Log API Views

Provides read-only access to the audit trail.
"""

from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from audit.repositories import AuditLogRepository
from audit.serializers import AuditLogSerializer
from common.utils import parse_positive_int


class AuditLogViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Read-only ViewSet for audit logs, newest first.

    Query params:
    - limit: maximum number of rows
    - entity_type, action: exact filters
    - search: matches actor name or entity id

    Example: GET /api/audit-logs/?limit=50&entity_type=asset
    """

    serializer_class = AuditLogSerializer
    permission_classes = [IsAuthenticated]
    repository = AuditLogRepository()

    def get_queryset(self):
        queryset = self.repository.get_audit_logs()

        if self.action != 'list':
            return queryset

        params = self.request.query_params
        entity_type = params.get('entity_type')
        if entity_type:
            queryset = queryset.filter(entity_type=entity_type)

        action = params.get('action')
        if action:
            queryset = queryset.filter(action=action)

        search = params.get('search', '').strip()
        if search:
            queryset = self.repository.search(queryset, search)

        limit = parse_positive_int(params.get('limit'))
        if limit:
            queryset = queryset[:limit]

        return queryset
