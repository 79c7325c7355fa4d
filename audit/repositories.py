"""
Audit repository - read access to the audit trail.
"""
from typing import Optional
from django.db.models import QuerySet, Q
from core.exceptions import PermissionDeniedError
from core.repositories import BaseRepository
from .models import AuditLog


class AuditLogRepository(BaseRepository[AuditLog]):
    """Repository for AuditLog model. Rows are append-only."""

    def __init__(self):
        super().__init__(AuditLog)

    def get_audit_logs(self, limit: Optional[int] = None) -> QuerySet[AuditLog]:
        """Audit logs, newest first"""
        queryset = self.get_queryset().select_related('user').order_by('-created_at')
        if limit:
            queryset = queryset[:limit]
        return queryset

    def get_audit_logs_by_entity(self, entity_type: str, entity_id) -> QuerySet[AuditLog]:
        return self.get_audit_logs().filter(entity_type=entity_type, entity_id=str(entity_id))

    def create_audit_log(self, **kwargs) -> AuditLog:
        return self.create(**kwargs)

    def search(self, queryset: QuerySet[AuditLog], term: str) -> QuerySet[AuditLog]:
        """Match actor name or entity id"""
        return queryset.filter(Q(user_name__icontains=term) | Q(entity_id__icontains=term))

    def update(self, instance, **kwargs):
        raise PermissionDeniedError(message="Audit logs are immutable", code="AUDIT_IMMUTABLE")

    def delete(self, instance) -> bool:
        raise PermissionDeniedError(message="Audit logs are immutable", code="AUDIT_IMMUTABLE")
