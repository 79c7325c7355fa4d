"""
Audited CRUD service.

Entity services extend AuditedService so that every create, update and
delete writes its audit row in the same transaction as the storage write.
"""
from typing import Any, Dict, Iterable, Optional

from django.db import transaction

from audit.helpers import compute_changes, log_action, to_snapshot
from core.constants import AuditAction
from core.exceptions import NotFoundError
from core.services import BaseService


class AuditedService(BaseService):
    """
    Base for entity services.

    Subclasses set ``entity_type``, ``entity_label``, ``repository_class``
    and ``serializer_class`` (the flat serializer whose output is stored as
    the audit snapshot) and may override ``clean`` to validate and
    normalize incoming data.
    """

    entity_type: str = None
    entity_label: str = None
    repository_class = None
    serializer_class = None

    def __init__(self):
        super().__init__()
        self.repository = self.repository_class()

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def clean(self, data: Dict[str, Any], instance=None) -> Dict[str, Any]:
        """Validate and normalize data before it is written"""
        return data

    def snapshot(self, instance) -> Dict[str, Any]:
        return to_snapshot(self.serializer_class(instance).data)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def get(self, pk):
        instance = self.repository.get_by_id(pk)
        if instance is None:
            raise NotFoundError(self.entity_label, pk)
        return instance

    @transaction.atomic
    def create(self, data: Dict[str, Any], request=None, audit_extra: Optional[Dict[str, Any]] = None):
        data = self.clean(dict(data))
        instance = self.repository.create(**data)

        new_data = self.snapshot(instance)
        if audit_extra:
            new_data.update(audit_extra)
        log_action(request, self.entity_type, instance.pk, AuditAction.CREATE, new_data=new_data)

        self.log_info(f"{self.entity_label} created", id=str(instance.pk))
        return instance

    @transaction.atomic
    def update(self, pk, data: Dict[str, Any], request=None):
        instance = self.get(pk)
        data = self.clean(dict(data), instance=instance)

        previous = self.snapshot(instance)
        instance = self.repository.update(instance, **data)
        current = self.snapshot(instance)

        submitted = {key: current[key] for key in self._snapshot_keys(data, current)}
        changes = compute_changes(previous, submitted)
        log_action(
            request, self.entity_type, instance.pk, AuditAction.UPDATE,
            previous_data=previous, new_data=current, changes=changes,
        )

        self.log_info(f"{self.entity_label} updated", id=str(instance.pk), changed=len(changes))
        return instance

    @transaction.atomic
    def delete(self, pk, request=None) -> bool:
        instance = self.get(pk)
        previous = self.snapshot(instance)
        deleted = self.repository.delete(instance)

        log_action(request, self.entity_type, pk, AuditAction.DELETE, previous_data=previous)

        self.log_info(f"{self.entity_label} deleted", id=str(pk))
        return deleted

    @staticmethod
    def _snapshot_keys(data: Dict[str, Any], snapshot: Dict[str, Any]) -> Iterable[str]:
        """Map submitted field names (``category``) to snapshot keys (``category_id``)"""
        for key in data:
            if key in snapshot:
                yield key
            elif f"{key}_id" in snapshot:
                yield f"{key}_id"
