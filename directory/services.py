"""
Directory service - directory user CRUD and Active Directory sync.
"""
from typing import Any, Dict

from django.db import IntegrityError, transaction
from django.utils import timezone

from audit.helpers import log_action
from audit.services import AuditedService
from core.constants import AuditAction, EntityType, SystemEntity
from core.dto import SyncResultDTO
from core.exceptions import DuplicateError, ValidationError as AppValidationError
from core.services import BaseService
from common.utils import blank_to_none
from . import ldap
from .repositories import DirectoryUserRepository
from .serializers import DirectoryUserSerializer

NULLABLE_FIELDS = (
    'employee_id', 'email', 'department', 'title', 'manager', 'office_location', 'phone',
)


class DirectoryUserService(AuditedService):
    """Create, update and delete directory users with audit rows"""

    entity_type = EntityType.USER
    entity_label = "User"
    repository_class = DirectoryUserRepository
    serializer_class = DirectoryUserSerializer

    def list_users(self, search: str = None):
        if search:
            return self.repository.search(search)
        return self.repository.get_directory_users()

    def clean(self, data: Dict[str, Any], instance=None) -> Dict[str, Any]:
        for field in NULLABLE_FIELDS:
            if field in data:
                data[field] = blank_to_none(data[field])

        if instance is None or 'display_name' in data:
            display_name = (data.get('display_name') or '').strip()
            if not display_name:
                raise AppValidationError(message="Display name is required", code="DISPLAY_NAME_REQUIRED")
            data['display_name'] = display_name

        exclude_pk = instance.pk if instance is not None else None
        email = data.get('email')
        if email:
            data['email'] = email.lower()
            existing = self.repository.get_by_email(email)
            if existing is not None and existing.pk != exclude_pk:
                raise DuplicateError(message="Email already exists", code="DUPLICATE_EMAIL")

        employee_id = data.get('employee_id')
        if employee_id:
            existing = self.repository.get_by_employee_id(employee_id)
            if existing is not None and existing.pk != exclude_pk:
                raise DuplicateError(message="Employee ID already exists", code="DUPLICATE_EMPLOYEE_ID")
        return data


class DirectorySyncService(BaseService):
    """
    Pulls enabled accounts from Active Directory into DirectoryUser rows.

    Users are matched by email, then by employee id; matches are updated,
    everything else is created. Entries the database still rejects on a
    unique key are skipped and counted. One summary audit row is written
    per run.
    """

    def __init__(self):
        super().__init__()
        self.repository = DirectoryUserRepository()

    def sync(self, request=None) -> SyncResultDTO:
        if not ldap.is_ldap_configured():
            log_action(
                request,
                EntityType.SYSTEM,
                SystemEntity.DIRECTORY_SYNC,
                AuditAction.SYNC,
                new_data={'action': 'AD Sync triggered (LDAP not configured - simulated)', 'simulated': True},
            )
            self.log_info("Directory sync simulated, LDAP not configured")
            return SyncResultDTO(
                success=True,
                message=(
                    "AD sync simulated (LDAP not configured). " + ldap.NOT_CONFIGURED_MESSAGE
                ),
            )

        entries = ldap.sync_all_users()
        return self._apply(entries, request)

    @transaction.atomic
    def _apply(self, entries, request=None) -> SyncResultDTO:
        now = timezone.now()
        created = 0
        updated = 0
        skipped = 0

        for entry in entries:
            data = self._entry_to_data(entry, now)
            try:
                with transaction.atomic():
                    if self._upsert(data):
                        created += 1
                    else:
                        updated += 1
            except IntegrityError as e:
                self.log_error(
                    "Directory entry skipped", error=e,
                    email=data['email'], employee_id=data['employee_id'],
                )
                skipped += 1

        log_action(
            request,
            EntityType.SYSTEM,
            SystemEntity.DIRECTORY_SYNC,
            AuditAction.SYNC,
            new_data={
                'action': 'AD Sync completed',
                'total_users': len(entries),
                'created': created,
                'updated': updated,
                'skipped': skipped,
            },
        )

        self.log_info("Directory sync completed", total=len(entries), created=created, updated=updated, skipped=skipped)
        message = f"AD sync completed. {created} users created, {updated} users updated."
        if skipped:
            message += f" {skipped} users skipped."
        return SyncResultDTO(
            success=True,
            message=message,
            synced=len(entries),
            created=created,
            updated=updated,
            skipped=skipped,
        )

    @staticmethod
    def _entry_to_data(entry, now) -> Dict[str, Any]:
        return {
            'employee_id': blank_to_none(entry.employee_id or entry.sam_account_name),
            'display_name': entry.display_name,
            'email': blank_to_none(entry.email.lower() if entry.email else None),
            'department': blank_to_none(entry.department),
            'title': blank_to_none(entry.title),
            'manager': blank_to_none(entry.manager),
            'office_location': blank_to_none(entry.office_location),
            'phone': blank_to_none(entry.phone),
            'is_active': True,
            'last_sync_at': now,
        }

    def _upsert(self, data: Dict[str, Any]) -> bool:
        """Update the row matched by email, else by employee id, else create; True when created"""
        existing = (
            self.repository.get_by_email(data['email'])
            or self.repository.get_by_employee_id(data['employee_id'])
        )
        if existing is None:
            self.repository.create(**data)
            return True

        owner = self.repository.get_by_employee_id(data['employee_id'])
        if owner is not None and owner.pk != existing.pk:
            # Employee id is held by another row; the matched row keeps its own
            self.log_info(
                "Directory employee id belongs to another user, keeping current id",
                email=data['email'], employee_id=data['employee_id'], kept=existing.employee_id,
            )
            data['employee_id'] = existing.employee_id
        self.repository.update(existing, **data)
        return False

    def status(self) -> Dict[str, Any]:
        """Directory connection status for the API and settings page"""
        if not ldap.is_ldap_configured():
            return {'configured': False, 'message': ldap.NOT_CONFIGURED_MESSAGE}
        result = ldap.test_connection()
        return {
            'configured': True,
            'connected': result['success'],
            'message': result['message'],
            'user_count': result['user_count'],
        }
