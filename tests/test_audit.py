import pytest
from django.core.exceptions import PermissionDenied

from audit.helpers import log_action
from audit.models import AuditLog
from audit.repositories import AuditLogRepository
from core.constants import AuditAction, EntityType
from core.exceptions import PermissionDeniedError

pytestmark = pytest.mark.django_db

URL = '/api/audit-logs/'


@pytest.fixture
def logs(regular_user, admin_user):
    log_action(None, EntityType.ASSET, 'a-1', AuditAction.CREATE, new_data={'asset_tag': 'IT-1'}, user=regular_user)
    log_action(None, EntityType.CATEGORY, 'c-1', AuditAction.UPDATE, changes=[], user=admin_user)
    log_action(None, EntityType.SYSTEM, 'import', AuditAction.IMPORT, new_data={'total_rows': 3})
    return AuditLog.objects.all()


class TestImmutability:

    def test_existing_row_cannot_be_saved(self, logs):
        log = logs.first()
        log.user_name = 'Someone else'

        with pytest.raises(PermissionDenied):
            log.save()

    def test_row_cannot_be_deleted(self, logs):
        with pytest.raises(PermissionDenied):
            logs.first().delete()
        assert AuditLog.objects.count() == 3

    def test_repository_refuses_changes(self, logs):
        repository = AuditLogRepository()
        with pytest.raises(PermissionDeniedError) as excinfo:
            repository.update(logs.first(), user_name='x')
        assert excinfo.value.code == 'AUDIT_IMMUTABLE'
        with pytest.raises(PermissionDeniedError):
            repository.delete(logs.first())


class TestApi:

    def test_newest_first(self, readonly_client, logs):
        response = readonly_client.get(URL)

        assert response.status_code == 200
        assert len(response.data) == 3
        timestamps = [row['created_at'] for row in response.data]
        assert timestamps == sorted(timestamps, reverse=True)

    def test_limit(self, user_client, logs):
        response = user_client.get(URL, {'limit': 2})
        assert len(response.data) == 2

    def test_invalid_limit_is_ignored(self, user_client, logs):
        response = user_client.get(URL, {'limit': 'lots'})
        assert len(response.data) == 3

    def test_filters(self, user_client, logs):
        response = user_client.get(URL, {'entity_type': 'asset'})
        assert [row['entity_id'] for row in response.data] == ['a-1']

        response = user_client.get(URL, {'action': 'import'})
        assert [row['user_display'] for row in response.data] == ['System']

    def test_search_by_user_name(self, user_client, logs):
        response = user_client.get(URL, {'search': 'ada'})
        assert [row['entity_id'] for row in response.data] == ['c-1']

    def test_retrieve(self, user_client, logs):
        log = AuditLog.objects.get(entity_id='a-1')

        response = user_client.get(f'{URL}{log.pk}/')

        assert response.status_code == 200
        assert response.data['new_data'] == {'asset_tag': 'IT-1'}
        assert response.data['user_name'] == 'Uma User'

    def test_read_only(self, admin_client, logs):
        log = AuditLog.objects.first()

        assert admin_client.post(URL, {'entity_type': 'asset'}, format='json').status_code == 405
        assert admin_client.delete(f'{URL}{log.pk}/').status_code == 405

    def test_requires_login(self, api_client):
        assert api_client.get(URL).status_code == 401
