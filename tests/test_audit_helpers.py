import datetime
import uuid

import pytest
from django.test import RequestFactory

from audit.helpers import (
    compute_changes, get_actor_name, get_client_ip, get_user_agent, log_action, to_snapshot,
)
from audit.models import AuditLog
from core.constants import AuditAction, EntityType


class TestComputeChanges:

    def test_reports_changed_keys_in_new_order(self):
        old = {'name': 'Laptop', 'status': 'active', 'location': 'HQ'}
        new = {'status': 'maintenance', 'name': 'Laptop 2'}

        assert compute_changes(old, new) == [
            {'field': 'status', 'old_value': 'active', 'new_value': 'maintenance'},
            {'field': 'name', 'old_value': 'Laptop', 'new_value': 'Laptop 2'},
        ]

    def test_unchanged_values_produce_nothing(self):
        assert compute_changes({'a': 1, 'b': None}, {'a': 1, 'b': None}) == []

    def test_keys_only_in_old_are_ignored(self):
        assert compute_changes({'a': 1, 'gone': 'x'}, {'a': 1}) == []

    def test_new_key_compares_against_none(self):
        assert compute_changes({}, {'notes': 'hi'}) == [
            {'field': 'notes', 'old_value': None, 'new_value': 'hi'},
        ]

    def test_missing_snapshots(self):
        assert compute_changes(None, None) == []
        assert compute_changes(None, {'a': 1}) == [{'field': 'a', 'old_value': None, 'new_value': 1}]


def test_to_snapshot_makes_values_json_safe():
    pk = uuid.uuid4()
    snapshot = to_snapshot({'id': pk, 'purchase_date': datetime.date(2024, 1, 31)})

    assert snapshot == {'id': str(pk), 'purchase_date': '2024-01-31'}
    assert to_snapshot(None) is None


class TestRequestInfo:

    def test_client_ip_prefers_first_forwarded_hop(self):
        request = RequestFactory().get('/', HTTP_X_FORWARDED_FOR='203.0.113.7, 10.0.0.1', REMOTE_ADDR='10.0.0.2')
        assert get_client_ip(request) == '203.0.113.7'

    def test_client_ip_falls_back_to_remote_addr(self):
        request = RequestFactory().get('/', REMOTE_ADDR='192.0.2.10')
        assert get_client_ip(request) == '192.0.2.10'

    def test_client_ip_unknown(self):
        request = RequestFactory().get('/')
        request.META.pop('REMOTE_ADDR', None)
        assert get_client_ip(request) == 'unknown'

    def test_user_agent_is_truncated(self):
        request = RequestFactory().get('/', HTTP_USER_AGENT='x' * 900)
        assert len(get_user_agent(request)) == 500

    def test_user_agent_unknown(self):
        assert get_user_agent(RequestFactory().get('/')) == 'unknown'


@pytest.mark.django_db
class TestActorName:

    def test_full_name(self, admin_user):
        assert get_actor_name(admin_user) == 'Ada Admin'

    def test_email_when_no_name(self, admin_user):
        admin_user.first_name = ''
        admin_user.last_name = ''
        assert get_actor_name(admin_user) == 'admin@example.com'

    def test_system_without_user(self):
        assert get_actor_name(None) == 'System'


@pytest.mark.django_db
class TestLogAction:

    def test_writes_row_with_actor_and_client_info(self, regular_user):
        request = RequestFactory().post('/', REMOTE_ADDR='192.0.2.1', HTTP_USER_AGENT='pytest')
        request.user = regular_user
        entity_id = uuid.uuid4()

        log = log_action(
            request, EntityType.ASSET, entity_id, AuditAction.CREATE,
            new_data={'asset_tag': 'IT-1', 'purchase_date': datetime.date(2024, 5, 1)},
        )

        log.refresh_from_db()
        assert log.entity_id == str(entity_id)
        assert log.user == regular_user
        assert log.user_name == 'Uma User'
        assert log.ip_address == '192.0.2.1'
        assert log.user_agent == 'pytest'
        assert log.new_data == {'asset_tag': 'IT-1', 'purchase_date': '2024-05-01'}
        assert log.previous_data is None

    def test_system_action_without_request(self):
        log = log_action(None, EntityType.SYSTEM, 'import', AuditAction.IMPORT, new_data={'total_rows': 0})

        assert log.user is None
        assert log.user_name == 'System'
        assert log.ip_address == 'unknown'
        assert log.user_agent == 'unknown'
        assert AuditLog.objects.count() == 1
