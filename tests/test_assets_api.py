import uuid

import pytest

from assets.models import Asset
from audit.models import AuditLog
from core.constants import AuditAction, EntityType

pytestmark = pytest.mark.django_db

URL = '/api/assets/'


def detail_url(pk):
    return f'{URL}{pk}/'


class TestList:

    def test_nested_category_and_user(self, readonly_client, asset):
        response = readonly_client.get(URL)

        assert response.status_code == 200
        row = response.data[0]
        assert row['asset_tag'] == 'IT-0001'
        assert row['category']['name'] == 'Laptops'
        assert row['assigned_user']['display_name'] == 'Alice Johnson'
        assert row['category_id'] == asset.category_id

    def test_search_matches_serial_number(self, user_client, asset):
        Asset.objects.create(asset_tag='IT-0002', name='Monitor')

        response = user_client.get(URL, {'search': 'sn-123'})

        assert [row['asset_tag'] for row in response.data] == ['IT-0001']

    def test_status_filter(self, user_client, asset):
        Asset.objects.create(asset_tag='IT-0002', name='Old phone', status='retired')

        response = user_client.get(URL, {'status': 'retired'})
        assert [row['asset_tag'] for row in response.data] == ['IT-0002']

        response = user_client.get(URL, {'status': 'bogus'})
        assert response.data == []

    def test_category_filter(self, user_client, asset):
        Asset.objects.create(asset_tag='IT-0002', name='Loose cable')

        response = user_client.get(URL, {'category': str(asset.category_id)})
        assert [row['asset_tag'] for row in response.data] == ['IT-0001']

        response = user_client.get(URL, {'category': 'not-a-uuid'})
        assert response.data == []


class TestCreate:

    def test_minimal_asset_defaults_to_active(self, user_client, regular_user):
        response = user_client.post(URL, {'asset_tag': 'IT-0100', 'name': 'Docking station'}, format='json')

        assert response.status_code == 201
        assert response.data['status'] == 'active'
        assert response.data['category'] is None
        assert response.data['custom_fields'] == {}

        log = AuditLog.objects.get(entity_type=EntityType.ASSET, action=AuditAction.CREATE)
        assert log.entity_id == response.data['id']
        assert log.user_name == 'Uma User'
        assert log.new_data['asset_tag'] == 'IT-0100'

    def test_full_asset(self, user_client, category, directory_user):
        payload = {
            'asset_tag': 'IT-0101',
            'name': 'Laptop',
            'category_id': str(category.pk),
            'assigned_user_id': str(directory_user.pk),
            'status': 'maintenance',
            'purchase_date': '2024-02-29',
            'purchase_cost': '1,299.00 USD',
            'custom_fields': {'cpu': 'i7', 'ram_gb': 32},
        }

        response = user_client.post(URL, payload, format='json')

        assert response.status_code == 201
        assert response.data['category']['id'] == str(category.pk)
        assert response.data['assigned_user']['email'] == 'alice.johnson@example.com'
        assert response.data['purchase_date'] == '2024-02-29'
        assert response.data['purchase_cost'] == '1,299.00 USD'
        assert response.data['custom_fields'] == {'cpu': 'i7', 'ram_gb': '32'}

    def test_duplicate_tag(self, user_client, asset):
        response = user_client.post(URL, {'asset_tag': 'IT-0001', 'name': 'Copy'}, format='json')

        assert response.status_code == 400
        assert response.data == {'message': 'Asset tag already exists'}
        assert Asset.objects.count() == 1
        assert not AuditLog.objects.exists()

    def test_invalid_status(self, user_client):
        response = user_client.post(URL, {'asset_tag': 'IT-0102', 'name': 'X', 'status': 'borrowed'}, format='json')

        assert response.status_code == 400
        assert response.data['message'].startswith("Invalid status 'borrowed'")

    def test_missing_name(self, user_client):
        response = user_client.post(URL, {'asset_tag': 'IT-0103'}, format='json')

        assert response.status_code == 400
        assert 'name' in response.data['message'].lower()

    def test_readonly_forbidden(self, readonly_client):
        response = readonly_client.post(URL, {'asset_tag': 'IT-0104', 'name': 'X'}, format='json')

        assert response.status_code == 403
        assert not Asset.objects.exists()


class TestUpdate:

    def test_patch_diff_covers_submitted_fields(self, user_client, asset):
        response = user_client.patch(
            detail_url(asset.pk),
            {'status': 'maintenance', 'location': 'Repair shop', 'name': 'Developer laptop'},
            format='json',
        )

        assert response.status_code == 200
        assert response.data['status'] == 'maintenance'

        log = AuditLog.objects.get(action=AuditAction.UPDATE)
        assert log.entity_id == str(asset.pk)
        assert log.previous_data['status'] == 'active'
        assert log.new_data['location'] == 'Repair shop'
        assert log.changes == [
            {'field': 'status', 'old_value': 'active', 'new_value': 'maintenance'},
            {'field': 'location', 'old_value': None, 'new_value': 'Repair shop'},
        ]

    def test_unassign_user(self, user_client, asset):
        response = user_client.patch(detail_url(asset.pk), {'assigned_user_id': None}, format='json')

        assert response.status_code == 200
        assert response.data['assigned_user'] is None
        log = AuditLog.objects.get(action=AuditAction.UPDATE)
        assert log.changes[0]['field'] == 'assigned_user_id'
        assert log.changes[0]['new_value'] is None

    def test_tag_taken_by_other_asset(self, user_client, asset):
        other = Asset.objects.create(asset_tag='IT-0002', name='Monitor')

        response = user_client.patch(detail_url(other.pk), {'asset_tag': 'IT-0001'}, format='json')

        assert response.status_code == 400
        assert response.data == {'message': 'Asset tag already exists'}

    def test_keeping_own_tag_is_fine(self, user_client, asset):
        response = user_client.patch(detail_url(asset.pk), {'asset_tag': 'IT-0001'}, format='json')
        assert response.status_code == 200

    def test_unknown_asset(self, user_client):
        response = user_client.patch(detail_url(uuid.uuid4()), {'name': 'X'}, format='json')

        assert response.status_code == 404
        assert response.data == {'message': 'Asset not found'}


class TestDeleteAndHistory:

    def test_delete_audits_previous_snapshot(self, user_client, asset):
        response = user_client.delete(detail_url(asset.pk))

        assert response.status_code == 204
        assert not Asset.objects.exists()
        log = AuditLog.objects.get(action=AuditAction.DELETE)
        assert log.previous_data['asset_tag'] == 'IT-0001'
        assert log.new_data is None

    def test_history_lists_asset_audit_rows(self, user_client, asset):
        user_client.patch(detail_url(asset.pk), {'status': 'maintenance'}, format='json')
        user_client.patch(detail_url(asset.pk), {'status': 'active'}, format='json')

        response = user_client.get(f'{detail_url(asset.pk)}history/')

        assert response.status_code == 200
        assert len(response.data) == 2
        assert all(row['entity_id'] == str(asset.pk) for row in response.data)
        assert {row['changes'][0]['new_value'] for row in response.data} == {'active', 'maintenance'}
