import uuid

import pytest

from assets.models import Asset
from audit.models import AuditLog
from categories.models import Category
from core.constants import AuditAction, EntityType

pytestmark = pytest.mark.django_db

URL = '/api/categories/'


def detail_url(pk):
    return f'{URL}{pk}/'


def test_list_requires_authentication(api_client):
    response = api_client.get(URL)

    assert response.status_code == 401
    assert 'message' in response.data


def test_list_returns_plain_array(readonly_client, category):
    response = readonly_client.get(URL)

    assert response.status_code == 200
    assert [row['name'] for row in response.data] == ['Laptops']
    assert response.data[0]['parent_id'] is None


def test_create_applies_defaults_and_audits(user_client, regular_user):
    response = user_client.post(URL, {'name': '  Monitors '}, format='json')

    assert response.status_code == 201
    assert response.data['name'] == 'Monitors'
    assert response.data['icon'] == 'folder'
    assert response.data['color'] == '#3b82f6'

    log = AuditLog.objects.get(entity_type=EntityType.CATEGORY, action=AuditAction.CREATE)
    assert log.entity_id == response.data['id']
    assert log.user == regular_user
    assert log.new_data['name'] == 'Monitors'


def test_create_requires_name(user_client):
    response = user_client.post(URL, {'name': '   '}, format='json')

    assert response.status_code == 400
    assert response.data == {'message': 'Name is required'}
    assert not AuditLog.objects.exists()


def test_readonly_cannot_create(readonly_client):
    response = readonly_client.post(URL, {'name': 'Phones'}, format='json')

    assert response.status_code == 403
    assert response.data == {'message': 'Your account has read-only access.'}
    assert not Category.objects.filter(name='Phones').exists()


def test_update_records_only_submitted_changes(user_client, category):
    parent = Category.objects.create(name='Hardware')

    response = user_client.patch(
        detail_url(category.pk),
        {'description': 'Company laptops', 'parent_id': str(parent.pk)},
        format='json',
    )

    assert response.status_code == 200
    assert response.data['parent_id'] == parent.pk

    log = AuditLog.objects.get(action=AuditAction.UPDATE)
    assert log.previous_data['description'] == 'Portable computers'
    assert log.new_data['description'] == 'Company laptops'
    assert {change['field'] for change in log.changes} == {'description', 'parent_id'}


def test_update_rejects_cycle(user_client, category):
    child = Category.objects.create(name='Gaming laptops', parent=category)

    response = user_client.patch(detail_url(category.pk), {'parent_id': str(child.pk)}, format='json')

    assert response.status_code == 400
    assert response.data['message'] == 'A category cannot be its own parent or ancestor'
    category.refresh_from_db()
    assert category.parent is None


def test_delete_keeps_assets_uncategorized(user_client, category, asset):
    response = user_client.delete(detail_url(category.pk))

    assert response.status_code == 204
    assert not Category.objects.filter(pk=category.pk).exists()
    asset.refresh_from_db()
    assert asset.category is None

    log = AuditLog.objects.get(action=AuditAction.DELETE)
    assert log.entity_id == str(category.pk)
    assert log.previous_data['name'] == 'Laptops'


def test_unknown_category_is_404(user_client):
    response = user_client.get(detail_url(uuid.uuid4()))

    assert response.status_code == 404
    assert response.data == {'message': 'Category not found'}


def test_malformed_id_is_404(user_client):
    response = user_client.delete(detail_url('not-a-uuid'))

    assert response.status_code == 404
    assert Asset.objects.count() == 0
