import pytest

from assets.models import Asset
from audit.models import AuditLog
from core.constants import AuditAction, EntityType
from directory.models import DirectoryUser

pytestmark = pytest.mark.django_db

URL = '/api/ad-users/'


def detail_url(pk):
    return f'{URL}{pk}/'


def test_search_matches_department(user_client, directory_user):
    DirectoryUser.objects.create(display_name='Bob Smith', email='bob@example.com', department='Finance')

    response = user_client.get(URL, {'search': 'engin'})

    assert response.status_code == 200
    assert [row['display_name'] for row in response.data] == ['Alice Johnson']


def test_create_blank_optional_fields_become_null(user_client):
    response = user_client.post(URL, {
        'display_name': 'Carla Diaz',
        'email': 'Carla.Diaz@Example.com',
        'employee_id': '',
        'phone': '  ',
    }, format='json')

    assert response.status_code == 201
    assert response.data['email'] == 'carla.diaz@example.com'
    assert response.data['employee_id'] is None
    assert response.data['phone'] is None
    assert response.data['is_active'] is True

    log = AuditLog.objects.get(entity_type=EntityType.USER, action=AuditAction.CREATE)
    assert log.new_data['display_name'] == 'Carla Diaz'


def test_two_users_without_employee_id(user_client):
    for name in ('No Id One', 'No Id Two'):
        response = user_client.post(URL, {'display_name': name, 'employee_id': ''}, format='json')
        assert response.status_code == 201

    assert DirectoryUser.objects.filter(employee_id__isnull=True).count() == 2


def test_duplicate_email(user_client, directory_user):
    response = user_client.post(URL, {
        'display_name': 'Alice Clone',
        'email': 'ALICE.JOHNSON@example.com',
    }, format='json')

    assert response.status_code == 400
    assert response.data == {'message': 'Email already exists'}


def test_duplicate_employee_id(user_client, directory_user):
    response = user_client.post(URL, {'display_name': 'Other', 'employee_id': 'E1001'}, format='json')

    assert response.status_code == 400
    assert response.data == {'message': 'Employee ID already exists'}


def test_display_name_required(user_client):
    response = user_client.post(URL, {'display_name': ' ', 'email': 'x@example.com'}, format='json')

    assert response.status_code == 400
    assert response.data == {'message': 'Display name is required'}


def test_update_title(user_client, directory_user):
    response = user_client.patch(detail_url(directory_user.pk), {'title': 'Staff Engineer'}, format='json')

    assert response.status_code == 200
    log = AuditLog.objects.get(action=AuditAction.UPDATE)
    assert log.changes == [{'field': 'title', 'old_value': None, 'new_value': 'Staff Engineer'}]


def test_delete_unassigns_assets(user_client, asset, directory_user):
    response = user_client.delete(detail_url(directory_user.pk))

    assert response.status_code == 204
    asset.refresh_from_db()
    assert asset.assigned_user is None
    assert Asset.objects.count() == 1
    assert AuditLog.objects.filter(entity_type=EntityType.USER, action=AuditAction.DELETE).count() == 1


def test_readonly_cannot_delete(readonly_client, directory_user):
    response = readonly_client.delete(detail_url(directory_user.pk))

    assert response.status_code == 403
    assert DirectoryUser.objects.filter(pk=directory_user.pk).exists()


def test_unknown_user_404(user_client):
    response = user_client.get(detail_url('00000000-0000-0000-0000-000000000000'))

    assert response.status_code == 404
    assert response.data == {'message': 'User not found'}
