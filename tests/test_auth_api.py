import pytest
from rest_framework.test import APIClient

from audit.models import AuditLog
from core.constants import AuditAction, EntityType, UserRole
from users.models import User

from .conftest import PASSWORD

pytestmark = pytest.mark.django_db


class TestRegister:

    def test_creates_user_and_session(self, api_client):
        response = api_client.post('/api/auth/register/', {
            'email': 'New.Person@example.com',
            'password': 'long-enough',
            'first_name': 'New',
        }, format='json')

        assert response.status_code == 201
        assert response.data['email'] == 'new.person@example.com'
        assert response.data['role'] == UserRole.USER
        assert 'password' not in response.data

        me = api_client.get('/api/auth/user/')
        assert me.status_code == 200
        assert me.data['email'] == 'new.person@example.com'

    def test_email_taken(self, api_client, regular_user):
        response = api_client.post('/api/auth/register/', {
            'email': 'USER@example.com',
            'password': 'long-enough',
            'first_name': 'Again',
        }, format='json')

        assert response.status_code == 400
        assert response.data == {'message': 'Email already registered'}

    def test_short_password(self, api_client):
        response = api_client.post('/api/auth/register/', {
            'email': 'short@example.com',
            'password': 'short',
            'first_name': 'Short',
        }, format='json')

        assert response.status_code == 400
        assert 'at least 8 characters' in response.data['message']
        assert not User.objects.filter(email='short@example.com').exists()


class TestLogin:

    def test_success_starts_session_and_audits(self, regular_user):
        client = APIClient()

        response = client.post('/api/auth/login/', {'email': 'User@Example.com', 'password': PASSWORD}, format='json')

        assert response.status_code == 200
        assert response.data['id'] == regular_user.pk
        assert response.data['can_write'] is True
        assert client.get('/api/auth/user/').status_code == 200

        log = AuditLog.objects.get(action=AuditAction.LOGIN)
        assert log.entity_type == EntityType.USER
        assert log.entity_id == str(regular_user.pk)
        assert log.user == regular_user

    def test_wrong_password(self, api_client, regular_user):
        response = api_client.post('/api/auth/login/', {'email': 'user@example.com', 'password': 'nope'}, format='json')

        assert response.status_code == 401
        assert response.data == {'message': 'Invalid email or password'}
        assert not AuditLog.objects.exists()

    def test_unknown_email(self, api_client):
        response = api_client.post('/api/auth/login/', {'email': 'ghost@example.com', 'password': PASSWORD}, format='json')

        assert response.status_code == 401
        assert response.data == {'message': 'Invalid email or password'}

    def test_disabled_account(self, api_client, regular_user):
        regular_user.is_active = False
        regular_user.save()

        response = api_client.post('/api/auth/login/', {'email': 'user@example.com', 'password': PASSWORD}, format='json')

        assert response.status_code == 401
        assert response.data == {'message': 'Account is disabled'}

    def test_malformed_body(self, api_client):
        response = api_client.post('/api/auth/login/', {'email': 'user@example.com'}, format='json')

        assert response.status_code == 400
        assert response.data['message'].startswith('password')


def test_logout_ends_session_and_audits(regular_user):
    client = APIClient()
    client.post('/api/auth/login/', {'email': 'user@example.com', 'password': PASSWORD}, format='json')

    response = client.post('/api/auth/logout/')

    assert response.status_code == 200
    assert response.data == {'success': True}
    assert client.get('/api/auth/user/').status_code == 401
    assert AuditLog.objects.filter(action=AuditAction.LOGOUT, user=regular_user).count() == 1


def test_current_user_requires_login(api_client):
    response = api_client.get('/api/auth/user/')

    assert response.status_code == 401
    assert 'message' in response.data


def test_jwt_token_pair(api_client, regular_user):
    response = api_client.post('/api/auth/token/', {'email': 'user@example.com', 'password': PASSWORD}, format='json')

    assert response.status_code == 200
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
    assert client.get('/api/auth/user/').data['email'] == 'user@example.com'
