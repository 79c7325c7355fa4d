"""
Shared fixtures: users per role, authenticated API clients and a small
set of domain records created directly through the ORM (no audit rows).
"""
import pytest
from rest_framework.test import APIClient

from assets.models import Asset
from categories.models import Category
from core.constants import AssetStatus, UserRole
from directory.models import DirectoryUser
from users.models import User

PASSWORD = 'correct-horse-battery'


@pytest.fixture(autouse=True)
def no_ldap(settings):
    """Directory integration is unconfigured unless a test opts in"""
    settings.LDAP = {}


@pytest.fixture
def ldap_settings(settings):
    settings.LDAP = {
        'URL': 'ldap://dc.example.com:389',
        'BASE_DN': 'DC=example,DC=com',
        'BIND_DN': 'CN=svc-assets,OU=Service,DC=example,DC=com',
        'BIND_PASSWORD': 'secret',
        'USER_FILTER': '(objectClass=user)',
        'GROUP_FILTER': '',
        'ADMIN_GROUP_DN': 'CN=IT-Admins,OU=Groups,DC=example,DC=com',
        'USER_GROUP_DN': '',
        'READONLY_GROUP_DN': 'CN=Auditors,OU=Groups,DC=example,DC=com',
    }
    return settings.LDAP


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='admin@example.com', password=PASSWORD,
        first_name='Ada', last_name='Admin', role=UserRole.ADMIN,
    )


@pytest.fixture
def regular_user(db):
    return User.objects.create_user(
        email='user@example.com', password=PASSWORD,
        first_name='Uma', last_name='User', role=UserRole.USER,
    )


@pytest.fixture
def readonly_user(db):
    return User.objects.create_user(
        email='auditor@example.com', password=PASSWORD,
        first_name='Rita', last_name='Reader', role=UserRole.READONLY,
    )


@pytest.fixture
def api_client():
    return APIClient()


def _client_for(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def admin_client(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def user_client(regular_user):
    return _client_for(regular_user)


@pytest.fixture
def readonly_client(readonly_user):
    return _client_for(readonly_user)


@pytest.fixture
def category(db):
    return Category.objects.create(name='Laptops', description='Portable computers')


@pytest.fixture
def directory_user(db):
    return DirectoryUser.objects.create(
        employee_id='E1001',
        display_name='Alice Johnson',
        email='alice.johnson@example.com',
        department='Engineering',
    )


@pytest.fixture
def asset(category, directory_user):
    return Asset.objects.create(
        asset_tag='IT-0001',
        name='Developer laptop',
        category=category,
        assigned_user=directory_user,
        status=AssetStatus.ACTIVE,
        manufacturer='Dell',
        serial_number='SN-12345',
    )
