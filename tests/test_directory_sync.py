from unittest import mock

import pytest
from django.db import IntegrityError

from audit.models import AuditLog
from core.constants import AuditAction, EntityType, SystemEntity, UserRole
from core.dto import DirectoryEntryDTO
from core.exceptions import DirectoryError
from directory import ldap
from directory.backends import DirectoryBackend
from directory.models import DirectoryUser
from directory.repositories import DirectoryUserRepository
from directory.services import DirectorySyncService
from users.models import User

SYNC_URL = '/api/ad-users/sync/'
STATUS_URL = '/api/ldap/status/'


def entry(**overrides):
    values = {
        'dn': 'CN=Alice Johnson,OU=Staff,DC=example,DC=com',
        'employee_id': 'E1001',
        'display_name': 'Alice Johnson',
        'email': 'Alice.Johnson@example.com',
        'sam_account_name': 'ajohnson',
        'department': 'Engineering',
        'title': 'Principal Engineer',
        'office_location': '',
    }
    values.update(overrides)
    return DirectoryEntryDTO(**values)


class TestLdapConfig:

    def test_unconfigured_by_default(self):
        assert ldap.get_ldap_config() is None
        assert ldap.is_ldap_configured() is False

    def test_partial_settings_are_not_configured(self, settings, ldap_settings):
        settings.LDAP = {**ldap_settings, 'BIND_PASSWORD': ''}
        assert ldap.is_ldap_configured() is False

    def test_configured(self, ldap_settings):
        config = ldap.get_ldap_config()

        assert config['url'] == 'ldap://dc.example.com:389'
        assert config['group_filter'] == '(objectClass=group)'
        assert config['user_group_dn'] is None

    def test_test_connection_unconfigured(self):
        result = ldap.test_connection()

        assert result == {'success': False, 'message': ldap.NOT_CONFIGURED_MESSAGE, 'user_count': None}

    def test_test_connection_counts_users(self, ldap_settings):
        with mock.patch.object(ldap, 'sync_all_users', return_value=[entry(), entry(email='b@example.com')]):
            result = ldap.test_connection()

        assert result['success'] is True
        assert result['user_count'] == 2

    def test_test_connection_reports_failure(self, ldap_settings):
        with mock.patch.object(ldap, 'sync_all_users', side_effect=DirectoryError(message="Service account bind failed")):
            result = ldap.test_connection()

        assert result['success'] is False
        assert result['message'] == 'Failed to connect to LDAP: Service account bind failed'


class TestUserRole:

    def test_admin_group_wins(self, ldap_settings):
        user = entry(member_of=[
            'CN=Auditors,OU=Groups,DC=example,DC=com',
            'cn=it-admins,ou=groups,dc=example,dc=com',
        ])
        assert ldap.get_user_role(user, ldap.get_ldap_config()) == UserRole.ADMIN

    def test_readonly_group(self, ldap_settings):
        user = entry(member_of=['CN=Auditors,OU=Groups,DC=example,DC=com'])
        assert ldap.get_user_role(user, ldap.get_ldap_config()) == UserRole.READONLY

    def test_default_user(self, ldap_settings):
        assert ldap.get_user_role(entry(member_of=[]), ldap.get_ldap_config()) == UserRole.USER


class TestSyncAllUsers:

    def test_filters_entries_without_identity(self, ldap_settings):
        conn = mock.Mock()
        results = [
            ('CN=A,DC=example,DC=com', {'displayName': 'Alice', 'mail': 'alice@example.com'}),
            ('CN=B,DC=example,DC=com', {'displayName': 'Bob', 'sAMAccountName': ['bob']}),
            ('CN=C,DC=example,DC=com', {'displayName': '', 'mail': 'nameless@example.com'}),
            ('CN=D,DC=example,DC=com', {'displayName': 'Dora'}),
        ]
        with mock.patch.object(ldap, '_service_connection', return_value=conn), \
                mock.patch.object(ldap, '_search_entries', return_value=iter(results)) as search:
            users = ldap.sync_all_users()

        assert [user.display_name for user in users] == ['Alice', 'Bob']
        assert users[1].sam_account_name == 'bob'
        search_filter = search.call_args[0][2]
        assert search_filter.startswith('(&(objectClass=user)(!(userAccountControl')
        conn.unbind.assert_called_once()

    def test_requires_configuration(self):
        with pytest.raises(DirectoryError):
            ldap.sync_all_users()


@pytest.mark.django_db
class TestSyncApi:

    def test_simulated_when_unconfigured(self, admin_client, admin_user):
        response = admin_client.post(SYNC_URL)

        assert response.status_code == 200
        assert response.data['success'] is True
        assert response.data['synced'] == 0
        assert 'simulated' in response.data['message']

        log = AuditLog.objects.get(entity_type=EntityType.SYSTEM, action=AuditAction.SYNC)
        assert log.entity_id == SystemEntity.DIRECTORY_SYNC
        assert log.new_data['simulated'] is True
        assert log.user == admin_user

    def test_regular_user_forbidden(self, user_client):
        response = user_client.post(SYNC_URL)

        assert response.status_code == 403
        assert not AuditLog.objects.exists()

    def test_is_admin_flag_allows_sync(self, user_client, regular_user):
        regular_user.is_admin = True
        regular_user.save()

        assert user_client.post(SYNC_URL).status_code == 200

    def test_upserts_by_email(self, admin_client, ldap_settings, directory_user):
        entries = [
            entry(email='ALICE.JOHNSON@example.com', title='Principal Engineer'),
            entry(employee_id='', sam_account_name='bsmith', display_name='Bob Smith',
                  email='bob.smith@example.com', department='Finance', title=''),
        ]
        with mock.patch.object(ldap, 'sync_all_users', return_value=entries):
            response = admin_client.post(SYNC_URL)

        assert response.status_code == 200
        assert response.data == {
            'success': True,
            'message': 'AD sync completed. 1 users created, 1 users updated.',
            'synced': 2,
            'created': 1,
            'updated': 1,
            'skipped': 0,
        }

        directory_user.refresh_from_db()
        assert directory_user.title == 'Principal Engineer'
        assert directory_user.last_sync_at is not None

        bob = DirectoryUser.objects.get(email='bob.smith@example.com')
        assert bob.employee_id == 'bsmith'
        assert bob.title is None
        assert bob.office_location is None

        log = AuditLog.objects.get(action=AuditAction.SYNC)
        assert log.new_data == {
            'action': 'AD Sync completed',
            'total_users': 2,
            'created': 1,
            'updated': 1,
            'skipped': 0,
        }

    def test_matches_by_employee_id_when_email_changes(self, ldap_settings, directory_user):
        with mock.patch.object(ldap, 'sync_all_users', return_value=[entry(email='alice@new.example.com')]):
            result = DirectorySyncService().sync()

        assert (result.created, result.updated) == (0, 1)
        directory_user.refresh_from_db()
        assert directory_user.email == 'alice@new.example.com'

    def test_employee_id_held_by_another_user_is_kept(self, admin_client, ldap_settings):
        alice = DirectoryUser.objects.create(display_name='Alice', email='a@example.com', employee_id='E1')
        bob = DirectoryUser.objects.create(display_name='Bob', email='b@example.com', employee_id='E2')

        with mock.patch.object(ldap, 'sync_all_users', return_value=[
            entry(email='a@example.com', employee_id='E2', display_name='Alice Moved'),
        ]):
            response = admin_client.post(SYNC_URL)

        assert response.status_code == 200
        assert (response.data['created'], response.data['updated'], response.data['skipped']) == (0, 1, 0)
        alice.refresh_from_db()
        bob.refresh_from_db()
        assert (alice.display_name, alice.employee_id) == ('Alice Moved', 'E1')
        assert bob.employee_id == 'E2'

    def test_rejected_entry_is_skipped_and_sync_continues(self, ldap_settings, directory_user):
        entries = [
            entry(employee_id='E2001', email='carol@example.com', display_name='Carol'),
            entry(employee_id='E2002', email='dave@example.com', display_name='Dave'),
        ]
        real_create = DirectoryUserRepository.create

        def create(repository, **data):
            if data['email'] == 'carol@example.com':
                raise IntegrityError('UNIQUE constraint failed: directory_directoryuser.employee_id')
            return real_create(repository, **data)

        with mock.patch.object(ldap, 'sync_all_users', return_value=entries), \
                mock.patch.object(DirectoryUserRepository, 'create', create):
            result = DirectorySyncService().sync()

        assert (result.created, result.updated, result.skipped) == (1, 0, 1)
        assert result.message == 'AD sync completed. 1 users created, 0 users updated. 1 users skipped.'
        assert DirectoryUser.objects.filter(email='dave@example.com').exists()
        assert not DirectoryUser.objects.filter(email='carol@example.com').exists()

        log = AuditLog.objects.get(action=AuditAction.SYNC)
        assert log.new_data['skipped'] == 1

    def test_reactivates_users(self, ldap_settings, directory_user):
        directory_user.is_active = False
        directory_user.save()

        with mock.patch.object(ldap, 'sync_all_users', return_value=[entry()]):
            DirectorySyncService().sync()

        directory_user.refresh_from_db()
        assert directory_user.is_active is True

    def test_directory_error_is_500(self, admin_client, ldap_settings):
        error = DirectoryError(message="Service account bind failed")
        with mock.patch.object(ldap, 'sync_all_users', side_effect=error):
            response = admin_client.post(SYNC_URL)

        assert response.status_code == 500
        assert response.data == {'message': 'Failed to sync AD: Service account bind failed'}
        assert not AuditLog.objects.exists()


@pytest.mark.django_db
class TestStatusApi:

    def test_unconfigured(self, user_client):
        response = user_client.get(STATUS_URL)

        assert response.status_code == 200
        assert response.data == {'configured': False, 'message': ldap.NOT_CONFIGURED_MESSAGE}

    def test_configured(self, readonly_client, ldap_settings):
        result = {'success': True, 'message': 'Connected', 'user_count': 12}
        with mock.patch.object(ldap, 'test_connection', return_value=result):
            response = readonly_client.get(STATUS_URL)

        assert response.data == {'configured': True, 'connected': True, 'message': 'Connected', 'user_count': 12}


@pytest.mark.django_db
class TestDirectoryBackend:

    def test_ignored_when_unconfigured(self):
        assert DirectoryBackend().authenticate(None, username='alice', password='pw') is None

    def test_creates_local_account_with_group_role(self, ldap_settings):
        directory_entry = entry(member_of=['CN=Auditors,OU=Groups,DC=example,DC=com'])
        with mock.patch.object(ldap, 'authenticate_user', return_value=directory_entry):
            user = DirectoryBackend().authenticate(None, username='ajohnson', password='pw')

        assert user.email == 'alice.johnson@example.com'
        assert user.role == UserRole.READONLY
        assert user.first_name == 'Alice'
        assert not user.has_usable_password()

    def test_admin_group_sets_admin_flag(self, ldap_settings, regular_user):
        directory_entry = entry(email='user@example.com', member_of=['CN=IT-Admins,OU=Groups,DC=example,DC=com'])
        with mock.patch.object(ldap, 'authenticate_user', return_value=directory_entry):
            user = DirectoryBackend().authenticate(None, username='user@example.com', password='pw')

        assert user.pk == regular_user.pk
        assert user.role == UserRole.ADMIN
        assert User.objects.get(pk=regular_user.pk).is_admin is True

    def test_rejected_credentials(self, ldap_settings):
        with mock.patch.object(ldap, 'authenticate_user', return_value=None):
            assert DirectoryBackend().authenticate(None, username='alice', password='bad') is None
