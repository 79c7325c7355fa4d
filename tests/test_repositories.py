import pytest

from assets.repositories import AssetRepository
from audit.repositories import AuditLogRepository
from categories.models import Category
from categories.repositories import CategoryRepository
from core.exceptions import PermissionDeniedError
from directory.repositories import DirectoryUserRepository
from imports.repositories import ImportTemplateRepository

pytestmark = pytest.mark.django_db

MISSING_ID = '00000000-0000-0000-0000-000000000000'


class TestBaseRepository:

    def test_malformed_id_is_not_found(self, category):
        repository = CategoryRepository()

        assert repository.get_category('not-a-uuid') is None
        assert repository.get_category(MISSING_ID) is None
        assert repository.get_category(str(category.pk)) == category

    def test_update_by_id(self, category):
        repository = CategoryRepository()

        updated = repository.update_by_id(category.pk, description='Notebooks')

        assert updated.description == 'Notebooks'
        assert repository.update_by_id(MISSING_ID, description='x') is None

    def test_delete_by_id(self, category):
        repository = CategoryRepository()

        assert repository.delete_by_id(category.pk) is True
        assert repository.delete_by_id(category.pk) is False
        assert not repository.exists(pk=category.pk)

    def test_count_and_exists(self, category):
        repository = CategoryRepository()

        assert repository.exists(name='Laptops')
        assert repository.count() == 1


def test_categories_ordered_by_name(db):
    Category.objects.create(name='Monitors')
    Category.objects.create(name='Cables')

    assert [c.name for c in CategoryRepository().get_categories()] == ['Cables', 'Monitors']


def test_asset_lookup_by_tag(asset):
    repository = AssetRepository()

    assert repository.get_asset_by_tag('IT-0001') == asset
    assert repository.get_asset_by_tag('') is None
    assert repository.get_assets_with_relations().get().category.name == 'Laptops'


def test_directory_user_lookups(directory_user):
    repository = DirectoryUserRepository()

    assert repository.get_by_email('ALICE.JOHNSON@example.com') == directory_user
    assert repository.get_by_email('  ') is None
    assert repository.get_by_employee_id('E1001') == directory_user


def test_audit_repository_is_append_only(db):
    repository = AuditLogRepository()
    log = repository.create_audit_log(entity_type='system', entity_id='import', action='import')

    assert list(repository.get_audit_logs_by_entity('system', 'import')) == [log]
    with pytest.raises(PermissionDeniedError):
        repository.update(log, action='sync')
    with pytest.raises(PermissionDeniedError):
        repository.delete(log)


def test_import_templates_newest_first(regular_user):
    repository = ImportTemplateRepository()
    repository.create_import_template('First', {'Tag': 'asset_tag'})
    repository.create_import_template('Second', {'Tag': 'asset_tag'}, created_by=regular_user)

    assert [t.name for t in repository.get_import_templates()] == ['Second', 'First']
