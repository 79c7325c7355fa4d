"""
Management command to create sample data for trying the app out
Creates categories, directory users and assets; every record gets an audit row
"""
from datetime import date, timedelta

from django.core.management.base import BaseCommand
from django.db import transaction

from assets.repositories import AssetRepository
from assets.services import AssetService
from categories.repositories import CategoryRepository
from categories.services import CategoryService
from core.constants import AssetStatus
from directory.repositories import DirectoryUserRepository
from directory.services import DirectoryUserService

CATEGORIES = [
    # (name, parent, icon, color)
    ('Hardware', None, 'cpu', '#3b82f6'),
    ('Laptops', 'Hardware', 'laptop', '#6366f1'),
    ('Monitors', 'Hardware', 'display', '#0ea5e9'),
    ('Phones', 'Hardware', 'phone', '#14b8a6'),
    ('Software Licenses', None, 'key', '#f59e0b'),
    ('Network Equipment', None, 'router', '#ef4444'),
]

DIRECTORY_USERS = [
    ('E1001', 'Alice Johnson', 'alice.johnson@example.com', 'Engineering', 'Senior Developer', 'Berlin'),
    ('E1002', 'Bob Smith', 'bob.smith@example.com', 'Finance', 'Accountant', 'London'),
    ('E1003', 'Carla Diaz', 'carla.diaz@example.com', 'Engineering', 'Engineering Manager', 'Berlin'),
    ('E1004', 'Deepak Rao', 'deepak.rao@example.com', 'IT', 'Systems Administrator', 'Pune'),
    ('E1005', 'Emma Wilson', 'emma.wilson@example.com', 'Sales', 'Account Executive', 'New York'),
]

ASSETS = [
    # (tag, name, category, assignee email, status, manufacturer, model)
    ('IT-0001', 'Developer laptop', 'Laptops', 'alice.johnson@example.com', AssetStatus.ACTIVE, 'Dell', 'Latitude 7440'),
    ('IT-0002', 'Finance laptop', 'Laptops', 'bob.smith@example.com', AssetStatus.ACTIVE, 'Lenovo', 'ThinkPad T14'),
    ('IT-0003', 'Manager laptop', 'Laptops', 'carla.diaz@example.com', AssetStatus.MAINTENANCE, 'Apple', 'MacBook Pro 14'),
    ('IT-0004', '27" monitor', 'Monitors', 'alice.johnson@example.com', AssetStatus.ACTIVE, 'LG', '27UK850'),
    ('IT-0005', '24" monitor', 'Monitors', None, AssetStatus.INACTIVE, 'Dell', 'P2422H'),
    ('IT-0006', 'Sales phone', 'Phones', 'emma.wilson@example.com', AssetStatus.ACTIVE, 'Apple', 'iPhone 15'),
    ('IT-0007', 'Old phone', 'Phones', None, AssetStatus.RETIRED, 'Samsung', 'Galaxy S10'),
    ('IT-0008', 'Office switch', 'Network Equipment', 'deepak.rao@example.com', AssetStatus.ACTIVE, 'Cisco', 'Catalyst 9200'),
    ('IT-0009', 'IDE license', 'Software Licenses', 'alice.johnson@example.com', AssetStatus.ACTIVE, 'JetBrains', 'All Products Pack'),
    ('IT-0010', 'Spare laptop', 'Laptops', None, AssetStatus.LOST, 'HP', 'EliteBook 840'),
]


class Command(BaseCommand):
    help = 'Create sample categories, directory users and assets (audited as System)'

    @transaction.atomic
    def handle(self, *args, **options):
        categories = self._create_categories()
        users = self._create_directory_users()
        created = self._create_assets(categories, users)

        self.stdout.write(self.style.SUCCESS(
            f'Sample data ready: {len(categories)} categories, {len(users)} users, {created} new assets'
        ))

    def _create_categories(self):
        service = CategoryService()
        existing = {category.name: category for category in CategoryRepository().get_categories()}

        for name, parent_name, icon, color in CATEGORIES:
            if name in existing:
                continue
            existing[name] = service.create({
                'name': name,
                'parent': existing.get(parent_name),
                'icon': icon,
                'color': color,
            })
            self.stdout.write(f'Created category: {name}')
        return existing

    def _create_directory_users(self):
        service = DirectoryUserService()
        repository = DirectoryUserRepository()
        users = {}

        for employee_id, display_name, email, department, title, office in DIRECTORY_USERS:
            user = repository.get_by_email(email)
            if user is None:
                user = service.create({
                    'employee_id': employee_id,
                    'display_name': display_name,
                    'email': email,
                    'department': department,
                    'title': title,
                    'office_location': office,
                })
                self.stdout.write(f'Created user: {display_name}')
            users[email] = user
        return users

    def _create_assets(self, categories, users):
        service = AssetService()
        repository = AssetRepository()
        purchased = date.today() - timedelta(days=400)
        created = 0

        for index, (tag, name, category, assignee, status, manufacturer, model) in enumerate(ASSETS):
            if repository.get_asset_by_tag(tag) is not None:
                continue
            service.create({
                'asset_tag': tag,
                'name': name,
                'category': categories.get(category),
                'assigned_user': users.get(assignee) if assignee else None,
                'status': status,
                'manufacturer': manufacturer,
                'model': model,
                'serial_number': f'SN-{tag.replace("-", "")}-{index:03d}',
                'purchase_date': purchased + timedelta(days=index * 15),
                'warranty_expiry': purchased + timedelta(days=index * 15 + 3 * 365),
                'location': 'HQ',
            })
            created += 1
            self.stdout.write(f'Created asset: {tag} {name}')
        return created
