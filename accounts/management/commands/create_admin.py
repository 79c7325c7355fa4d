import os

from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model

from core.constants import UserRole
from core.validators import PasswordValidator
from core.exceptions import ValidationError as AppValidationError


class Command(BaseCommand):
    help = 'Create admin superuser if not exists'

    def add_arguments(self, parser):
        parser.add_argument('--email', default=os.environ.get('ADMIN_EMAIL', 'admin@example.com'))
        parser.add_argument('--password', default=os.environ.get('ADMIN_PASSWORD'))

    def handle(self, *args, **options):
        User = get_user_model()
        email = options['email'].lower()
        password = options['password']

        if User.objects.filter(role=UserRole.ADMIN).exists() or User.objects.filter(is_admin=True).exists():
            self.stdout.write(self.style.WARNING('Admin user already exists'))
            return

        if not password:
            raise CommandError('Set a password with --password or ADMIN_PASSWORD')
        try:
            PasswordValidator.validate_password(password)
        except AppValidationError as e:
            raise CommandError(e.message) from e

        User.objects.create_superuser(email=email, password=password, first_name='Admin')
        self.stdout.write(self.style.SUCCESS(f'Superuser created: {email}'))
