"""
Management command to sync directory users from Active Directory
"""
from django.core.management.base import BaseCommand, CommandError

from core.exceptions import DirectoryError
from directory.services import DirectorySyncService


class Command(BaseCommand):
    help = 'Sync directory users from Active Directory (simulated when LDAP is not configured)'

    def handle(self, *args, **options):
        try:
            result = DirectorySyncService().sync()
        except DirectoryError as e:
            raise CommandError(f"Failed to sync AD: {e.message}") from e

        self.stdout.write(self.style.SUCCESS(result.message))
        self.stdout.write(
            f"Synced: {result.synced}, created: {result.created}, "
            f"updated: {result.updated}, skipped: {result.skipped}"
        )
