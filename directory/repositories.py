"""
Directory user repository - Data access layer for directory users.
"""
from typing import Optional
from django.db.models import QuerySet, Q
from core.repositories import BaseRepository
from .models import DirectoryUser


class DirectoryUserRepository(BaseRepository[DirectoryUser]):
    """Repository for DirectoryUser model"""

    def __init__(self):
        super().__init__(DirectoryUser)

    def get_directory_users(self) -> QuerySet[DirectoryUser]:
        """All directory users ordered by display name"""
        return self.get_queryset().order_by('display_name')

    def get_directory_user(self, user_id) -> Optional[DirectoryUser]:
        return self.get_by_id(user_id)

    def get_by_email(self, email) -> Optional[DirectoryUser]:
        """Case-insensitive email lookup, None for blank email"""
        email = (email or '').strip()
        if not email:
            return None
        return self.get_queryset().filter(email__iexact=email).first()

    def get_by_employee_id(self, employee_id) -> Optional[DirectoryUser]:
        employee_id = (employee_id or '').strip()
        if not employee_id:
            return None
        return self.get_queryset().filter(employee_id=employee_id).first()

    def search(self, term: str) -> QuerySet[DirectoryUser]:
        """Match display name, email or department"""
        return self.get_directory_users().filter(
            Q(display_name__icontains=term) |
            Q(email__icontains=term) |
            Q(department__icontains=term)
        )

    def count_active(self) -> int:
        return self.count(is_active=True)
