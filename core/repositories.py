"""
Repository pattern implementation.
Each app's repository wraps one model; services never touch the ORM manager directly.
"""
from typing import Generic, TypeVar, Optional
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import QuerySet, Model
import logging

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Model)


class BaseRepository(Generic[T]):
    """
    Lookup, create, update, delete, exists and count for a single model.

    Primary keys are UUIDs, so lookups by a malformed id return None
    instead of raising.
    """

    def __init__(self, model: type[T]):
        self.model = model

    def get_queryset(self) -> QuerySet[T]:
        return self.model.objects.all()

    def get_by_id(self, id, **filters) -> Optional[T]:
        """Get a single instance by ID, None for unknown or malformed ids"""
        try:
            return self.model.objects.filter(id=id, **filters).first()
        except (ValueError, DjangoValidationError):
            logger.debug(f"Malformed {self.model.__name__} id: {id!r}")
            return None

    def create(self, **kwargs) -> T:
        return self.model.objects.create(**kwargs)

    def update(self, instance: T, **kwargs) -> T:
        """Set the given fields and save; updated_at is refreshed by auto_now"""
        for key, value in kwargs.items():
            setattr(instance, key, value)
        instance.save()
        return instance

    def update_by_id(self, id, **kwargs) -> Optional[T]:
        """None when there is no such row"""
        instance = self.get_by_id(id)
        if instance is None:
            return None
        return self.update(instance, **kwargs)

    def delete(self, instance: T) -> bool:
        deleted, _ = self.model.objects.filter(pk=instance.pk).delete()
        return deleted > 0

    def delete_by_id(self, id) -> bool:
        """False when there is no such row"""
        instance = self.get_by_id(id)
        if instance is None:
            return False
        return self.delete(instance)

    def exists(self, **filters) -> bool:
        return self.model.objects.filter(**filters).exists()

    def count(self, **filters) -> int:
        return self.model.objects.filter(**filters).count()
