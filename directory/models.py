import uuid

from django.db import models


class DirectoryUser(models.Model):
    """
    Employee record, synced from Active Directory or entered by hand.
    Assets are assigned to directory users.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    employee_id = models.CharField(max_length=100, unique=True, null=True, blank=True)
    display_name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255, unique=True, null=True, blank=True)
    department = models.CharField(max_length=255, blank=True, null=True)
    title = models.CharField(max_length=255, blank=True, null=True)
    manager = models.CharField(max_length=500, blank=True, null=True)
    office_location = models.CharField(max_length=255, blank=True, null=True)
    phone = models.CharField(max_length=50, blank=True, null=True)
    is_active = models.BooleanField(default=True)
    last_sync_at = models.DateTimeField(null=True, blank=True, help_text="Last time this record came from the directory")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['display_name']
        verbose_name = "Directory User"
        verbose_name_plural = "Directory Users"

    def __str__(self):
        return self.display_name

    def save(self, *args, **kwargs):
        # Blank identifiers are stored as NULL so uniqueness only binds real values
        self.employee_id = (self.employee_id or '').strip() or None
        self.email = (self.email or '').strip() or None
        super().save(*args, **kwargs)
