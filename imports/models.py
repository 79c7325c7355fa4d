import uuid

from django.conf import settings
from django.db import models


class ImportTemplate(models.Model):
    """Saved spreadsheet column -> asset field mapping"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    mappings = models.JSONField(help_text="Spreadsheet column -> asset field key")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='import_templates'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Import Template"
        verbose_name_plural = "Import Templates"

    def __str__(self):
        return self.name
