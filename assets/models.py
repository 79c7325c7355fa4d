import uuid

from django.db import models

from core.constants import AssetStatus


class AssetQuerySet(models.QuerySet):

    def with_relations(self):
        return self.select_related('category', 'assigned_user')

    def by_status(self, status):
        return self.filter(status=status)


class Asset(models.Model):
    """
    A tracked hardware or software asset.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    asset_tag = models.CharField(max_length=100, unique=True, help_text="Unique inventory tag")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    category = models.ForeignKey(
        'categories.Category',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assets'
    )
    assigned_user = models.ForeignKey(
        'directory.DirectoryUser',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assets'
    )
    status = models.CharField(max_length=20, choices=AssetStatus.CHOICES, default=AssetStatus.ACTIVE)
    manufacturer = models.CharField(max_length=255, blank=True, null=True)
    model = models.CharField(max_length=255, blank=True, null=True)
    serial_number = models.CharField(max_length=255, blank=True, null=True)
    purchase_date = models.DateField(null=True, blank=True)
    purchase_cost = models.CharField(max_length=100, blank=True, null=True, help_text="Free text, e.g. '1,299.00 USD'")
    warranty_expiry = models.DateField(null=True, blank=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    custom_fields = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = AssetQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['category'], name='asset_category_idx'),
            models.Index(fields=['assigned_user'], name='asset_assigned_user_idx'),
            models.Index(fields=['status'], name='asset_status_idx'),
        ]

    def __str__(self):
        return f"{self.asset_tag} - {self.name}"

    @property
    def status_display(self):
        return self.get_status_display()
