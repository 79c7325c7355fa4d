import uuid

from django.db import models

from core.constants import CategoryDefaults


class Category(models.Model):
    """Asset category - categories can be nested under a parent"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    parent = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='children',
        help_text="Parent category (optional)"
    )
    icon = models.CharField(max_length=50, default=CategoryDefaults.ICON, blank=True)
    color = models.CharField(max_length=7, default=CategoryDefaults.COLOR, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = "Category"
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.name

    @property
    def full_path(self):
        """Name prefixed with its ancestors, e.g. 'Hardware / Laptops'"""
        names = [self.name]
        node = self.parent
        seen = {self.pk}
        while node is not None and node.pk not in seen:
            names.append(node.name)
            seen.add(node.pk)
            node = node.parent
        return " / ".join(reversed(names))

    @property
    def asset_count(self):
        if not hasattr(self, '_asset_count_cache'):
            self._asset_count_cache = self.assets.count()
        return self._asset_count_cache
