import logging

from django.db import models, DatabaseError

logger = logging.getLogger(__name__)


class SiteSettings(models.Model):
    """
    Site-wide settings (singleton pattern - only one instance)
    """
    THEME_LIGHT = 'light'
    THEME_DARK = 'dark'
    THEME_SYSTEM = 'system'
    THEME_CHOICES = [
        (THEME_LIGHT, 'Light'),
        (THEME_DARK, 'Dark'),
        (THEME_SYSTEM, 'System'),
    ]

    site_name = models.CharField(max_length=200, default="Asset Tracker")
    company_name = models.CharField(max_length=200, blank=True, default="")
    support_email = models.EmailField(blank=True, default="")

    # Appearance
    default_theme = models.CharField(max_length=10, choices=THEME_CHOICES, default=THEME_SYSTEM)

    # Notifications
    enable_email_notifications = models.BooleanField(default=True)
    notify_on_asset_changes = models.BooleanField(default=True)
    notify_on_directory_sync = models.BooleanField(default=False)
    warranty_alert_days = models.PositiveIntegerField(
        default=30,
        help_text="Highlight assets whose warranty expires within this many days"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Site Settings'
        verbose_name_plural = 'Site Settings'

    def save(self, *args, **kwargs):
        self.pk = 1
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        pass

    @classmethod
    def load(cls):
        """Get or create the singleton instance, defaults when the table is missing"""
        try:
            obj, _ = cls.objects.get_or_create(pk=1)
            return obj
        except DatabaseError as e:
            logger.warning(f"Site settings table unavailable (migration may be pending): {e}")
            obj = cls()
            obj.pk = 1
            return obj

    def __str__(self):
        return self.site_name
