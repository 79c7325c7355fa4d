from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='SiteSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('site_name', models.CharField(default='Asset Tracker', max_length=200)),
                ('company_name', models.CharField(blank=True, default='', max_length=200)),
                ('support_email', models.EmailField(blank=True, default='', max_length=254)),
                ('default_theme', models.CharField(choices=[('light', 'Light'), ('dark', 'Dark'), ('system', 'System')], default='system', max_length=10)),
                ('enable_email_notifications', models.BooleanField(default=True)),
                ('notify_on_asset_changes', models.BooleanField(default=True)),
                ('notify_on_directory_sync', models.BooleanField(default=False)),
                ('warranty_alert_days', models.PositiveIntegerField(default=30, help_text='Highlight assets whose warranty expires within this many days')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Site Settings',
                'verbose_name_plural': 'Site Settings',
            },
        ),
    ]
