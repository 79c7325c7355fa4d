from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AuditLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('entity_type', models.CharField(choices=[('asset', 'Asset'), ('category', 'Category'), ('user', 'User'), ('system', 'System')], db_index=True, help_text='Type of entity affected', max_length=20)),
                ('entity_id', models.CharField(help_text="ID of the entity affected, or a system scope such as 'ad-sync'", max_length=64)),
                ('action', models.CharField(choices=[('create', 'Create'), ('update', 'Update'), ('delete', 'Delete'), ('sync', 'Sync'), ('import', 'Import'), ('login', 'Login'), ('logout', 'Logout')], db_index=True, help_text='Type of action performed', max_length=20)),
                ('user_name', models.CharField(blank=True, help_text='Display name of the actor at the time of the action', max_length=255, null=True)),
                ('previous_data', models.JSONField(blank=True, null=True)),
                ('new_data', models.JSONField(blank=True, null=True)),
                ('changes', models.JSONField(blank=True, help_text='List of {field, old_value, new_value}', null=True)),
                ('ip_address', models.CharField(blank=True, max_length=64, null=True)),
                ('user_agent', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('user', models.ForeignKey(blank=True, help_text='User who performed the action', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='audit_logs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Audit Log',
                'verbose_name_plural': 'Audit Logs',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['entity_type', 'entity_id'], name='audit_entity_idx'), models.Index(fields=['user'], name='audit_user_idx')],
            },
        ),
    ]
