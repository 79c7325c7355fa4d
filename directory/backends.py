"""
Authentication backend that accepts Active Directory credentials.

Only active when the directory is configured. A successful directory login
creates or refreshes the matching local account, with its role derived
from the user's directory groups.
"""
import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import BaseBackend

from core.constants import UserRole
from . import ldap

logger = logging.getLogger(__name__)


class DirectoryBackend(BaseBackend):

    def authenticate(self, request, username=None, password=None, **kwargs):
        if not ldap.is_ldap_configured() or not username or not password:
            return None

        entry = ldap.authenticate_user(username, password)
        if entry is None:
            return None

        email = (entry.email or username).lower()
        if '@' not in email:
            logger.warning(f"Directory user {username} has no email address, login refused")
            return None

        role = ldap.get_user_role(entry, ldap.get_ldap_config())
        first_name, _, last_name = entry.display_name.partition(' ')

        User = get_user_model()
        user = User.objects.filter(email__iexact=email).first()
        if user is None:
            user = User.objects.create_user(
                email=email,
                password=None,
                first_name=first_name,
                last_name=last_name,
                role=role,
            )
            logger.info(f"Created local account for directory user {email}")
        else:
            user.role = role
            user.save(update_fields=['role', 'updated_at'])

        if role == UserRole.ADMIN and not user.is_admin:
            user.is_admin = True
            user.save(update_fields=['is_admin', 'updated_at'])

        return user if user.is_active else None

    def get_user(self, user_id):
        User = get_user_model()
        try:
            return User.objects.get(pk=user_id)
        except User.DoesNotExist:
            return None
