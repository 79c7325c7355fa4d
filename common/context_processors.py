"""
Context processors to make settings available in all templates
"""
from directory.ldap import is_ldap_configured

from .utils import get_site_settings


def site_settings(request):
    """Add site settings to template context"""
    return {
        'site_settings': get_site_settings(),
    }


def directory_status(request):
    """Whether the directory integration is configured"""
    return {
        'ldap_configured': is_ldap_configured(),
    }
