"""
Audit Logging Signals

Session logins and logouts are recorded from Django's auth signals.
Entity changes are logged explicitly by the services, where the request
context is available.
"""

from django.contrib.auth.signals import user_logged_in, user_logged_out
from django.dispatch import receiver

from audit.helpers import log_login, log_logout


@receiver(user_logged_in)
def log_user_login(sender, request, user, **kwargs):
    """Log successful login"""
    log_login(user, request)


@receiver(user_logged_out)
def log_user_logout(sender, request, user, **kwargs):
    """Log logout"""
    if user:
        log_logout(user, request)
