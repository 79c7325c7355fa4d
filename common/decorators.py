"""
Custom decorators for page access control and error handling with request ID logging
"""
from functools import wraps
from django.shortcuts import redirect
from django.contrib import messages
from django.core.exceptions import PermissionDenied
from django.http import Http404
import logging

from core.exceptions import BaseApplicationException

logger = logging.getLogger(__name__)

HOME_URL = 'portal:dashboard'


def _get_request_id(request):
    """Get request ID from request object"""
    return getattr(request, 'request_id', 'N/A')


def _log_with_request_id(level, request, message, exc_info=False):
    """Log message with request ID context"""
    request_id = _get_request_id(request)
    extra = {'request_id': request_id}
    if level == 'error':
        logger.error(f"[{request_id}] {message}", exc_info=exc_info, extra=extra)
    elif level == 'warning':
        logger.warning(f"[{request_id}] {message}", extra=extra)
    elif level == 'info':
        logger.info(f"[{request_id}] {message}", extra=extra)


def _user_label(request):
    return request.user.email if request.user.is_authenticated else 'Anonymous'


def _redirect_back(request):
    """Stay on the referring page when there is one, avoiding a dashboard loop"""
    referer = request.META.get('HTTP_REFERER')
    if referer and referer != request.build_absolute_uri():
        return redirect(referer)
    if request.resolver_match and request.resolver_match.view_name == HOME_URL:
        return redirect('portal:asset_list')
    return redirect(HOME_URL)


def write_access_required(view_func):
    """
    Decorator to block read-only users from views that change data
    """
    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        if not request.user.is_authenticated:
            messages.error(request, 'Please login to access this page.')
            return redirect('accounts:login')

        if not request.user.can_write:
            messages.error(request, 'Access denied. Your account has read-only access.')
            _log_with_request_id('warning', request,
                f"Write attempt by read-only user {request.user.email} - {view_func.__name__}")
            return redirect(HOME_URL)

        return view_func(request, *args, **kwargs)
    return _wrapped_view


def admin_required(view_func):
    """
    Decorator to ensure only administrators can access the view
    """
    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        if not request.user.is_authenticated:
            messages.error(request, 'Please login to access this page.')
            return redirect('accounts:login')

        if not request.user.has_admin_access:
            messages.error(request, 'Access denied. Only administrators can do this.')
            _log_with_request_id('warning', request,
                f"Unauthorized admin access attempt by {request.user.email} (role: {request.user.role})")
            return redirect(HOME_URL)

        return view_func(request, *args, **kwargs)
    return _wrapped_view


def handle_errors(view_func):
    """
    Decorator to handle common errors gracefully with proper logging
    Only logs important errors, not every exception
    """
    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except Http404:
            # 404 errors are common and expected - don't log
            raise
        except PermissionDenied:
            messages.error(request, 'You do not have permission to access this resource.')
            _log_with_request_id('warning', request,
                f"Permission denied for user {_user_label(request)} - {view_func.__name__}")
            return _redirect_back(request)
        except BaseApplicationException as e:
            _log_with_request_id('warning', request,
                f"{type(e).__name__} in {view_func.__name__}: {e.message}")
            messages.error(request, e.message)
            return _redirect_back(request)
        except Exception as e:
            _log_with_request_id('error', request,
                f"Unexpected error in {view_func.__name__}: {type(e).__name__}: {str(e)}",
                exc_info=True)
            messages.error(request, 'An error occurred. Please try again or contact support.')
            return _redirect_back(request)
    return _wrapped_view
