"""
REST framework exception handler.

Every error leaves the API as ``{"message": "..."}`` with a matching
status code, whether it came from the domain layer, from DRF validation
or from an unexpected failure.
"""
import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from common.logging_config import get_current_request_id
from core.exceptions import BaseApplicationException

logger = logging.getLogger(__name__)

ACTION_VERBS = {
    'list': 'fetch',
    'retrieve': 'fetch',
    'create': 'create',
    'update': 'update',
    'partial_update': 'update',
    'destroy': 'delete',
}

# @api_view functions carry no service; keyed on the function name
VIEW_FAILURE_MESSAGES = {
    'api_register': 'Failed to register',
    'api_login': 'Failed to log in',
    'api_logout': 'Failed to log out',
    'api_current_user': 'Failed to fetch user',
    'stats': 'Failed to fetch stats',
    'ldap_status': 'Failed to check directory status',
    'import_assets': 'Failed to import data',
    'import_preview': 'Failed to read file',
    'suggest_mapping': 'Failed to suggest mapping',
}


def _first_message(detail):
    """First human-readable message out of a DRF error detail tree"""
    if isinstance(detail, dict):
        for key, value in detail.items():
            message = _first_message(value)
            if message is None:
                continue
            if key in ('non_field_errors', 'detail'):
                return message
            return f"{key}: {message}"
        return None
    if isinstance(detail, (list, tuple)):
        for item in detail:
            message = _first_message(item)
            if message is not None:
                return message
        return None
    return str(detail)


def _entity_label(view):
    service = getattr(view, 'service', None)
    label = getattr(service, 'entity_label', None)
    return label or 'Resource'


def _failure_message(view):
    """'Failed to <verb> <entity>' for the view that raised"""
    message = VIEW_FAILURE_MESSAGES.get(type(view).__name__)
    if message is not None:
        return message
    action = getattr(view, 'action', None)
    verb = ACTION_VERBS.get(action)
    if verb is None:
        verb = 'fetch' if getattr(view, 'request', None) is not None and view.request.method == 'GET' else 'process'
    label = _entity_label(view).lower()
    if action in ('list', None) and verb == 'fetch':
        label = f"{label}s" if not label.endswith('s') else label
    return f"Failed to {verb} {label}"


def api_exception_handler(exc, context):
    view = context.get('view')

    if isinstance(exc, BaseApplicationException):
        return Response({'message': exc.message}, status=exc.status_code)

    if isinstance(exc, Http404):
        return Response(
            {'message': f"{_entity_label(view)} not found"},
            status=status.HTTP_404_NOT_FOUND
        )

    if isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()

    if isinstance(exc, exceptions.APIException):
        response = exception_handler(exc, context)
        if isinstance(exc, exceptions.ValidationError):
            message = _first_message(exc.detail) or 'Validation failed'
        else:
            message = _first_message(exc.detail) or str(exc)
        if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
            # Session auth has no WWW-Authenticate challenge, so DRF downgrades these to 403
            response.status_code = status.HTTP_401_UNAUTHORIZED
        response.data = {'message': message}
        return response

    request_id = get_current_request_id() or 'N/A'
    logger.error(
        f"[{request_id}] Unhandled {type(exc).__name__} in {type(view).__name__}: {exc}",
        exc_info=exc,
        extra={'request_id': request_id}
    )
    return Response(
        {'message': _failure_message(view)},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
