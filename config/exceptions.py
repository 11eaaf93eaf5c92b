"""
Error taxonomy shared by every app's service layer.

Services raise subclasses of ``ServiceError``; views never translate them by
hand. ``api_exception_handler`` (registered as DRF's ``EXCEPTION_HANDLER``)
renders every failure as::

    {"error": "<human message>", "kind": "<machine-readable kind>"}

Exception Hierarchy:
    ServiceError (base)
    ├── InvalidArgument   400
    ├── Forbidden         403
    ├── NotFound          404
    ├── Conflict          409
    └── Internal          500

Individual domain errors may override ``status_code`` where a route
contract asks for a different HTTP status, but ``kind`` always follows the
taxonomy.
"""

import structlog
from django.db import DatabaseError
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)


class ServiceError(Exception):
    """Base exception for all service-layer errors."""

    kind = 'internal'
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Internal server error'

    def __init__(self, message=None, **context):
        self.message = message or self.default_message
        self.context = context
        super().__init__(self.message)


class InvalidArgument(ServiceError):
    """Malformed or out-of-bounds input; the caller must correct it."""

    kind = 'invalid_argument'
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Invalid argument'


class Forbidden(ServiceError):
    """Authenticated, but not allowed to perform this action."""

    kind = 'forbidden'
    status_code = status.HTTP_403_FORBIDDEN
    default_message = 'You do not have permission to perform this action.'


class NotFound(ServiceError):
    kind = 'not_found'
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Not found'


class Conflict(ServiceError):
    """An invariant would be violated; never retry blindly with the same arguments."""

    kind = 'conflict'
    status_code = status.HTTP_409_CONFLICT
    default_message = 'Conflict'


class Internal(ServiceError):
    """Datastore or other operator-fixable failure; safe to retry the operation."""

    kind = 'internal'
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Internal server error'


_DRF_KINDS = (
    (drf_exceptions.NotAuthenticated, 'unauthorized'),
    (drf_exceptions.AuthenticationFailed, 'unauthorized'),
    (drf_exceptions.PermissionDenied, 'forbidden'),
    (drf_exceptions.ValidationError, 'invalid_argument'),
    (drf_exceptions.ParseError, 'invalid_argument'),
    (drf_exceptions.NotFound, 'not_found'),
    (drf_exceptions.MethodNotAllowed, 'invalid_argument'),
)


def _drf_kind(exc):
    for exc_class, kind in _DRF_KINDS:
        if isinstance(exc, exc_class):
            return kind
    if isinstance(exc, Http404):
        return 'not_found'
    return 'internal'


def api_exception_handler(exc, context):
    """
    Translate service and framework errors into the JSON error envelope.

    Args:
        exc: The raised exception
        context: DRF handler context (contains the view and request)

    Returns:
        Response, or None to let Django handle the error
    """
    view = context.get('view')
    view_name = view.__class__.__name__ if view is not None else None

    if isinstance(exc, ServiceError):
        if exc.status_code >= 500:
            logger.error(
                'service_error',
                kind=exc.kind,
                error=exc.message,
                view=view_name,
                exc_info=exc,
                **exc.context,
            )
        else:
            logger.info(
                'service_rejected',
                kind=exc.kind,
                error=exc.message,
                view=view_name,
                **exc.context,
            )
        return Response(
            {'error': exc.message, 'kind': exc.kind},
            status=exc.status_code,
        )

    if isinstance(exc, DatabaseError):
        logger.error('database_error', view=view_name, error=str(exc), exc_info=exc)
        return Response(
            {'error': Internal.default_message, 'kind': Internal.kind},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    kind = _drf_kind(exc)
    if isinstance(exc, drf_exceptions.ValidationError):
        response.data = {
            'error': 'Invalid input.',
            'kind': kind,
            'fields': exc.detail,
        }
    else:
        detail = response.data.get('detail') if isinstance(response.data, dict) else response.data
        response.data = {'error': str(detail), 'kind': kind}
    return response
