"""
Unified API error responses.

Every error leaves the API in one of three shapes:

* 400 ``{"message": "Invalid patient data", "errors": {...}}``
* 404 ``{"message": "Patient not found"}``
* 500 ``{"message": "Failed to create patient"}``

Views attach their human readable messages with :func:`error_messages`;
the handler below picks them up from the view instance.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

DEFAULT_INVALID_MESSAGE = 'Invalid request data'
DEFAULT_FAILURE_MESSAGE = 'Internal server error'


def error_messages(invalid=None, **failures):
    """Attach response messages to an ``@api_view`` function.

    ``invalid`` is used for 400 responses; keyword arguments named after
    HTTP methods (``get=``, ``post=``, ...) are used for 500 responses.
    Must be applied above ``@api_view``.
    """
    def decorator(view):
        view.cls.invalid_message = invalid or DEFAULT_INVALID_MESSAGE
        view.cls.failure_messages = {method.upper(): text for method, text in failures.items()}
        return view
    return decorator


def _failure_message(context) -> str:
    view = context.get('view')
    request = context.get('request')
    messages = getattr(view, 'failure_messages', None) or {}
    method = getattr(request, 'method', '') or ''
    return messages.get(method.upper(), DEFAULT_FAILURE_MESSAGE)


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.exception('Unhandled error in %s', type(view).__name__ if view else 'view', exc_info=exc)
        return Response({'message': _failure_message(context)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    # normalize response
    if isinstance(exc, ValidationError):
        message = getattr(context.get('view'), 'invalid_message', DEFAULT_INVALID_MESSAGE)
        errors = resp.data if isinstance(resp.data, dict) else {'non_field_errors': resp.data}
        return Response({'message': message, 'errors': errors}, status=resp.status_code)
    detail = resp.data.get('detail') if isinstance(resp.data, dict) else resp.data
    return Response({'message': str(detail)}, status=resp.status_code, headers=_copy_headers(resp))


def _copy_headers(resp):
    return {key: value for key, value in resp.items() if key in ('Allow', 'Retry-After')}
