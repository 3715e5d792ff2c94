"""
Error taxonomy and the unified API exception handler.

Every error leaves the API as ``{"status": "error", "message": ...}``.
Validation failures add an ``errors`` field map and authentication
failures add a ``reason`` code.  Exceptions DRF cannot classify become
a 500 whose message is only revealed when ``DEBUG`` is on.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = 'Something went wrong!'


class MappingConflict(exceptions.APIException):
    """An active mapping already exists for the requested pair."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Mapping already exists'
    default_code = 'conflict'


def _auth_reason(exc) -> str:
    if isinstance(exc, exceptions.NotAuthenticated):
        return 'missing'
    return getattr(exc, 'reason', 'invalid')


def _message(exc, data) -> str:
    if isinstance(exc, exceptions.ValidationError):
        return 'Validation failed'
    detail = getattr(exc, 'detail', None)
    if isinstance(detail, dict):
        detail = detail.get('detail') or detail
    if isinstance(detail, (list, dict)):
        return str(data)
    return str(detail)


def api_exception_handler(exc, context):
    if isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(exc.message_dict if hasattr(exc, 'error_dict') else exc.messages)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.error('unhandled error in %s', type(view).__name__ if view else '?', exc_info=exc)
        message = str(exc) if settings.DEBUG else GENERIC_ERROR_MESSAGE
        return Response({'status': 'error', 'message': message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    body = {'status': 'error', 'message': _message(exc, resp.data)}
    if isinstance(exc, exceptions.ValidationError):
        body['errors'] = resp.data
    if resp.status_code == status.HTTP_401_UNAUTHORIZED:
        body['reason'] = _auth_reason(exc)
        logger.warning('authentication rejected reason=%s', body['reason'])
    # Keep headers such as WWW-Authenticate set by DRF.
    resp.data = body
    return resp
