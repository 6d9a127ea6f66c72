"""
API error handling

Every error response has one of two shapes:

    {"errors": {...}}               request validation failures (400)
    {"error": {"message": "..."}}   everything else

Uncaught exceptions are logged and reported as a generic 500.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class BadRequest(APIException):
    """A request that is well-formed but not acceptable in the current state."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad request'
    default_code = 'bad_request'


def _message_from(data):
    if isinstance(data, dict):
        if 'detail' in data:
            return str(data['detail'])
        return '; '.join(f'{key}: {_message_from(value)}' for key, value in data.items())
    if isinstance(data, list):
        return '; '.join(_message_from(item) for item in data)
    return str(data)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.error(
            'Unhandled error in %s: %s',
            view.__class__.__name__ if view is not None else 'unknown view',
            exc,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return Response(
            {'error': {'message': 'Internal server error'}},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        response.data = {'errors': response.data}
    elif isinstance(exc, NotAuthenticated):
        response.data = {'error': {'message': 'No token provided'}}
    else:
        response.data = {'error': {'message': _message_from(response.data)}}

    return response
