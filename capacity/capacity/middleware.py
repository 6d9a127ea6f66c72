"""
Custom middleware for API request logging
"""
import logging
import time

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """
    Middleware that logs every API request with its status code and duration.
    Server errors are logged at ERROR level, client errors at WARNING.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        response = self.get_response(request)

        if not request.path.startswith('/api/'):
            return response

        elapsed_ms = (time.monotonic() - started) * 1000
        message = '%s %s -> %s (%.1f ms)'
        args = (request.method, request.path, response.status_code, elapsed_ms)
        if response.status_code >= 500:
            logger.error(message, *args)
        elif response.status_code >= 400:
            logger.warning(message, *args)
        else:
            logger.info(message, *args)

        return response
