import logging
import time

from django.conf import settings

logger = logging.getLogger(__name__)


class ApiRequestLogMiddleware:
    """Log one line per ``/api/`` request: method, path, status and duration."""
    PREFIX = '/api/'

    def __init__(self, get_response):
        self.get_response = get_response
        self.enabled = getattr(settings, 'API_LOG_REQUESTS', True)

    def __call__(self, request):
        path = request.path or ''
        if not self.enabled or not path.startswith(self.PREFIX):
            return self.get_response(request)
        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000
        logger.info('%s %s %s in %dms', request.method, path, response.status_code, elapsed_ms)
        return response
