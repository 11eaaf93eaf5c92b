"""Request ID middleware - generates or propagates X-Request-Id."""

import uuid

import structlog


class RequestIdMiddleware:
    """Ensure every request has a unique X-Request-Id header."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.headers.get('X-Request-Id') or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.path,
            method=request.method,
        )
        request.request_id = request_id

        response = self.get_response(request)
        response['X-Request-Id'] = request_id
        return response
