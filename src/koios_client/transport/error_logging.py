"""Middleware that logs error responses."""

import logging

import httpx

from koios_client.transport.base import Next, operation_id_of


class ErrorLoggingMiddleware:
    """Log every non-2xx response at WARNING.

    Only the method, URL, status and operation id are logged. Headers are
    never logged, so the credential cannot leak through this middleware.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    async def __call__(self, request: httpx.Request, call_next: Next) -> httpx.Response:
        response = await call_next(request)
        if not response.is_success:
            self._logger.warning(
                f"{request.method} {request.url} ({operation_id_of(request) or 'unknown operation'}) "
                f"returned {response.status_code}"
            )
        return response
