"""Bearer token authentication middleware."""

import httpx

from koios_client.errors.exceptions import KoiosValueError
from koios_client.transport.base import Next

AUTHORIZATION_HEADER = "authorization"


class AuthenticationMiddleware:
    """Set the `authorization` header to ``Bearer <api_key>`` on every request.

    Any existing `authorization` value is replaced, so the header is sent
    exactly once. Nothing else on the request is touched and the response,
    or exception, from the rest of the chain is passed back unchanged.
    """

    __slots__ = ("_authorization",)

    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise KoiosValueError("API key for authentication must be a non-empty string.")
        self._authorization = f"Bearer {api_key}"

    async def __call__(self, request: httpx.Request, call_next: Next) -> httpx.Response:
        request.headers[AUTHORIZATION_HEADER] = self._authorization
        return await call_next(request)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(api_key='***')"
