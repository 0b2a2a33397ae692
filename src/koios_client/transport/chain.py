"""Middleware chain composed on top of an httpx transport."""

from collections.abc import Iterable

import httpx

from koios_client.transport.base import Middleware, Next


class MiddlewareTransport(httpx.AsyncBaseTransport):
    """Transport that runs each request through an ordered middleware chain.

    The chain is composed once, at construction. The first middleware sees
    the request first and the response last. When several middlewares set
    the same header, the last one to run wins.

    Args:
        wrapped_transport: The transport that finally sends the request.
        middlewares: Middlewares in the order they should run.

    Example:
        ```python
        transport = MiddlewareTransport(
            wrapped_transport=httpx.AsyncHTTPTransport(),
            middlewares=[AuthenticationMiddleware("my-key")],
        )
        ```
    """

    def __init__(
        self,
        *,
        wrapped_transport: httpx.AsyncBaseTransport,
        middlewares: Iterable[Middleware] = (),
    ) -> None:
        self._wrapped_transport = wrapped_transport
        self._middlewares = tuple(middlewares)

        handler: Next = wrapped_transport.handle_async_request
        for middleware in reversed(self._middlewares):
            handler = _bind(middleware, handler)
        self._handler = handler

    @property
    def wrapped_transport(self) -> httpx.AsyncBaseTransport:
        return self._wrapped_transport

    @property
    def middlewares(self) -> tuple[Middleware, ...]:
        return self._middlewares

    async def __aenter__(self):
        """Enter async context, delegating to wrapped transport."""
        await self._wrapped_transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context, delegating to wrapped transport."""
        return await self._wrapped_transport.__aexit__(exc_type, exc_val, exc_tb)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self._handler(request)

    async def aclose(self) -> None:
        await self._wrapped_transport.aclose()


def _bind(middleware: Middleware, call_next: Next) -> Next:
    async def handler(request: httpx.Request) -> httpx.Response:
        return await middleware(request, call_next)

    return handler
