"""Transport layer: the httpx transport contract and the middleware chain.

Requests leave the client through a `MiddlewareTransport`, which runs the
configured middlewares in order and hands the request to a wrapped
`httpx.AsyncBaseTransport`. Swap the wrapped transport for an
`httpx.MockTransport` to test without network access.

Modules:
    base: Middleware types and the operation id request extension
    chain: Middleware composition over a wrapped transport
    retry: Opt-in retry middleware
    error_logging: Opt-in error response logging

Example:
    ```python
    from koios_client.transport import ErrorLoggingMiddleware, RetryMiddleware

    koios = Koios(middlewares=[ErrorLoggingMiddleware(), RetryMiddleware()])
    ```
"""

from koios_client.transport.base import OPERATION_ID_EXTENSION, Middleware, Next, operation_id_of
from koios_client.transport.chain import MiddlewareTransport
from koios_client.transport.error_logging import ErrorLoggingMiddleware
from koios_client.transport.retry import RetryMiddleware

__all__ = [
    "OPERATION_ID_EXTENSION",
    "ErrorLoggingMiddleware",
    "Middleware",
    "MiddlewareTransport",
    "Next",
    "RetryMiddleware",
    "operation_id_of",
]
