"""Types shared by the transport layer.

The transport contract itself is httpx's: anything implementing
`httpx.AsyncBaseTransport.handle_async_request` can carry Koios requests,
including `httpx.MockTransport` in tests.

A middleware is an async callable taking the outgoing request and the
next handler in the chain:

```python
async def add_header(request: httpx.Request, call_next: Next) -> httpx.Response:
    request.headers["x-trace"] = "1"
    return await call_next(request)
```
"""

from collections.abc import Awaitable, Callable

import httpx

Next = Callable[[httpx.Request], Awaitable[httpx.Response]]
Middleware = Callable[[httpx.Request, Next], Awaitable[httpx.Response]]

OPERATION_ID_EXTENSION = "koios_operation_id"


def operation_id_of(request: httpx.Request) -> str | None:
    """Return the operation id a request was issued for, if any."""
    return request.extensions.get(OPERATION_ID_EXTENSION)
