"""Testing utilities for code built on the Koios client.

`create_mock_transport` answers requests by operation id, so tests can run
the real client, middleware chain included, without network access.

Example:
    ```python
    from koios_client import Koios
    from koios_client.testing import create_mock_transport

    transport = create_mock_transport({"tip": [{"hash": "abc", "epoch_no": 300}]})
    koios = Koios(api_key="fake-api-key", transport=transport)

    tip = await koios.client.tip()
    assert tip[0].epoch_no == 300
    ```
"""

import inspect
from collections.abc import Mapping
from typing import Any

import httpx

from koios_client.transport.base import operation_id_of


def json_response(payload: Any, status_code: int = 200, headers: Mapping[str, str] | None = None) -> httpx.Response:
    """Build a JSON response."""
    return httpx.Response(status_code, json=payload, headers=headers)


def create_mock_transport(
    routes: Mapping[str, Any],
    requests: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Create a transport answering requests by their operation id.

    Args:
        routes: Maps an operation id to one of:
            - an `httpx.Response`, copied for each request,
            - a callable (sync or async) taking the request and returning
              a response,
            - any other value, returned as a 200 JSON body.
            Operations without a route get a 404.
        requests: If given, every request the transport receives is
            appended to this list.

    Returns:
        An `httpx.MockTransport`.
    """

    async def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)

        operation_id = operation_id_of(request)
        if operation_id not in routes:
            return httpx.Response(404)

        route = routes[operation_id]
        if isinstance(route, httpx.Response):
            return _copy_response(route)
        if callable(route):
            result = route(request)
            if inspect.isawaitable(result):
                result = await result
            return result if isinstance(result, httpx.Response) else json_response(result)
        return json_response(route)

    return httpx.MockTransport(handler)


def _copy_response(response: httpx.Response) -> httpx.Response:
    return httpx.Response(response.status_code, headers=response.headers, content=response.content)


__all__ = ["create_mock_transport", "json_response"]
