"""Tests for the bearer token middleware."""

import asyncio

import httpx
import pytest

from koios_client.auth import AuthenticationMiddleware
from koios_client.errors import KoiosValueError


def make_request(**kwargs) -> httpx.Request:
    return httpx.Request("GET", "https://api.koios.rest/api/v1/tip", **kwargs)


class TestAuthenticationMiddleware:
    """Test header injection."""

    @pytest.mark.unit
    async def test_sets_bearer_header(self):
        middleware = AuthenticationMiddleware("abc")
        seen = []

        async def call_next(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        await middleware(make_request(), call_next)

        assert seen[0].headers.get_list("authorization") == ["Bearer abc"]

    @pytest.mark.unit
    async def test_replaces_existing_authorization(self):
        middleware = AuthenticationMiddleware("abc")
        request = make_request(headers=[("authorization", "Bearer old"), ("authorization", "Basic x")])

        async def call_next(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200)

        await middleware(request, call_next)

        assert request.headers.get_list("authorization") == ["Bearer abc"]

    @pytest.mark.unit
    async def test_leaves_other_headers_alone(self):
        middleware = AuthenticationMiddleware("abc")
        request = make_request(headers={"accept": "application/json", "x-custom": "1"})
        before = [(k, v) for k, v in request.headers.multi_items() if k != "authorization"]

        async def call_next(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200)

        await middleware(request, call_next)

        after = [(k, v) for k, v in request.headers.multi_items() if k != "authorization"]
        assert after == before
        assert request.method == "GET"
        assert str(request.url) == "https://api.koios.rest/api/v1/tip"

    @pytest.mark.unit
    async def test_returns_response_unchanged(self):
        middleware = AuthenticationMiddleware("abc")
        response = httpx.Response(418, json={"teapot": True})

        async def call_next(request: httpx.Request) -> httpx.Response:
            return response

        assert await middleware(make_request(), call_next) is response

    @pytest.mark.unit
    async def test_propagates_errors_unchanged(self):
        middleware = AuthenticationMiddleware("abc")
        error = httpx.ConnectError("connection refused")

        async def call_next(request: httpx.Request) -> httpx.Response:
            raise error

        with pytest.raises(httpx.ConnectError) as exc_info:
            await middleware(make_request(), call_next)

        assert exc_info.value is error

    @pytest.mark.unit
    async def test_propagates_cancellation(self):
        middleware = AuthenticationMiddleware("abc")

        async def call_next(request: httpx.Request) -> httpx.Response:
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await middleware(make_request(), call_next)

    @pytest.mark.unit
    async def test_concurrent_requests(self):
        middleware = AuthenticationMiddleware("abc")

        async def call_next(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0)
            return httpx.Response(200, text=request.headers["authorization"])

        responses = await asyncio.gather(*(middleware(make_request(), call_next) for _ in range(10)))

        assert all(response.text == "Bearer abc" for response in responses)

    @pytest.mark.unit
    def test_rejects_empty_key(self):
        with pytest.raises(KoiosValueError):
            AuthenticationMiddleware("")

    @pytest.mark.unit
    def test_repr_masks_key(self):
        assert "abc" not in repr(AuthenticationMiddleware("abc"))
        assert "***" in repr(AuthenticationMiddleware("abc"))
