"""Optional retry middleware.

The client never retries on its own. Callers who want retries add a
`RetryMiddleware` to their chain:

```python
from koios_client import Koios
from koios_client.transport import RetryMiddleware

koios = Koios(api_key="...", middlewares=[RetryMiddleware(max_retries=5, max_backoff=30)])
```

| Condition | Retried methods |
|-----------|-----------------|
| 429 Too Many Requests | all (the service rejected the request before running it) |
| configured 5xx codes | GET, HEAD, PUT, DELETE, OPTIONS, TRACE |
| `httpx.TransportError` | GET, HEAD, PUT, DELETE, OPTIONS, TRACE |

Koios answers 429 when a tier's request budget is spent, with a
``Retry-After`` header that this middleware honours.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

import httpx

from koios_client.transport.base import Next, operation_id_of

logger = logging.getLogger(__name__)


class RetryMiddleware:
    """Retry rate-limited requests, and idempotent requests on server errors.

    Args:
        max_retries: Maximum number of retry attempts (default: 3)
        backoff_factor: Multiplier for exponential backoff (default: 1.0)
        max_backoff: Maximum delay between attempts in seconds (default: 60)
        retry_status_codes: 5xx codes that trigger retries (default: 502, 503, 504)
        sleep: Coroutine used to wait between attempts
    """

    # Idempotent HTTP methods (per RFC 7231)
    IDEMPOTENT_METHODS: frozenset[str] = frozenset(["HEAD", "GET", "PUT", "DELETE", "OPTIONS", "TRACE"])

    DEFAULT_RETRY_STATUS_CODES: frozenset[int] = frozenset([502, 503, 504])

    def __init__(
        self,
        *,
        max_retries: int = 3,
        backoff_factor: float = 1.0,
        max_backoff: float = 60.0,
        retry_status_codes: frozenset[int] | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self.max_backoff = max_backoff
        self.retry_status_codes = (
            self.DEFAULT_RETRY_STATUS_CODES if retry_status_codes is None else retry_status_codes
        )
        self._sleep = sleep

    async def __call__(self, request: httpx.Request, call_next: Next) -> httpx.Response:
        retries = 0

        while True:
            try:
                response = await call_next(request)
            except httpx.TransportError as e:
                if retries >= self.max_retries or request.method not in self.IDEMPOTENT_METHODS:
                    raise
                retries += 1
                delay = self._calculate_backoff_delay(retries)
                logger.warning(
                    f"Request {request.method} {request.url} ({operation_id_of(request)}) failed with {e!r}, "
                    f"retrying in {delay}s (attempt {retries}/{self.max_retries})"
                )
                await self._sleep(delay)
                continue

            delay = self._retry_delay(request, response, retries)
            if delay is None:
                return response

            retries += 1
            logger.warning(
                f"Request {request.method} {request.url} ({operation_id_of(request)}) failed with "
                f"{response.status_code}, retrying in {delay}s (attempt {retries}/{self.max_retries})"
            )
            await response.aclose()
            await self._sleep(delay)

    def _retry_delay(self, request: httpx.Request, response: httpx.Response, current_retries: int) -> float | None:
        """Return the delay before the next attempt, or None if the response is final."""
        if current_retries >= self.max_retries:
            return None

        if response.status_code == 429:
            delay = self._parse_retry_after(response)
            if delay is None:
                delay = self._calculate_backoff_delay(current_retries + 1)
            return delay

        if response.status_code in self.retry_status_codes and request.method in self.IDEMPOTENT_METHODS:
            return self._calculate_backoff_delay(current_retries + 1)

        return None

    def _parse_retry_after(self, response: httpx.Response) -> float | None:
        """Parse a Retry-After header given in seconds or as an HTTP date.

        Returns:
            Delay in seconds capped at `max_backoff`, or None if the header
            is missing, invalid, or in the past.
        """
        retry_after = response.headers.get("Retry-After")
        if not retry_after:
            return None

        try:
            delay = int(retry_after)
            if delay < 0:
                return None
            return float(min(delay, self.max_backoff))
        except ValueError:
            pass

        try:
            retry_date = parsedate_to_datetime(retry_after)
            delay = (retry_date - datetime.now(UTC)).total_seconds()
        except (ValueError, TypeError):
            return None

        # Clock skew
        if delay < 0:
            return None
        return float(min(delay, self.max_backoff))

    def _calculate_backoff_delay(self, retry_number: int) -> float:
        """Exponential backoff: backoff_factor * 2 ** (retry_number - 1), capped at max_backoff."""
        delay = self.backoff_factor * (2 ** (retry_number - 1))
        return min(delay, self.max_backoff)
