"""Error handling utilities for HTTP responses."""

import httpx

from koios_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
)
from koios_client.errors.models import ErrorDetail

STATUS_EXCEPTIONS: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    429: RateLimitError,
}


def raise_for_status(response: httpx.Response) -> None:
    """Raise the matching `APIError` subclass for an error response.

    Uses the PostgREST error body when there is one, otherwise falls back
    to the status code and the start of the response text.

    Args:
        response: HTTP response object

    Raises:
        APIError subclass based on status code
    """
    if response.is_success:
        return

    status_code = response.status_code
    error_detail = ErrorDetail.from_response(response)

    if status_code in STATUS_EXCEPTIONS:
        exc_class = STATUS_EXCEPTIONS[status_code]
    elif 400 <= status_code < 500:
        exc_class = ClientError
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = APIError

    if error_detail:
        message = error_detail.to_exception_message()
    else:
        response_text = response.text[:200]
        message = f"HTTP {status_code}: {response_text}" if response_text else f"HTTP {status_code}"

    if exc_class is RateLimitError:
        raise RateLimitError(
            message,
            retry_after=_parse_retry_after(response),
            status_code=status_code,
            response=response,
            error_detail=error_detail,
        )

    raise exc_class(
        message,
        status_code=status_code,
        response=response,
        error_detail=error_detail,
    )


def _parse_retry_after(response: httpx.Response) -> int | None:
    retry_after = response.headers.get("retry-after")
    if retry_after is None:
        return None
    try:
        return int(retry_after)
    except ValueError:
        return None
