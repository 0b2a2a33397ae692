"""Exceptions raised by the Koios client.

Configuration failures (`ConfigurationError` and its subclasses) are raised
while a client is being constructed and never mid-operation. `APIError` and
its subclasses are only raised by the typed operations once a response has
come back from the service.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from koios_client.errors.models import ErrorDetail


class KoiosError(Exception):
    """Base exception for everything raised by this library."""

    default_message = "Koios client error."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ConfigurationError(KoiosError):
    """Client construction failed."""

    default_message = "Invalid client configuration."


class InvalidBasePathError(ConfigurationError):
    """The base path override, or a network's configured URL, is not an absolute URL."""

    default_message = "Invalid base path."


class MissingAPIKeyError(ConfigurationError):
    """An API key was requested from the environment but is unset or empty.

    Attributes:
        env_var_name: The environment variable that was checked.

    Example:
        ```python
        try:
            koios = Koios(environment_variable="KOIOS_API_KEY")
        except MissingAPIKeyError as e:
            print(f"Missing credential: {e.env_var_name}")
        ```
    """

    default_message = "The API Key is missing."

    def __init__(self, message: str | None = None, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class KoiosValueError(KoiosError, ValueError):
    """An argument passed to a client helper is malformed."""

    default_message = "The value is invalid."


class APIError(KoiosError):
    """Base exception for error responses returned by the service."""

    default_message = "Koios API error."

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
        error_detail: "ErrorDetail | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
        self.error_detail = error_detail


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    def __init__(self, message: str | None = None, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(APIError):
    """5xx server errors."""

    pass


class UnexpectedResponseError(APIError):
    """A successful response whose body does not have the documented shape."""

    pass
