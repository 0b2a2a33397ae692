"""Configuration errors and API error handling for the Koios client."""

from koios_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConfigurationError,
    ForbiddenError,
    InvalidBasePathError,
    KoiosError,
    KoiosValueError,
    MissingAPIKeyError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    UnexpectedResponseError,
)
from koios_client.errors.handler import raise_for_status
from koios_client.errors.models import ErrorDetail

__all__ = [
    "APIError",
    "BadRequestError",
    "ClientError",
    "ConfigurationError",
    "ErrorDetail",
    "ForbiddenError",
    "InvalidBasePathError",
    "KoiosError",
    "KoiosValueError",
    "MissingAPIKeyError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "UnauthorizedError",
    "UnexpectedResponseError",
    "raise_for_status",
]
