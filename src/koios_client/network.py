"""Koios networks and their base URLs.

`BASE_URLS` is the only place the service endpoints are written down.

Example:
    ```python
    from koios_client.network import Network, resolve_base_url

    resolve_base_url(Network.PREPROD)
    # URL('https://preprod.koios.rest/api/v1')
    ```
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

import httpx

from koios_client.errors.exceptions import InvalidBasePathError


class Network(str, Enum):
    """The Koios deployment a client talks to."""

    MAINNET = "mainnet"
    GUILD = "guild"
    PREVIEW = "preview"
    PREPROD = "preprod"
    SANCHO = "sancho"

    def url(self) -> httpx.URL:
        """Return this network's base URL."""
        return resolve_base_url(self)

    def __str__(self) -> str:
        return self.value


BASE_URLS: Mapping[Network, str] = MappingProxyType(
    {
        Network.MAINNET: "https://api.koios.rest/api/v1",
        Network.GUILD: "https://guild.koios.rest/api/v1",
        Network.PREVIEW: "https://preview.koios.rest/api/v1",
        Network.PREPROD: "https://preprod.koios.rest/api/v1",
        Network.SANCHO: "https://sancho.koios.rest/api/v1",
    }
)

ALLOWED_SCHEMES = frozenset(["http", "https"])


def parse_base_path(value: str | httpx.URL) -> httpx.URL:
    """Parse a base URL, accepting only absolute http(s) URLs.

    Args:
        value: URL string or already parsed URL.

    Returns:
        The parsed URL, unchanged.

    Raises:
        InvalidBasePathError: If `value` is not an absolute http(s) URL.
    """
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidBasePathError(f"Invalid base path: {value}") from e

    if not url.is_absolute_url or url.scheme not in ALLOWED_SCHEMES or not url.host:
        raise InvalidBasePathError(f"Invalid base path: {value}")
    return url


def resolve_base_url(network: Network | str) -> httpx.URL:
    """Map a network to its base URL.

    Args:
        network: A `Network`, or its string value (e.g. ``"preview"``).

    Returns:
        The network's base URL.

    Raises:
        InvalidBasePathError: If the network is unknown or its table entry
            is malformed. Both are programming errors.
    """
    try:
        network = Network(network)
    except ValueError:
        raise InvalidBasePathError(f"Could not determine server URL for network {network!r}.") from None

    try:
        return parse_base_path(BASE_URLS[network])
    except (KeyError, InvalidBasePathError) as e:
        raise InvalidBasePathError(f"Could not determine server URL for network {network}.") from e
