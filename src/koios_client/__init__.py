"""Koios Client - Typed async client for the Koios Cardano API.

This library provides:
- Network selection (mainnet, guild, preview, preprod, sancho)
- Optional API key authentication (explicit value or environment variable)
- A composable middleware chain over any httpx transport
- Typed operations and structured API errors
- Testing utilities for running the client against canned responses

Example:
    ```python
    from koios_client import Koios, Network

    koios = Koios(Network.MAINNET, environment_variable="KOIOS_API_KEY")
    tip = await koios.client.tip()
    print(tip[0].block_no)
    ```
"""

from koios_client._version import __version__
from koios_client.api import Client, Genesis, Tip, Totals
from koios_client.client import Koios
from koios_client.errors import (
    APIError,
    ConfigurationError,
    InvalidBasePathError,
    KoiosError,
    KoiosValueError,
    MissingAPIKeyError,
)
from koios_client.network import BASE_URLS, Network

__all__ = [
    "APIError",
    "BASE_URLS",
    "Client",
    "ConfigurationError",
    "Genesis",
    "InvalidBasePathError",
    "Koios",
    "KoiosError",
    "KoiosValueError",
    "MissingAPIKeyError",
    "Network",
    "Tip",
    "Totals",
    "__version__",
]
