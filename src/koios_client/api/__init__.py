"""Bound Koios client and response models."""

from koios_client.api.client import DEFAULT_TIMEOUT, Client
from koios_client.api.models import Genesis, Tip, Totals

__all__ = [
    "DEFAULT_TIMEOUT",
    "Client",
    "Genesis",
    "Tip",
    "Totals",
]
