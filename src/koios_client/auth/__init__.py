"""Authentication components for Koios clients.

This module provides:
- API key resolution (explicit value → environment variable → none)
- Bearer token middleware for the request chain

Example:
    ```python
    from koios_client.auth import AuthenticationMiddleware, CredentialResolver

    api_key = CredentialResolver().resolve(env_var_name="KOIOS_API_KEY")
    middleware = AuthenticationMiddleware(api_key)
    ```
"""

from koios_client.auth.credentials import CredentialResolver
from koios_client.auth.middleware import AUTHORIZATION_HEADER, AuthenticationMiddleware

__all__ = [
    "AUTHORIZATION_HEADER",
    "AuthenticationMiddleware",
    "CredentialResolver",
]
