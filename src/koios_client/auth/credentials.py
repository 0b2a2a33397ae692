"""API key resolution for Koios clients.

Resolution order (first match wins):
1. Explicitly provided value
2. Named environment variable (then the optional .env file)
3. No key: the client is unauthenticated

Asking for an environment variable that turns out to be unset or empty is
an error rather than a silent fallback to unauthenticated access.

Example:
    ```python
    from koios_client.auth import CredentialResolver

    resolver = CredentialResolver()

    # Explicit value takes precedence, no lookup happens
    api_key = resolver.resolve(value="explicit-key-123", env_var_name="KOIOS_API_KEY")

    # Raises MissingAPIKeyError if KOIOS_API_KEY is unset or empty
    api_key = resolver.resolve(env_var_name="KOIOS_API_KEY")

    # Tests can inject their own environment
    resolver = CredentialResolver(environ={"KOIOS_API_KEY": "fake"})
    ```

Security Considerations:
    - Credentials are never logged (masked with ***)
    - Only source information is logged (env var name, .env path)
    - The process environment is read, never modified
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values

from koios_client.errors.exceptions import MissingAPIKeyError

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Resolve the API key for a new client.

    Args:
        environ: Environment lookup to use. Defaults to `os.environ`, read
            at resolution time.
        dotenv_path: Optional .env file consulted after `environ`. It is
            parsed once, here, and never loaded into the process environment.

    Example:
        ```python
        # Read KOIOS_API_KEY from the environment, or from ./secrets.env
        resolver = CredentialResolver(dotenv_path="secrets.env")
        api_key = resolver.resolve(env_var_name="KOIOS_API_KEY")
        ```
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        dotenv_path: str | Path | None = None,
    ) -> None:
        self._environ = environ
        self._dotenv_path = dotenv_path
        self._dotenv_values: dict[str, str | None] = {}

        if dotenv_path is not None:
            self._dotenv_values = dotenv_values(dotenv_path)
            logger.debug(f"Loaded {len(self._dotenv_values)} entries from .env file '{dotenv_path}'")

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def lookup(self, env_var_name: str) -> tuple[str | None, str]:
        """Look a variable up in the environment, then in the .env file.

        Returns:
            Tuple of (value or None, description of where it was looked up).
        """
        value = self.environ.get(env_var_name)
        if value:
            return value, f"environment variable '{env_var_name}'"

        dotenv_value = self._dotenv_values.get(env_var_name)
        if dotenv_value:
            return dotenv_value, f".env file '{self._dotenv_path}'"

        return None, f"environment variable '{env_var_name}'"

    def resolve(self, *, value: str | None = None, env_var_name: str | None = None) -> str | None:
        """Resolve the API key.

        Args:
            value: Explicitly provided key (highest priority). An empty
                string counts as not provided.
            env_var_name: Environment variable to read the key from when no
                explicit value is given.

        Returns:
            The API key, or None when neither source was requested.

        Raises:
            MissingAPIKeyError: If `env_var_name` was requested but the
                variable is unset or empty.
        """
        if value:
            logger.debug("Resolved API key from explicit parameter: ***")
            return value

        if env_var_name:
            result, source = self.lookup(env_var_name)
            if not result:
                raise MissingAPIKeyError(
                    f"Environment variable {env_var_name} is not set or empty.",
                    env_var_name=env_var_name,
                )
            logger.debug(f"Resolved API key from {source}: ***")
            return result

        logger.debug("No API key configured, client will be unauthenticated")
        return None
