"""The Koios client facade.

`Koios` resolves the configuration of a client (network, API key, base URL),
builds the middleware chain and binds it to a transport. Construction either
fully succeeds or raises a `ConfigurationError`; it never touches the network.

Example:
    ```python
    from koios_client import Koios, Network

    async with Koios(Network.PREPROD, environment_variable="KOIOS_API_KEY") as koios:
        tip = await koios.client.tip()
    ```
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

import httpx

from koios_client.api.client import DEFAULT_TIMEOUT, Client
from koios_client.auth.credentials import CredentialResolver
from koios_client.auth.middleware import AuthenticationMiddleware
from koios_client.errors.exceptions import KoiosValueError
from koios_client.network import Network, parse_base_path, resolve_base_url
from koios_client.transport.base import Middleware

logger = logging.getLogger(__name__)


class Koios:
    """Entry point for talking to a Koios network.

    Args:
        network: Network to talk to. Defaults to mainnet.
        api_key: Explicit API key. Takes precedence over `environment_variable`.
        base_path: Absolute URL overriding the network's base URL.
        environment_variable: Name of an environment variable holding the API
            key. If given (and `api_key` is not), the variable must be set and
            non-empty.
        client: A pre-built `Client`, used as is. It already carries its base
            URL, transport and middlewares, so it cannot be combined with
            `base_path`, `transport` or `middlewares`.
        transport: Transport for the default client, e.g. `httpx.MockTransport`.
        middlewares: Extra middlewares run after authentication, in order.
        environ: Environment lookup for `environment_variable`. Defaults to
            `os.environ`.
        dotenv_path: Optional .env file consulted after `environ`.
        timeout: httpx timeout configuration for the default client.

    Raises:
        MissingAPIKeyError: `environment_variable` is unset or empty.
        InvalidBasePathError: `base_path` is not an absolute http(s) URL.
        KoiosValueError: `client` is combined with options it would ignore.
    """

    def __init__(
        self,
        network: Network | str = Network.MAINNET,
        api_key: str | None = None,
        base_path: str | None = None,
        environment_variable: str | None = None,
        client: Client | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        middlewares: Iterable[Middleware] = (),
        environ: Mapping[str, str] | None = None,
        dotenv_path: str | Path | None = None,
        timeout: float | httpx.Timeout | None = DEFAULT_TIMEOUT,
    ) -> None:
        network = _parse_network(network)

        resolver = CredentialResolver(environ=environ, dotenv_path=dotenv_path)
        resolved_key = resolver.resolve(value=api_key, env_var_name=environment_variable)

        prebuilt = client is not None
        extra_middlewares = tuple(middlewares)
        if client is not None:
            _check_prebuilt_options(base_path=base_path, transport=transport, middlewares=extra_middlewares or None)
            base_url = client.base_url
        else:
            base_url = parse_base_path(base_path) if base_path is not None else resolve_base_url(network)
            chain: list[Middleware] = []
            if resolved_key is not None:
                chain.append(AuthenticationMiddleware(resolved_key))
            chain.extend(extra_middlewares)
            client = Client(base_url, transport=transport, middlewares=chain, timeout=timeout)

        self._network = network
        self._api_key = resolved_key
        self._base_url = base_url
        self._client = client
        self._extra_middlewares = extra_middlewares
        self._transport = transport
        self._timeout = timeout
        self._prebuilt = prebuilt

        logger.debug(
            f"Configured Koios client for {network} at {base_url} "
            f"(authenticated: {'yes' if resolved_key else 'no'})"
        )

    @property
    def network(self) -> Network:
        return self._network

    @property
    def api_key(self) -> str | None:
        return self._api_key

    @property
    def is_authenticated(self) -> bool:
        return self._api_key is not None

    @property
    def base_url(self) -> httpx.URL:
        """Base URL the bound client sends requests to."""
        return self._base_url

    @property
    def client(self) -> Client:
        return self._client

    @property
    def middlewares(self) -> tuple[Middleware, ...]:
        """The bound client's middleware chain, in the order it runs."""
        return self._client.middlewares

    def for_network(self, network: Network | str) -> "Koios":
        """Build a client for another network with the same key and middlewares.

        A `base_path` override is not carried over; the new client uses the
        network's own base URL. A prebuilt client is rebuilt for that URL
        over the same transport and middlewares.
        """
        if self._prebuilt:
            client = Client(
                resolve_base_url(_parse_network(network)),
                transport=self._client.transport,
                middlewares=self._client.middlewares,
                timeout=self._client.timeout,
            )
            return Koios(network, api_key=self._api_key, client=client)
        return Koios(
            network,
            api_key=self._api_key,
            transport=self._transport,
            middlewares=self._extra_middlewares,
            timeout=self._timeout,
        )

    async def __aenter__(self) -> "Koios":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def __repr__(self) -> str:
        api_key = "***" if self._api_key else None
        return f"Koios(network={self._network.value!r}, base_url={str(self._base_url)!r}, api_key={api_key!r})"


def _check_prebuilt_options(**options) -> None:
    given = [name for name, value in options.items() if value is not None]
    if given:
        raise KoiosValueError(f"A prebuilt client cannot be combined with: {', '.join(given)}")


def _parse_network(value: Network | str) -> Network:
    try:
        return Network(value)
    except ValueError:
        raise KoiosValueError(
            f"Unknown network {value!r}, expected one of: {', '.join(n.value for n in Network)}"
        ) from None
