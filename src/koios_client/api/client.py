"""Bound Koios client: base URL, middleware chain and transport.

`Client.request` is the generic pass-through every operation goes through.
The typed methods below it cover a sample of the Koios endpoints; they
validate their arguments, send the request, map error statuses with
`raise_for_status` and decode the JSON body.
"""

import logging
import re
from collections.abc import Iterable, Sequence
from typing import Any

import httpx

from koios_client._version import __version__
from koios_client.api.models import Genesis, Tip, Totals
from koios_client.errors.exceptions import KoiosValueError, UnexpectedResponseError
from koios_client.errors.handler import raise_for_status
from koios_client.network import parse_base_path
from koios_client.transport.base import OPERATION_ID_EXTENSION, Middleware
from koios_client.transport.chain import MiddlewareTransport

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=10.0)
USER_AGENT = f"koios-client/{__version__}"

_HASH_PATTERN = re.compile(r"[0-9a-fA-F]{64}")


class Client:
    """Issue Koios operations against one base URL.

    The client is immutable once built and safe to share between
    concurrent tasks. It holds no per-request state.

    Args:
        base_url: Absolute URL every operation path is resolved against.
        transport: Transport that sends the requests. Defaults to
            `httpx.AsyncHTTPTransport()`.
        middlewares: Request middlewares, in the order they run.
        timeout: httpx timeout configuration.

    Example:
        ```python
        client = Client(
            "https://api.koios.rest/api/v1",
            transport=httpx.MockTransport(handler),
        )
        tip = await client.tip()
        ```
    """

    def __init__(
        self,
        base_url: str | httpx.URL,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        middlewares: Iterable[Middleware] = (),
        timeout: float | httpx.Timeout | None = DEFAULT_TIMEOUT,
    ) -> None:
        self._base_url = parse_base_path(base_url)
        self._transport = MiddlewareTransport(
            wrapped_transport=transport if transport is not None else httpx.AsyncHTTPTransport(),
            middlewares=middlewares,
        )
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            transport=self._transport,
            timeout=timeout,
            headers={"accept": "application/json", "user-agent": USER_AGENT},
        )

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    @property
    def middlewares(self) -> tuple[Middleware, ...]:
        return self._transport.middlewares

    @property
    def transport(self) -> httpx.AsyncBaseTransport:
        """The transport that finally sends requests, below the middleware chain."""
        return self._transport.wrapped_transport

    @property
    def timeout(self) -> httpx.Timeout:
        return self._http.timeout

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        operation_id: str,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send one operation through the middleware chain and transport.

        No retry and no status handling happen here. Transport errors and
        cancellation propagate to the caller unchanged.

        Args:
            operation_id: Identifier of the operation, visible to
                middlewares and transports via `operation_id_of`.
            method: HTTP method.
            path: Path relative to the base URL, e.g. ``"/tip"``.
            params: Query parameters.
            json: JSON request body.

        Returns:
            The HTTP response, whatever its status.
        """
        logger.debug(f"Sending {operation_id}: {method} {path}")
        return await self._http.request(
            method,
            path,
            params=params,
            json=json,
            extensions={OPERATION_ID_EXTENSION: operation_id},
        )

    async def tip(self) -> list[Tip]:
        """Get the tip of the chain."""
        data = await self._fetch_list("tip", "GET", "/tip")
        return [Tip.from_dict(item) for item in data]

    async def genesis(self) -> list[Genesis]:
        """Get the genesis parameters of the network."""
        data = await self._fetch_list("genesis", "GET", "/genesis")
        return [Genesis.from_dict(item) for item in data]

    async def totals(
        self, epoch_no: int | None = None, *, limit: int | None = None, offset: int | None = None
    ) -> list[Totals]:
        """Get supply, treasury, rewards and reserves, for one epoch or all of them."""
        params = _paging(limit, offset)
        if epoch_no is not None:
            params["_epoch_no"] = _require_epoch(epoch_no)
        data = await self._fetch_list("totals", "GET", "/totals", params=params)
        return [Totals.from_dict(item) for item in data]

    async def param_updates(self, *, limit: int | None = None, offset: int | None = None) -> list[dict[str, Any]]:
        """Get all parameter update proposals submitted to the chain."""
        return await self._fetch_list("param_updates", "GET", "/param_updates", params=_paging(limit, offset))

    async def cli_protocol_params(self) -> dict[str, Any]:
        """Get the current protocol parameters as returned by cardano-cli."""
        data = await self._fetch("cli_protocol_params", "GET", "/cli_protocol_params")
        if not isinstance(data, dict):
            raise UnexpectedResponseError(f"cli_protocol_params returned {type(data).__name__}, expected an object")
        return data

    async def epoch_info(
        self,
        epoch_no: int | None = None,
        include_next_epoch: bool = False,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        """Get epoch information, for one epoch or all of them."""
        params = _paging(limit, offset)
        if epoch_no is not None:
            params["_epoch_no"] = _require_epoch(epoch_no)
        if include_next_epoch:
            params["_include_next_epoch"] = "true"
        return await self._fetch_list("epoch_info", "GET", "/epoch_info", params=params)

    async def block_info(self, block_hashes: Sequence[str]) -> list[dict[str, Any]]:
        """Get detailed information about specific blocks."""
        body = {"_block_hashes": _require_hashes(block_hashes, "block_hashes")}
        return await self._fetch_list("block_info", "POST", "/block_info", json=body)

    async def tx_status(self, tx_hashes: Sequence[str]) -> list[dict[str, Any]]:
        """Get the number of block confirmations for transactions."""
        body = {"_tx_hashes": _require_hashes(tx_hashes, "tx_hashes")}
        return await self._fetch_list("tx_status", "POST", "/tx_status", json=body)

    async def address_info(self, addresses: Sequence[str]) -> list[dict[str, Any]]:
        """Get balance, stake address and UTxOs of payment addresses."""
        body = {"_addresses": _require_prefixed(addresses, "addresses", "addr")}
        return await self._fetch_list("address_info", "POST", "/address_info", json=body)

    async def account_info(self, stake_addresses: Sequence[str]) -> list[dict[str, Any]]:
        """Get status, balances and delegation of stake addresses."""
        body = {"_stake_addresses": _require_prefixed(stake_addresses, "stake_addresses", "stake")}
        return await self._fetch_list("account_info", "POST", "/account_info", json=body)

    async def _fetch(self, operation_id: str, method: str, path: str, **kwargs: Any) -> Any:
        response = await self.request(operation_id, method, path, **kwargs)
        raise_for_status(response)
        try:
            return response.json()
        except ValueError as e:
            raise UnexpectedResponseError(
                f"{operation_id} returned a body that is not JSON",
                status_code=response.status_code,
                response=response,
            ) from e

    async def _fetch_list(self, operation_id: str, method: str, path: str, **kwargs: Any) -> list[dict[str, Any]]:
        data = await self._fetch(operation_id, method, path, **kwargs)
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise UnexpectedResponseError(f"{operation_id} returned {type(data).__name__}, expected a list of objects")
        return data


def _paging(limit: int | None, offset: int | None) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for name, value in (("limit", limit), ("offset", offset)):
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise KoiosValueError(f"{name} must be a non-negative integer, got {value!r}")
        params[name] = value
    return params


def _require_epoch(epoch_no: int) -> int:
    if isinstance(epoch_no, bool) or not isinstance(epoch_no, int) or epoch_no < 0:
        raise KoiosValueError(f"epoch_no must be a non-negative integer, got {epoch_no!r}")
    return epoch_no


def _require_list(values: Sequence[str], name: str) -> list[str]:
    # A bare string is a Sequence too; it would be sent as one item per character
    if isinstance(values, str) or not values:
        raise KoiosValueError(f"{name} must be a non-empty list of strings")
    return list(values)


def _require_hashes(values: Sequence[str], name: str) -> list[str]:
    values = _require_list(values, name)
    for value in values:
        if not isinstance(value, str) or not _HASH_PATTERN.fullmatch(value):
            raise KoiosValueError(f"Invalid hash in {name}: {value!r} (expected 64 hex characters)")
    return values


def _require_prefixed(values: Sequence[str], name: str, prefix: str) -> list[str]:
    values = _require_list(values, name)
    for value in values:
        if not isinstance(value, str) or not value.startswith(prefix):
            raise KoiosValueError(
                f"Invalid entry in {name}: {value!r} (expected a bech32 string starting with '{prefix}')"
            )
    return values
