"""Lightweight JSON-RPC client for Ethereum-compatible nodes.

This module provides:
- `RPC`: an async client with sane timeouts/connection limits
- `eth_getLogs` over a `LogFilterSpec`, returning `EventLog` records
- `eth_call` helpers reading `string` methods of token contracts

Error mapping:
- transport / malformed response on log fetch → `ChainConnectionError`
- JSON-RPC error on log fetch → `LogFilterError`
- any failure of a token call → `MetadataResolutionError`
"""

from __future__ import annotations

import itertools
from typing import Any

import httpx
from eth_utils import function_signature_to_4byte_selector

from poolscan.core.errors import ChainConnectionError, LogFilterError, MetadataResolutionError
from poolscan.core.filters import LogFilterSpec
from poolscan.core.models import EventLog
from poolscan.decoding.utils import decode_abi_string


class JsonRpcError(RuntimeError):
    """Error object returned by the node."""

    def __init__(self, code: Any, message: Any) -> None:
        super().__init__(f"RPC error: {code} {message}")
        self.code = code
        self.message = message


def _opt_hex_int(v: Any) -> int | None:
    if v is None:
        return None
    return int(v, 16) if isinstance(v, str) else int(v)


def parse_log(rl: dict[str, Any]) -> EventLog:
    """Map one `eth_getLogs` result entry onto an `EventLog`."""
    topics = tuple((t if isinstance(t, str) else t.decode()).lower() for t in rl.get("topics", []))
    return EventLog(
        address=rl["address"].lower(),
        topics=topics,
        data_hex=str(rl.get("data") or "0x"),
        block_number=_opt_hex_int(rl.get("blockNumber")),
        tx_hash=(rl.get("transactionHash") or "").lower(),
        log_index=_opt_hex_int(rl.get("logIndex")),
    )


class RPC:
    """Minimal async RPC client.

    Parameters
    ----------
    url : str
        RPC endpoint URL.
    timeout_s : int
        Per-operation timeout in seconds (connect/read/write).
    max_connections : int
        Maximum concurrent connections to keep in the pool.
    transport : httpx.AsyncBaseTransport | None
        Optional transport override (tests use `httpx.MockTransport`).
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_s: int = 20,
        max_connections: int = 16,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self._ids = itertools.count(1)
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=timeout_s,
                read=timeout_s,
                write=timeout_s,
                pool=max(30, timeout_s * 3),
            ),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max(1, max_connections // 2),
            ),
            http2=transport is None,
            transport=transport,
        )

    async def _request(self, method: str, params: list[Any]) -> Any:
        """POST one JSON-RPC call and return its `result`.

        Raises `httpx.HTTPError` on transport failures, `ValueError` on a
        malformed body and `JsonRpcError` when the node answers with an error.
        """
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        r = await self.client.post(self.url, json=payload)
        r.raise_for_status()
        data = r.json()
        if not isinstance(data, dict):
            raise ValueError(f"unexpected JSON-RPC body: {data!r}")
        if "error" in data:
            e = data["error"]
            if isinstance(e, dict):
                raise JsonRpcError(e.get("code"), e.get("message"))
            raise JsonRpcError(None, e)
        return data.get("result")

    async def get_logs(self, log_filter: LogFilterSpec) -> list[EventLog]:
        """Fetch every log matching `log_filter` in one call."""
        try:
            result = await self._request("eth_getLogs", [log_filter.to_rpc_params()])
        except JsonRpcError as e:
            raise LogFilterError(str(e)) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ChainConnectionError(f"eth_getLogs failed: {e}") from e

        try:
            return [parse_log(rl) for rl in result or []]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ChainConnectionError(f"malformed log in eth_getLogs result: {e}") from e

    async def eth_call(self, to: str, data: str) -> bytes:
        """Run a read-only call against `to` at the latest block."""
        result = await self._request("eth_call", [{"to": to, "data": data}, "latest"])
        if not isinstance(result, str):
            raise ValueError(f"unexpected eth_call result: {result!r}")
        h = result[2:] if result.lower().startswith("0x") else result
        return bytes.fromhex(h)

    async def call_string(self, address: str, method: str) -> str:
        """Call a no-argument method returning `string` (or legacy `bytes32`)."""
        selector = "0x" + function_signature_to_4byte_selector(method).hex()
        try:
            raw = await self.eth_call(address, selector)
            if not raw:
                raise ValueError("empty return data")
            return decode_abi_string(raw)
        except (httpx.HTTPError, JsonRpcError, ValueError) as e:
            raise MetadataResolutionError(f"{method} on {address} failed: {e}") from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()
