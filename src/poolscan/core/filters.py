"""Log filter descriptor for the historical `eth_getLogs` scan."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def to_hex_block(x: int) -> str:
    """Return a 0x-prefixed hex block number."""
    return hex(x)


@dataclass(frozen=True)
class LogFilterSpec:
    """Select every log emitted by `address` from `from_block` to the chain head.

    There is no upper bound: the node resolves `"latest"` at query time.
    Inputs are not validated here, the node rejects malformed ones.
    """

    address: str
    from_block: int
    topic0: str | None = None

    def to_rpc_params(self) -> dict[str, Any]:
        """Build the filter object expected by `eth_getLogs`."""
        params: dict[str, Any] = {
            "address": self.address.lower(),
            "fromBlock": to_hex_block(self.from_block),
            "toBlock": "latest",
        }
        if self.topic0 is not None:
            params["topics"] = [self.topic0.lower()]
        return params
