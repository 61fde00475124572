"""Core data models for the pool scan.

This module defines:
- `EventLog`: raw log record as returned by the node.
- `PoolCreatedEvent`: typed `PoolCreated` event decoded from one log.
- `MetadataField` / `TokenMetadata`: best-effort token metadata.
- `PoolInfoRecord`: the output row joining one event with two tokens.

Design notes
------------
- Addresses are stored in checksum form everywhere past decoding.
- `MetadataField` keeps "resolved to an empty string" apart from
  "call failed, defaulted to an empty string".
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import TYPE_CHECKING, Any

from poolscan.core.errors import UnresolvedTokenError

if TYPE_CHECKING:
    from poolscan.metadata.cache import TokenMetadataCache

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


# === RPC record ===


@dataclass(slots=True, frozen=True)
class EventLog:
    """Raw log as fetched from RPC, minimally normalized."""

    address: str  # lowercased 0x...
    topics: tuple[str, ...]  # lowercased 0x...
    data_hex: str  # "0x..."
    block_number: int | None = None  # None for pending logs
    tx_hash: str = ""
    log_index: int | None = None

    @property
    def data(self) -> bytes:
        """Return the data payload as bytes (raises ValueError on bad hex)."""
        h = self.data_hex[2:] if self.data_hex.lower().startswith("0x") else self.data_hex
        return bytes.fromhex(h) if h else b""


# === Decoded event ===


@dataclass(slots=True)
class PoolCreatedEvent:
    """`PoolCreated(token0, token1, fee, tickSpacing, pool)` plus its block."""

    token0: str = ZERO_ADDRESS
    token1: str = ZERO_ADDRESS
    fee: int = 0
    tick_spacing: int = 0
    pool: str = ZERO_ADDRESS
    block_number: int = 0


# === Token metadata ===


@dataclass(slots=True, frozen=True)
class MetadataField:
    """Value-or-empty result of one token contract call."""

    value: str
    resolved: bool
    error: str | None = None

    @classmethod
    def ok(cls, value: str) -> MetadataField:
        return cls(value=value, resolved=True)

    @classmethod
    def failed(cls, error: str) -> MetadataField:
        return cls(value="", resolved=False, error=error)


@dataclass(slots=True, frozen=True)
class TokenMetadata:
    """Display name and ticker of one token contract."""

    address: str
    name_field: MetadataField
    symbol_field: MetadataField

    @property
    def name(self) -> str:
        return self.name_field.value

    @property
    def symbol(self) -> str:
        return self.symbol_field.value

    @property
    def complete(self) -> bool:
        """True when both calls resolved."""
        return self.name_field.resolved and self.symbol_field.resolved


# === Output row ===


@dataclass(slots=True, frozen=True)
class PoolInfoRecord:
    """One output row; column order follows field order."""

    pool_addr: str
    token0_name: str
    token0_symbol: str
    token1_name: str
    token1_symbol: str
    fee: int
    token0_addr: str
    token1_addr: str
    block_number: int

    @classmethod
    def from_pool_created_event(
        cls,
        event: PoolCreatedEvent,
        cache: TokenMetadataCache,
    ) -> PoolInfoRecord:
        """Join an event with the cached metadata of both its tokens.

        Raises `UnresolvedTokenError` if either token is not cached yet.
        """
        token0 = cache.get(event.token0)
        token1 = cache.get(event.token1)
        if token0 is None or token1 is None:
            missing = [addr for addr, meta in ((event.token0, token0), (event.token1, token1)) if meta is None]
            raise UnresolvedTokenError(f"token metadata not resolved for {', '.join(missing)}")

        return cls(
            pool_addr=event.pool,
            token0_name=token0.name,
            token0_symbol=token0.symbol,
            token1_name=token1.name,
            token1_symbol=token1.symbol,
            fee=event.fee,
            token0_addr=event.token0,
            token1_addr=event.token1,
            block_number=event.block_number,
        )

    @classmethod
    def column_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def to_row(self) -> dict[str, Any]:
        return asdict(self)
