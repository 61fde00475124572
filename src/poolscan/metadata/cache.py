"""Per-run token metadata cache.

`TokenMetadataCache.resolve` memoizes `name()` / `symbol()` lookups by token
address. Entries are never evicted: token metadata is treated as immutable
for the duration of a run.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict

from eth_utils import to_checksum_address  # type: ignore[attr-defined]

from poolscan.constants import NAME_METHOD, SYMBOL_METHOD
from poolscan.core.errors import MetadataResolutionError
from poolscan.core.interfaces import ITokenCaller
from poolscan.core.models import MetadataField, TokenMetadata

logger = logging.getLogger(__name__)


class TokenMetadataCache:
    """Resolve token metadata at most once per address.

    Concurrent `resolve` calls for the same address serialize on a
    per-address lock; the entry is only stored once both fields are known.
    """

    def __init__(self, caller: ITokenCaller) -> None:
        self._caller = caller
        self._entries: dict[str, TokenMetadata] = {}
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self.resolutions = 0

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and to_checksum_address(address) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, address: str) -> TokenMetadata | None:
        """Return the cached entry for `address`, without resolving."""
        return self._entries.get(to_checksum_address(address))

    async def resolve(self, address: str) -> TokenMetadata:
        """Return metadata for `address`, calling the token contract on first use."""
        key = to_checksum_address(address)
        cached = self._entries.get(key)
        if cached is not None:
            return cached

        async with self._locks[key]:
            cached = self._entries.get(key)
            if cached is not None:
                return cached

            name, symbol = await asyncio.gather(
                self._call(key, NAME_METHOD),
                self._call(key, SYMBOL_METHOD),
            )
            meta = TokenMetadata(address=key, name_field=name, symbol_field=symbol)
            self._entries[key] = meta
            self.resolutions += 1

        self._locks.pop(key, None)
        return meta

    async def _call(self, address: str, method: str) -> MetadataField:
        try:
            return MetadataField.ok(await self._caller.call_string(address, method))
        except MetadataResolutionError as e:
            logger.info("%s: %s unavailable, using empty value (%s)", address, method, e)
            return MetadataField.failed(str(e))
