import asyncio

import pytest
from conftest import DAI, USDC, WETH, FakeTokenCaller

from poolscan.core.models import MetadataField
from poolscan.metadata.cache import TokenMetadataCache


@pytest.mark.asyncio
async def test_resolve_miss_calls_name_and_symbol(token_caller: FakeTokenCaller) -> None:
    cache = TokenMetadataCache(token_caller)

    meta = await cache.resolve(USDC)

    assert meta.address == USDC
    assert meta.name == "USD Coin"
    assert meta.symbol == "USDC"
    assert meta.complete
    assert sorted(method for _, method in token_caller.calls) == ["name()", "symbol()"]
    assert cache.resolutions == 1
    assert USDC in cache


@pytest.mark.asyncio
async def test_resolve_is_idempotent(token_caller: FakeTokenCaller) -> None:
    cache = TokenMetadataCache(token_caller)

    first = await cache.resolve(WETH)
    calls_after_first = len(token_caller.calls)
    second = await cache.resolve(WETH.lower())

    assert second is first
    assert len(token_caller.calls) == calls_after_first
    assert cache.resolutions == 1
    assert len(cache) == 1


@pytest.mark.asyncio
async def test_failed_symbol_degrades_to_empty() -> None:
    caller = FakeTokenCaller({DAI: ("Dai Stablecoin", "DAI")}, failing=[(DAI, "symbol()")])
    cache = TokenMetadataCache(caller)

    meta = await cache.resolve(DAI)

    assert meta.name == "Dai Stablecoin"
    assert meta.symbol == ""
    assert meta.name_field == MetadataField.ok("Dai Stablecoin")
    assert not meta.symbol_field.resolved
    assert "symbol()" in (meta.symbol_field.error or "")
    assert not meta.complete


@pytest.mark.asyncio
async def test_empty_string_is_distinct_from_failure() -> None:
    caller = FakeTokenCaller({USDC: ("", "USDC")})
    cache = TokenMetadataCache(caller)

    meta = await cache.resolve(USDC)

    assert meta.name == ""
    assert meta.name_field.resolved
    assert meta.name_field.error is None


@pytest.mark.asyncio
async def test_unresponsive_token_still_resolves() -> None:
    caller = FakeTokenCaller({})
    cache = TokenMetadataCache(caller)

    meta = await cache.resolve(USDC)

    assert (meta.name, meta.symbol) == ("", "")
    assert cache.get(USDC) is meta


@pytest.mark.asyncio
async def test_concurrent_resolves_hit_token_once() -> None:
    class SlowCaller(FakeTokenCaller):
        async def call_string(self, address: str, method: str) -> str:
            await asyncio.sleep(0.01)
            return await super().call_string(address, method)

    caller = SlowCaller({USDC: ("USD Coin", "USDC")})
    cache = TokenMetadataCache(caller)

    results = await asyncio.gather(*(cache.resolve(USDC) for _ in range(5)))

    assert all(r is results[0] for r in results)
    assert len(caller.calls) == 2
    assert cache.resolutions == 1


def test_get_does_not_resolve(token_caller: FakeTokenCaller) -> None:
    cache = TokenMetadataCache(token_caller)

    assert cache.get(USDC) is None
    assert USDC not in cache
    assert token_caller.calls == []
