from collections.abc import Iterable
from unittest.mock import AsyncMock

import pytest
from eth_utils import to_checksum_address

from poolscan.core.errors import MetadataResolutionError
from poolscan.core.models import EventLog
from poolscan.decoding.registries import make_pool_created_spec
from poolscan.decoding.specs import EventSpec

USDC = to_checksum_address("0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48")
WETH = to_checksum_address("0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2")
DAI = to_checksum_address("0x6b175474e89094c44da98b954eedeac495271d0f")
POOL_A = to_checksum_address("0x88e6a0c2ddd26feeb64f039a2c41296fcb3f5640")
POOL_B = to_checksum_address("0xc2e9f25be6257c210d7adf0d4cd6e3e881ba25f8")


def _word(value: int) -> str:
    return (value % 2**256).to_bytes(32, "big").hex()


def _addr_word(address: str) -> str:
    return address[2:].lower().rjust(64, "0")


def make_pool_created_log(
    spec: EventSpec,
    *,
    token0: str,
    token1: str,
    fee: int,
    tick_spacing: int,
    pool: str,
    block_number: int | None = 12_370_000,
    log_index: int = 0,
) -> EventLog:
    """Encode one PoolCreated log the way a node returns it."""
    topics = (
        spec.topic0,
        "0x" + _addr_word(token0),
        "0x" + _addr_word(token1),
        "0x" + _word(fee),
    )
    data_hex = "0x" + _word(tick_spacing) + _addr_word(pool)
    return EventLog(
        address="0x1f98431c8ad98523631ae4a59f267346ea31f984",
        topics=topics,
        data_hex=data_hex,
        block_number=block_number,
        tx_hash=f"0x{log_index:064x}",
        log_index=log_index,
    )


class FakeTokenCaller:
    """In-memory token caller recording every call."""

    def __init__(self, tokens: dict[str, tuple[str, str]], failing: Iterable[tuple[str, str]] = ()) -> None:
        self.tokens = {addr.lower(): meta for addr, meta in tokens.items()}
        self.failing = {(addr.lower(), method) for addr, method in failing}
        self.calls: list[tuple[str, str]] = []

    async def call_string(self, address: str, method: str) -> str:
        self.calls.append((address, method))
        if (address.lower(), method) in self.failing or address.lower() not in self.tokens:
            raise MetadataResolutionError(f"{method} reverted on {address}")
        name, symbol = self.tokens[address.lower()]
        return name if method == "name()" else symbol


@pytest.fixture
def pool_created_spec() -> EventSpec:
    return make_pool_created_spec()


@pytest.fixture
def token_caller() -> FakeTokenCaller:
    return FakeTokenCaller(
        {
            USDC: ("USD Coin", "USDC"),
            WETH: ("Wrapped Ether", "WETH"),
            DAI: ("Dai Stablecoin", "DAI"),
        }
    )


@pytest.fixture
def mock_rpc():
    rpc = AsyncMock()
    rpc.get_logs = AsyncMock(return_value=[])
    rpc.call_string = AsyncMock(return_value="")
    rpc.aclose = AsyncMock()
    return rpc
