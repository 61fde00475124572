"""Event schemas known to poolscan."""

from __future__ import annotations

from poolscan.abi_events import AbiEvent, get_event_spec
from poolscan.decoding.specs import EventSpec

# Uniswap v3 factory: PoolCreated(address indexed token0, address indexed token1,
#                                 uint24 indexed fee, int24 tickSpacing, address pool)
POOL_CREATED_ABI = {
    "anonymous": False,
    "inputs": [
        {"indexed": True, "internalType": "address", "name": "token0", "type": "address"},
        {"indexed": True, "internalType": "address", "name": "token1", "type": "address"},
        {"indexed": True, "internalType": "uint24", "name": "fee", "type": "uint24"},
        {"indexed": False, "internalType": "int24", "name": "tickSpacing", "type": "int24"},
        {"indexed": False, "internalType": "address", "name": "pool", "type": "address"},
    ],
    "name": "PoolCreated",
    "type": "event",
}


def make_pool_created_spec() -> EventSpec:
    """Decoding rule for the Uniswap v3 `PoolCreated` event."""
    return get_event_spec(AbiEvent.model_validate(POOL_CREATED_ABI))
