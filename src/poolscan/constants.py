from __future__ import annotations

# Uniswap v3 factory on Ethereum mainnet and the block it was deployed in
UNISWAP_V3_FACTORY = "0x1F98431c8aD98523631AE4a59f267346ea31F984"
UNISWAP_V3_FACTORY_START_BLOCK = 12_369_621

# Read-only ERC-20 metadata methods
NAME_METHOD = "name()"
SYMBOL_METHOD = "symbol()"
