from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from poolscan.constants import UNISWAP_V3_FACTORY, UNISWAP_V3_FACTORY_START_BLOCK
from poolscan.core.errors import ConfigError

RPC_URL_ENV_VARS = ("INFURA_URL", "RPC_URL")


@dataclass(frozen=True)
class ScanConfig:
    """Configuration for one pool scan run."""

    rpc_url: str
    factory_address: str = UNISWAP_V3_FACTORY
    start_block: int = UNISWAP_V3_FACTORY_START_BLOCK
    out_path: Path = Path("pools.csv")
    progress_every: int = 10
    timeout_s: int = 20
    batch_rows: int = 1_000


def resolve_rpc_url(explicit: str | None = None, *, dotenv_path: str | Path | None = None) -> str:
    """Return the endpoint URL from `explicit` or the environment.

    A `.env` file is loaded first (existing variables win); without an
    explicit `dotenv_path` it is searched from the working directory
    upward. Raises `ConfigError` when no URL is configured.
    """
    if explicit:
        return explicit
    load_dotenv(dotenv_path=dotenv_path or find_dotenv(usecwd=True))
    for name in RPC_URL_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value
    raise ConfigError(f"no RPC endpoint configured; pass --rpc or set {' / '.join(RPC_URL_ENV_VARS)}")
