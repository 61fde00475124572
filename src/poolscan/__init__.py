from __future__ import annotations

from .constants import UNISWAP_V3_FACTORY, UNISWAP_V3_FACTORY_START_BLOCK
from .core.filters import LogFilterSpec
from .core.models import EventLog, MetadataField, PoolCreatedEvent, PoolInfoRecord, TokenMetadata
from .core.use_cases.enrich_pools import EnrichmentPipeline
from .decoding.decoder import decode_log, decode_pool_created
from .decoding.registries import make_pool_created_spec
from .metadata.cache import TokenMetadataCache

__all__ = [
    "EnrichmentPipeline",
    "EventLog",
    "LogFilterSpec",
    "MetadataField",
    "PoolCreatedEvent",
    "PoolInfoRecord",
    "TokenMetadata",
    "TokenMetadataCache",
    "decode_log",
    "decode_pool_created",
    "make_pool_created_spec",
    "UNISWAP_V3_FACTORY",
    "UNISWAP_V3_FACTORY_START_BLOCK",
]
