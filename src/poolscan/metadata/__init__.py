"""Token metadata resolution and caching."""

from poolscan.metadata.cache import TokenMetadataCache

__all__ = ["TokenMetadataCache"]
