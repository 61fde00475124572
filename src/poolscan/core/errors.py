"""Error kinds raised across the scan.

Fatal errors (`ConfigError`, `ChainConnectionError`, `LogFilterError`,
`SerializationError`) unwind the whole run. `DecodeError` and
`MetadataResolutionError` are recoverable and are handled by the component
that raised them.
"""

from __future__ import annotations


class PoolscanError(Exception):
    """Base class for every error raised by poolscan."""


class ConfigError(PoolscanError):
    """Process configuration is missing or invalid."""


class ChainConnectionError(PoolscanError):
    """The chain node could not be reached or answered garbage."""


class LogFilterError(PoolscanError):
    """The node rejected the log filter."""


class DecodeError(PoolscanError):
    """A raw log does not match the expected event schema."""


class MetadataResolutionError(PoolscanError):
    """A token contract call failed or returned invalid data."""


class SerializationError(PoolscanError):
    """The output sink could not encode or persist the records."""


class UnresolvedTokenError(PoolscanError, KeyError):
    """A record referenced a token that is not in the metadata cache."""
