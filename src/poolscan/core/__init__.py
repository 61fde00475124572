"""Core data models, configuration, errors and collaborator interfaces.

This package provides:
- Data models (EventLog, PoolCreatedEvent, TokenMetadata, PoolInfoRecord)
- The log filter descriptor (LogFilterSpec)
- Run configuration (ScanConfig)
"""

from poolscan.core.config import ScanConfig
from poolscan.core.filters import LogFilterSpec
from poolscan.core.models import EventLog, MetadataField, PoolCreatedEvent, PoolInfoRecord, TokenMetadata

__all__ = [
    "ScanConfig",
    "LogFilterSpec",
    "EventLog",
    "MetadataField",
    "PoolCreatedEvent",
    "PoolInfoRecord",
    "TokenMetadata",
]
