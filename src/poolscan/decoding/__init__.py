"""Event decoding.

This package provides:
- Event specification primitives (EventSpec, TopicFieldSpec, DataFieldSpec)
- Generic decoder translating raw logs into a name → value mapping
- The PoolCreated schema and its projection into PoolCreatedEvent
"""

from poolscan.decoding.decoder import decode_log, decode_pool_created, project_pool_created
from poolscan.decoding.registries import make_pool_created_spec
from poolscan.decoding.specs import DataFieldSpec, EventSpec, TopicFieldSpec

__all__ = [
    "decode_log",
    "decode_pool_created",
    "project_pool_created",
    "make_pool_created_spec",
    "DataFieldSpec",
    "EventSpec",
    "TopicFieldSpec",
]
