"""Event decoder: raw log → name/value mapping → `PoolCreatedEvent`.

Decoding is two-step. `decode_log` checks the log's shape against an
`EventSpec` and parses every declared parameter into a mapping keyed by name.
`project_pool_created` then picks the names it knows, ignores the rest, and
fails fast when a required one is missing.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from poolscan.core.errors import DecodeError
from poolscan.core.models import EventLog, PoolCreatedEvent
from poolscan.decoding.specs import EventSpec
from poolscan.decoding.utils import parse_word, topic_bytes, word_at

# decoded parameter name → PoolCreatedEvent attribute
POOL_CREATED_FIELDS: dict[str, str] = {
    "token0": "token0",
    "token1": "token1",
    "fee": "fee",
    "tickSpacing": "tick_spacing",
    "pool": "pool",
}


# ---------- shape checks ----------


def _check_topics(topics: tuple[str, ...], spec: EventSpec) -> list[bytes]:
    if not topics:
        raise DecodeError("log has no topics")
    if topics[0].lower() != spec.topic0.lower():
        raise DecodeError(f"topic0 {topics[0]} is not {spec.name}")
    if len(topics) != spec.n_topics:
        raise DecodeError(f"{spec.name} expects {spec.n_topics} topics, got {len(topics)}")
    return [topic_bytes(t) for t in topics]


def _check_data(log: EventLog, spec: EventSpec) -> bytes:
    try:
        data = log.data
    except ValueError as e:
        raise DecodeError(f"data is not valid hex: {e}") from e
    if len(data) != spec.data_size:
        raise DecodeError(f"{spec.name} expects {spec.data_size} data bytes, got {len(data)}")
    return data


# ---------- generic decoder ----------


def decode_log(log: EventLog, spec: EventSpec) -> dict[str, Any]:
    """Decode raw log (topics + data) into a mapping from parameter name to value.

    Raises `DecodeError` if the log does not match `spec`.
    """
    topics = _check_topics(log.topics, spec)
    data = _check_data(log, spec)

    values: dict[str, Any] = {}
    for tf in spec.topic_fields:
        values[tf.name] = parse_word(topics[tf.index], tf.type)
    for df in spec.data_fields:
        values[df.name] = parse_word(word_at(data, df.word_index), df.type)
    return values


# ---------- PoolCreated projection ----------


def project_pool_created(values: Mapping[str, Any], block_number: int | None) -> PoolCreatedEvent:
    """Project decoded values onto a `PoolCreatedEvent`.

    Unknown names are ignored. The block number comes from the log itself;
    a missing one (pending log) is recorded as 0.
    """
    missing = [name for name in POOL_CREATED_FIELDS if name not in values]
    if missing:
        raise DecodeError(f"PoolCreated is missing required parameters: {missing}")

    event = PoolCreatedEvent(block_number=block_number or 0)
    for name, value in values.items():
        attr = POOL_CREATED_FIELDS.get(name)
        if attr is None:
            continue
        setattr(event, attr, value)
    return event


def decode_pool_created(log: EventLog, spec: EventSpec) -> PoolCreatedEvent:
    """Decode one raw log into a `PoolCreatedEvent` (raises `DecodeError`)."""
    return project_pool_created(decode_log(log, spec), log.block_number)
