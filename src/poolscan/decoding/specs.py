"""Event specification primitives.

Defines lightweight dataclasses to describe how to decode one event:
- `TopicFieldSpec` / `DataFieldSpec`: typed sources for indexed topics / data words
- `EventSpec`: one event rule (topic0 + its fields)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TopicFieldSpec:
    """Describe one indexed topic field (by 0-based topic index and ABI type)."""

    name: str
    index: int
    type: str  # e.g., "address", "uint24", "int24"


@dataclass(frozen=True)
class DataFieldSpec:
    """Describe one 32-byte ABI word in the data section (0-based word index)."""

    name: str
    word_index: int
    type: str  # e.g., "address", "int24"


@dataclass(frozen=True)
class EventSpec:
    """One event decoding rule."""

    topic0: str
    name: str
    topic_fields: list[TopicFieldSpec]
    data_fields: list[DataFieldSpec]

    def __post_init__(self):
        names = [f.name for f in self.topic_fields] + [f.name for f in self.data_fields]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"{self.name} declares duplicate parameter names: {dupes}")
        for tf in self.topic_fields:
            if tf.index < 1:
                raise ValueError(f"{tf.name} topic index must be >= 1 (topic 0 is the signature)")

    @property
    def n_topics(self) -> int:
        """Expected topic count, signature included."""
        return 1 + len(self.topic_fields)

    @property
    def data_size(self) -> int:
        """Expected data length in bytes (static types only)."""
        return 32 * len(self.data_fields)

