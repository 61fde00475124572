"""Build an `EventSpec` from an ABI event definition.

The ABI event is validated with pydantic; indexed inputs become topic fields
(topic 1..n), the others become data words (word 0..m).
"""

import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Literal

from eth_utils.abi import event_signature_to_log_topic
from pydantic import BaseModel

from poolscan.decoding.specs import DataFieldSpec, EventSpec, TopicFieldSpec


class AbiInput(BaseModel):
    indexed: bool = False
    internalType: str | None = None
    name: str
    type: str


class AbiEvent(BaseModel):
    anonymous: bool = False
    inputs: Sequence[AbiInput]
    name: str
    type: Literal["event"] = "event"


def get_event_signature(event: AbiEvent):
    return f"{event.name}({','.join(event_input.type for event_input in event.inputs)})"


def get_event_topic0(event: AbiEvent):
    return "0x" + event_signature_to_log_topic(get_event_signature(event)).hex()


def get_event_topic_field_specs(event: AbiEvent):
    return [
        TopicFieldSpec(event_input.name, event_input_idx + 1, event_input.type)
        for event_input_idx, event_input in enumerate(
            [event_input for event_input in event.inputs if event_input.indexed]
        )
    ]


def get_event_data_field_specs(event: AbiEvent):
    return [
        DataFieldSpec(event_input.name, event_input_idx, event_input.type)
        for event_input_idx, event_input in enumerate(
            [event_input for event_input in event.inputs if not event_input.indexed]
        )
    ]


def get_event_spec(event: AbiEvent) -> EventSpec:
    return EventSpec(
        topic0=get_event_topic0(event),
        name=event.name,
        topic_fields=get_event_topic_field_specs(event),
        data_fields=get_event_data_field_specs(event),
    )


AbiJson = Iterable[dict[str, Any]]
AbiSpec = AbiJson | Path


def _load_abi(abi: AbiSpec) -> AbiJson:
    if isinstance(abi, Path):
        return json.loads(abi.read_text())
    return abi


def get_events_from_abi(abi: AbiSpec) -> dict[str, AbiEvent]:
    abi = _load_abi(abi)
    return {entry["name"]: AbiEvent.model_validate(entry) for entry in abi if entry["type"] == "event"}


def get_event_spec_from_abi(abi: AbiSpec, name: str) -> EventSpec:
    events = get_events_from_abi(abi)
    if name not in events:
        raise KeyError(f"event {name!r} not found in ABI")
    return get_event_spec(events[name])
