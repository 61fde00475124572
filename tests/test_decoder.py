import dataclasses

import pytest
from conftest import POOL_A, USDC, WETH, make_pool_created_log

from poolscan.abi_events import AbiEvent, get_event_spec
from poolscan.core.errors import DecodeError
from poolscan.decoding.decoder import decode_log, decode_pool_created, project_pool_created
from poolscan.decoding.registries import POOL_CREATED_ABI
from poolscan.decoding.specs import EventSpec
from poolscan.decoding.utils import parse_word


@pytest.fixture
def usdc_weth_log(pool_created_spec: EventSpec):
    return make_pool_created_log(
        pool_created_spec,
        token0=USDC,
        token1=WETH,
        fee=500,
        tick_spacing=10,
        pool=POOL_A,
        block_number=12_376_729,
    )


def test_decode_pool_created_success(pool_created_spec: EventSpec, usdc_weth_log) -> None:
    event = decode_pool_created(usdc_weth_log, pool_created_spec)

    assert event.token0 == USDC
    assert event.token1 == WETH
    assert event.fee == 500
    assert event.tick_spacing == 10
    assert event.pool == POOL_A
    assert event.block_number == 12_376_729


def test_decode_negative_tick_spacing(pool_created_spec: EventSpec) -> None:
    log = make_pool_created_log(pool_created_spec, token0=USDC, token1=WETH, fee=100, tick_spacing=-1, pool=POOL_A)

    assert decode_pool_created(log, pool_created_spec).tick_spacing == -1


def test_decode_missing_block_number_defaults_to_zero(pool_created_spec: EventSpec) -> None:
    log = make_pool_created_log(
        pool_created_spec, token0=USDC, token1=WETH, fee=3000, tick_spacing=60, pool=POOL_A, block_number=None
    )

    assert decode_pool_created(log, pool_created_spec).block_number == 0


def test_decode_log_returns_mapping_by_name(pool_created_spec: EventSpec, usdc_weth_log) -> None:
    values = decode_log(usdc_weth_log, pool_created_spec)

    assert values == {"token0": USDC, "token1": WETH, "fee": 500, "tickSpacing": 10, "pool": POOL_A}


def test_project_ignores_unknown_parameters() -> None:
    values = {"token0": USDC, "token1": WETH, "fee": 500, "tickSpacing": 10, "pool": POOL_A, "extra": 42}

    event = project_pool_created(values, 7)

    assert event.pool == POOL_A
    assert event.block_number == 7
    assert "extra" not in {f.name for f in dataclasses.fields(event)}


def test_decode_with_extra_schema_parameter(usdc_weth_log) -> None:
    # Same event with one more (unknown) data word appended to the schema
    abi = dict(POOL_CREATED_ABI)
    abi["inputs"] = list(POOL_CREATED_ABI["inputs"]) + [{"indexed": False, "name": "salt", "type": "uint256"}]
    spec = get_event_spec(AbiEvent.model_validate(abi))
    log = dataclasses.replace(
        usdc_weth_log,
        topics=(spec.topic0,) + usdc_weth_log.topics[1:],
        data_hex=usdc_weth_log.data_hex + "00" * 31 + "2a",
    )

    event = decode_pool_created(log, spec)

    assert event.token0 == USDC
    assert event.pool == POOL_A


def test_decode_missing_required_parameter(usdc_weth_log) -> None:
    abi = dict(POOL_CREATED_ABI)
    abi["inputs"] = [i for i in POOL_CREATED_ABI["inputs"] if i["name"] != "pool"]
    spec = get_event_spec(AbiEvent.model_validate(abi))
    log = dataclasses.replace(
        usdc_weth_log,
        topics=(spec.topic0,) + usdc_weth_log.topics[1:],
        data_hex=usdc_weth_log.data_hex[: 2 + 64],
    )

    with pytest.raises(DecodeError, match="pool"):
        decode_pool_created(log, spec)


def test_decode_short_data_fails(pool_created_spec: EventSpec, usdc_weth_log) -> None:
    log = dataclasses.replace(usdc_weth_log, data_hex=usdc_weth_log.data_hex[:-2])

    with pytest.raises(DecodeError, match="data bytes"):
        decode_pool_created(log, pool_created_spec)


def test_decode_wrong_topic_count_fails(pool_created_spec: EventSpec, usdc_weth_log) -> None:
    log = dataclasses.replace(usdc_weth_log, topics=usdc_weth_log.topics[:3])

    with pytest.raises(DecodeError, match="topics"):
        decode_pool_created(log, pool_created_spec)


def test_decode_unknown_topic0_fails(pool_created_spec: EventSpec, usdc_weth_log) -> None:
    log = dataclasses.replace(usdc_weth_log, topics=("0x" + "ab" * 32,) + usdc_weth_log.topics[1:])

    with pytest.raises(DecodeError, match="PoolCreated"):
        decode_pool_created(log, pool_created_spec)


def test_decode_dirty_address_padding_fails(pool_created_spec: EventSpec, usdc_weth_log) -> None:
    dirty = "0x" + "ff" * 12 + usdc_weth_log.topics[1][-40:]
    log = dataclasses.replace(usdc_weth_log, topics=(usdc_weth_log.topics[0], dirty) + usdc_weth_log.topics[2:])

    with pytest.raises(DecodeError, match="padding"):
        decode_pool_created(log, pool_created_spec)


def test_decode_fee_overflow_fails(pool_created_spec: EventSpec) -> None:
    log = make_pool_created_log(
        pool_created_spec, token0=USDC, token1=WETH, fee=2**24, tick_spacing=60, pool=POOL_A
    )

    with pytest.raises(DecodeError, match="uint24"):
        decode_pool_created(log, pool_created_spec)


def test_parse_word_unknown_type_is_raw_hex() -> None:
    word = (1).to_bytes(32, "big")

    assert parse_word(word, "bool") == "0x" + word.hex()
