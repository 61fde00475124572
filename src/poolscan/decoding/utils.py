"""Decoding utilities: ABI word access and typed, width-checked parsers."""

from __future__ import annotations

from typing import Any

from eth_utils import to_checksum_address  # type: ignore[attr-defined]

from poolscan.core.errors import DecodeError


def word_at(data: bytes, i: int) -> bytes:
    """Return the i-th 32-byte ABI word (zero-padded if out-of-range)."""
    start = 32 * i
    end = start + 32
    return data[start:end] if start < len(data) else b"\x00" * 32


def topic_bytes(topic_hex: str) -> bytes:
    """Return the 32 raw bytes of one topic hash."""
    h = topic_hex[2:] if topic_hex.lower().startswith("0x") else topic_hex
    try:
        raw = bytes.fromhex(h)
    except ValueError as e:
        raise DecodeError(f"topic is not valid hex: {topic_hex!r}") from e
    if len(raw) != 32:
        raise DecodeError(f"topic must be 32 bytes, got {len(raw)}")
    return raw


def _bits(typ: str, prefix: str) -> int:
    suffix = typ[len(prefix):]
    return int(suffix) if suffix else 256


def parse_word(word: bytes, typ: str) -> Any:
    """Parse one 32-byte ABI word according to the declared type.

    Values that do not fit the declared width raise `DecodeError`.
    """
    if len(word) != 32:
        raise DecodeError(f"ABI word must be 32 bytes, got {len(word)}")
    if typ == "address":
        if any(word[:12]):
            raise DecodeError("address word has non-zero padding")
        return to_checksum_address("0x" + word[-20:].hex())
    if typ.startswith("uint"):
        bits = _bits(typ, "uint")
        v = int.from_bytes(word, "big", signed=False)
        if v >= 2**bits:
            raise DecodeError(f"value {v} overflows {typ}")
        return v
    if typ.startswith("int"):
        # two's complement over the full word, then range-check the declared width
        bits = _bits(typ, "int")
        v = int.from_bytes(word, "big", signed=True)
        if not -(2 ** (bits - 1)) <= v < 2 ** (bits - 1):
            raise DecodeError(f"value {v} overflows {typ}")
        return v
    # Unknown type: return raw hex string
    return "0x" + word.hex()


def decode_abi_string(raw: bytes) -> str:
    """Decode the return value of a `string` (or legacy `bytes32`) call.

    Raises ValueError when the payload is neither.
    """
    if len(raw) == 32:
        # bytes32 tokens (e.g. MKR): right-padded with NULs
        return raw.rstrip(b"\x00").decode("utf-8")
    if len(raw) < 64 or len(raw) % 32:
        raise ValueError(f"unexpected return size {len(raw)}")
    offset = int.from_bytes(word_at(raw, 0), "big")
    if offset % 32 or offset + 32 > len(raw):
        raise ValueError(f"bad string offset {offset}")
    length = int.from_bytes(raw[offset : offset + 32], "big")
    start = offset + 32
    if start + length > len(raw):
        raise ValueError(f"string length {length} exceeds payload")
    return raw[start : start + length].decode("utf-8")
