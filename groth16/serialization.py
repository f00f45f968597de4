"""
groth16.serialization
=====================

Hex/bytes helpers and deterministic JSON output used by the JSON codec and the
command line tool.

Public API
----------
- hex_to_bytes(s, pad_odd_nibbles=False) -> bytes
- le_bytes32_from_hex(s) -> bytes
- dumps_canonical(obj) -> str

All functions are pure and side-effect free.

License: MIT
"""

from __future__ import annotations

import re
from typing import Any

import msgspec

from .fields import FIELD_BYTES

_HEX_RE = re.compile(r"(0x)?[0-9a-fA-F]*")


def hex_to_bytes(
    s: str,
    *,
    pad_odd_nibbles: bool = False,
) -> bytes:
    """
    Decode a hex string into bytes.

    If `pad_odd_nibbles` is set, an odd nibble count is left-padded with a
    single '0'; otherwise it raises ValueError.
    """
    if not isinstance(s, str):
        raise TypeError(f"hex_to_bytes: expected str, got {type(s).__name__}")
    if not _HEX_RE.fullmatch(s):
        raise ValueError("hex_to_bytes: non-hex characters present")
    hex_part = s[2:] if s.startswith("0x") else s
    if len(hex_part) % 2 != 0:
        if pad_odd_nibbles:
            hex_part = "0" + hex_part
        else:
            raise ValueError("hex_to_bytes: odd number of hex nibbles")
    return bytes.fromhex(hex_part)


def le_bytes32_from_hex(s: str) -> bytes:
    """
    Read a hex numeral as a 32-byte little-endian integer encoding.

    The numeral is big-endian text; after odd-nibble padding its bytes are
    left-padded to 32 bytes and reversed. More than 32 bytes is a ValueError.
    """
    raw = hex_to_bytes(s, pad_odd_nibbles=True)
    if len(raw) > FIELD_BYTES:
        raise ValueError(f"hex numeral is {len(raw)} bytes, at most {FIELD_BYTES} allowed")
    return raw.rjust(FIELD_BYTES, b"\x00")[::-1]


def dumps_canonical(obj: Any) -> str:
    """
    Deterministic compact JSON text: keys sorted, no whitespace, UTF-8.
    """
    return msgspec.json.encode(obj, order="sorted").decode("utf-8")


__all__ = [
    "hex_to_bytes",
    "le_bytes32_from_hex",
    "dumps_canonical",
]
