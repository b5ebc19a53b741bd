"""Lowercase hex codec used to package encoded bytes for transport."""

from __future__ import annotations

import binascii

from nem_sdk.errors import InvalidHex


def to_hex(data: bytes) -> str:
    """Encode *data* as a lowercase hex string."""
    return bytes(data).hex()


def from_hex(value: str) -> bytes:
    """Decode a hex string into bytes.

    Raises:
        InvalidHex: If *value* has odd length or contains non-hex digits.
    """
    if not isinstance(value, str):
        raise InvalidHex(f"expected a hex string, got {type(value).__name__}")
    if len(value) % 2:
        raise InvalidHex(f"hex string has odd length {len(value)}")
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError) as exc:
        raise InvalidHex(f"invalid hex string: {exc}") from exc
