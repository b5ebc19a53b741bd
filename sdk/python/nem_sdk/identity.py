"""NEM identity primitives: key derivation, address encoding, signing.

NIS1 signs with Ed25519 where every SHA-512 of the standard scheme is
replaced by Keccak-512 (the pre-standard SHA-3). Group arithmetic comes
from libsodium through PyNaCl's low-level bindings; Keccak and RIPEMD-160
come from pycryptodome.

NEM private keys are written big-endian: the hex string is byte-reversed
before it is hashed into the signing scalar. Keys exported by NCC may
carry a leading ``00`` sign byte, which is dropped.
"""

from __future__ import annotations

import base64

from Crypto.Hash import RIPEMD160, keccak
from nacl import bindings
from nacl.exceptions import CryptoError

from nem_sdk.errors import InvalidHex, InvalidKey
from nem_sdk.hexconv import from_hex, to_hex
from nem_sdk.types import Network

_KEY_SIZE = 32
_SIGNATURE_SIZE = 64


def keccak_256(data: bytes) -> bytes:
    return keccak.new(data=data, digest_bits=256).digest()


def keccak_512(data: bytes) -> bytes:
    return keccak.new(data=data, digest_bits=512).digest()


def _reduce(value: bytes) -> bytes:
    """Reduce a 64-byte little-endian integer modulo the group order."""
    return bindings.crypto_core_ed25519_scalar_reduce(value)


def _private_scalar(private_key_hex: str) -> tuple[bytes, bytes]:
    """Expand a NEM private key into ``(scalar, nonce_prefix)``."""
    if not isinstance(private_key_hex, str):
        raise InvalidKey("private key must be a hex string")
    key_hex = private_key_hex.strip()
    if len(key_hex) == 2 * _KEY_SIZE + 2 and key_hex.startswith("00"):
        key_hex = key_hex[2:]
    if len(key_hex) != 2 * _KEY_SIZE:
        raise InvalidKey(f"private key must be {_KEY_SIZE} bytes, got {len(key_hex)} hex chars")
    try:
        secret = from_hex(key_hex)[::-1]
    except InvalidHex as exc:
        raise InvalidKey(f"private key is not valid hex: {exc}") from exc

    digest = bytearray(keccak_512(secret))
    digest[0] &= 248
    digest[31] &= 127
    digest[31] |= 64
    scalar = _reduce(bytes(digest[:32]) + bytes(32))
    return scalar, bytes(digest[32:])


def derive_public_key(private_key_hex: str) -> str:
    """Derive the hex public key of a NEM private key.

    Raises:
        InvalidKey: If *private_key_hex* is not a 32-byte hex scalar.
    """
    scalar, _ = _private_scalar(private_key_hex)
    try:
        public_key = bindings.crypto_scalarmult_ed25519_base_noclamp(scalar)
    except CryptoError as exc:
        raise InvalidKey(f"private key does not map to a curve point: {exc}") from exc
    return to_hex(public_key)


def sign_message(private_key_hex: str, message: bytes) -> bytes:
    """Sign *message*, returning the 64-byte ``R || S`` signature.

    Signing is deterministic: the nonce is derived from the key and the
    message.
    """
    scalar, prefix = _private_scalar(private_key_hex)
    public_key = from_hex(derive_public_key(private_key_hex))

    r = _reduce(keccak_512(prefix + message))
    big_r = bindings.crypto_scalarmult_ed25519_base_noclamp(r)
    k = _reduce(keccak_512(big_r + public_key + message))
    s = bindings.crypto_core_ed25519_scalar_add(
        r, bindings.crypto_core_ed25519_scalar_mul(k, scalar)
    )
    return big_r + s


def verify_signature(public_key_hex: str, message: bytes, signature: bytes) -> bool:
    """Check a signature produced by :func:`sign_message`.

    Returns:
        ``True`` if the signature is valid, ``False`` otherwise.
    """
    try:
        public_key = from_hex(public_key_hex)
    except InvalidHex:
        return False
    if len(public_key) != _KEY_SIZE or len(signature) != _SIGNATURE_SIZE:
        return False
    big_r, s = signature[:32], signature[32:]
    # S must already be reduced, otherwise signatures are malleable.
    if _reduce(s + bytes(32)) != s:
        return False
    if not (
        bindings.crypto_core_ed25519_is_valid_point(public_key)
        and bindings.crypto_core_ed25519_is_valid_point(big_r)
    ):
        return False

    k = _reduce(keccak_512(big_r + public_key + message))
    try:
        lhs = bindings.crypto_scalarmult_ed25519_base_noclamp(s)
        rhs = bindings.crypto_core_ed25519_add(
            big_r, bindings.crypto_scalarmult_ed25519_noclamp(k, public_key)
        )
    except CryptoError:
        return False
    return lhs == rhs


def create_address(public_key_hex: str, network: Network) -> str:
    """Encode a public key as a base32 NEM address for *network*.

    Layout before encoding: network byte, RIPEMD-160 of the Keccak-256 of
    the key, then the first four bytes of the Keccak-256 of those 21
    bytes as checksum.
    """
    public_key = from_hex(public_key_hex)
    if len(public_key) != _KEY_SIZE:
        raise ValueError(f"public key must be {_KEY_SIZE} bytes, got {len(public_key)}")
    key_hash = RIPEMD160.new(keccak_256(public_key)).digest()
    versioned = bytes([network.byte]) + key_hash
    checksum = keccak_256(versioned)[:4]
    return base64.b32encode(versioned + checksum).decode("ascii")


def parse_address(address: str) -> tuple[Network, bytes]:
    """Decode a NEM address into its network and 20-byte key hash.

    Raises:
        ValueError: If the address is malformed or its checksum is wrong.
    """
    normalized = address.replace("-", "").upper()
    try:
        raw = base64.b32decode(normalized)
    except ValueError as exc:
        raise ValueError(f"address is not valid base32: {exc}") from exc
    if len(raw) != 25:
        raise ValueError(f"address must decode to 25 bytes, got {len(raw)}")
    if keccak_256(raw[:21])[:4] != raw[21:]:
        raise ValueError("address checksum mismatch")
    for network in Network:
        if network.byte == raw[0]:
            return network, raw[1:21]
    raise ValueError(f"unknown network byte 0x{raw[0]:02x}")
