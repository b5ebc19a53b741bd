"""Binary encoding, hashing and signing of NIS1 transactions.

The byte layout reproduces what NIS deserializes and re-hashes when a
transaction is announced; any deviation invalidates the signature.

General layout, all integers little-endian::

    type           4 bytes
    version        4 bytes (network byte << 24 | version)
    timeStamp      4 bytes
    signer         4-byte length (32) + public key
    fee            8 bytes
    deadline       4 bytes
    ...            kind-specific fields

Variable-length fields are prefixed with their 4-byte length, lists with
their 4-byte element count. A multisig wrapper embeds the full encoding
of its inner transaction, length-prefixed.
"""

from __future__ import annotations

import struct
from typing import Any, Callable

import structlog

from nem_sdk.errors import EncodingInvariantViolation
from nem_sdk.hexconv import from_hex, to_hex
from nem_sdk.identity import keccak_256
from nem_sdk.types import (
    ImportanceTransferTransaction,
    Levy,
    Message,
    MosaicDefinition,
    MosaicDefinitionCreationTransaction,
    MosaicId,
    MosaicSupplyChangeTransaction,
    MosaicTransfer,
    MultisigAggregateModificationTransaction,
    MultisigSignatureTransaction,
    MultisigTransaction,
    ProvisionNamespaceTransaction,
    RequestAnnounce,
    Transaction,
    TransactionType,
    TransferTransaction,
)
from nem_sdk.wallet import NemWallet

logger = structlog.get_logger(__name__)

# Marker written in place of an absent optional string.
_NULL_LENGTH = 0xFFFFFFFF

# Byte size of the common header, with a 32-byte signer key.
HEADER_SIZE = 4 + 4 + 4 + 4 + 32 + 8 + 4


# ---------------------------------------------------------------------------
# Field writers
# ---------------------------------------------------------------------------


def _u32(value: int) -> bytes:
    return struct.pack("<I", value)


def _i32(value: int) -> bytes:
    return struct.pack("<i", value)


def _u64(value: int) -> bytes:
    return struct.pack("<Q", value)


def _sized(data: bytes) -> bytes:
    """Length-prefix a byte string."""
    return _u32(len(data)) + data


def _text(value: str) -> bytes:
    return _sized(value.encode("utf-8"))


def _key(value: str) -> bytes:
    return _sized(from_hex(value))


def _require(tx: Any, field: str) -> Any:
    value = getattr(tx, field, None)
    if value is None:
        raise EncodingInvariantViolation(getattr(tx, "type", type(tx).__name__), field)
    return value


# ---------------------------------------------------------------------------
# Nested structures
# ---------------------------------------------------------------------------


def _mosaic_id(mosaic_id: MosaicId) -> bytes:
    return _sized(_text(mosaic_id.namespace_id) + _text(mosaic_id.name))


def _message(message: Message | None) -> bytes:
    if message is None or not message.payload:
        return _u32(0)
    return _sized(_u32(message.type) + _sized(message.payload))


def _mosaic_transfer(mosaic: MosaicTransfer) -> bytes:
    return _sized(_mosaic_id(mosaic.mosaic_id) + _u64(mosaic.quantity))


def _levy(levy: Levy | None) -> bytes:
    if levy is None:
        return _u32(0)
    return _sized(
        _u32(levy.type) + _text(levy.recipient) + _mosaic_id(levy.mosaic_id) + _u64(levy.fee)
    )


def _mosaic_definition(definition: MosaicDefinition) -> bytes:
    buf = bytearray()
    buf += _key(definition.creator)
    buf += _mosaic_id(definition.id)
    buf += _text(definition.description)
    buf += _u32(len(definition.properties))
    for prop in definition.properties:
        buf += _sized(_text(prop.name) + _text(prop.value))
    buf += _levy(definition.levy)
    return _sized(bytes(buf))


# ---------------------------------------------------------------------------
# Per-kind bodies
# ---------------------------------------------------------------------------


def _transfer(tx: TransferTransaction) -> bytes:
    buf = bytearray()
    buf += _text(_require(tx, "recipient"))
    buf += _u64(_require(tx, "amount"))
    buf += _message(tx.message)
    if tx.protocol_version < 2:
        if tx.mosaics:
            raise EncodingInvariantViolation(tx.type, "mosaics")
    else:
        mosaics = tx.mosaics or ()
        buf += _u32(len(mosaics))
        for mosaic in mosaics:
            buf += _mosaic_transfer(mosaic)
    return bytes(buf)


def _importance_transfer(tx: ImportanceTransferTransaction) -> bytes:
    return _u32(_require(tx, "mode")) + _key(_require(tx, "remote_account"))


def _aggregate_modification(tx: MultisigAggregateModificationTransaction) -> bytes:
    modifications = _require(tx, "modifications")
    buf = bytearray(_u32(len(modifications)))
    for modification in modifications:
        buf += _sized(_u32(modification.modification_type) + _key(modification.cosignatory_account))
    if tx.protocol_version >= 2:
        if tx.min_cosignatories:
            buf += _sized(_i32(tx.min_cosignatories))
        else:
            buf += _u32(0)
    return bytes(buf)


def _multisig_signature(tx: MultisigSignatureTransaction) -> bytes:
    other_hash = _sized(from_hex(_require(tx, "other_hash")))
    return _sized(other_hash) + _text(_require(tx, "other_account"))


def _multisig(tx: MultisigTransaction) -> bytes:
    inner = _require(tx, "other_trans")
    if isinstance(inner, MultisigTransaction):
        raise EncodingInvariantViolation(tx.type, "other_trans")
    return _sized(encode_transaction(inner))


def _provision_namespace(tx: ProvisionNamespaceTransaction) -> bytes:
    buf = bytearray()
    buf += _text(_require(tx, "rental_fee_sink"))
    buf += _u64(_require(tx, "rental_fee"))
    buf += _text(_require(tx, "new_part"))
    buf += _text(tx.parent) if tx.parent else _u32(_NULL_LENGTH)
    return bytes(buf)


def _mosaic_definition_creation(tx: MosaicDefinitionCreationTransaction) -> bytes:
    return (
        _mosaic_definition(_require(tx, "mosaic_definition"))
        + _text(_require(tx, "creation_fee_sink"))
        + _u64(_require(tx, "creation_fee"))
    )


def _mosaic_supply_change(tx: MosaicSupplyChangeTransaction) -> bytes:
    return (
        _mosaic_id(_require(tx, "mosaic_id"))
        + _u32(_require(tx, "supply_type"))
        + _u64(_require(tx, "delta"))
    )


_BODY_ENCODERS: dict[TransactionType, Callable[[Any], bytes]] = {
    TransactionType.TRANSFER: _transfer,
    TransactionType.IMPORTANCE_TRANSFER: _importance_transfer,
    TransactionType.MULTISIG_AGGREGATE_MODIFICATION: _aggregate_modification,
    TransactionType.MULTISIG_SIGNATURE: _multisig_signature,
    TransactionType.MULTISIG: _multisig,
    TransactionType.PROVISION_NAMESPACE: _provision_namespace,
    TransactionType.MOSAIC_DEFINITION_CREATION: _mosaic_definition_creation,
    TransactionType.MOSAIC_SUPPLY_CHANGE: _mosaic_supply_change,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _header(tx: Transaction) -> bytes:
    buf = bytearray()
    buf += _u32(tx.type)
    buf += _u32(_require(tx, "version"))
    buf += _u32(_require(tx, "time_stamp"))
    buf += _key(_require(tx, "signer"))
    buf += _u64(_require(tx, "fee"))
    buf += _u32(_require(tx, "deadline"))
    return bytes(buf)


def encode_transaction(tx: Transaction) -> bytes:
    """Serialize *tx* into the canonical NIS1 byte layout.

    Encoding is a pure function of the value: equal transactions always
    produce identical bytes.

    Raises:
        EncodingInvariantViolation: If *tx* lacks a field its kind needs.
    """
    tx_type = getattr(tx, "type", None)
    encoder = _BODY_ENCODERS.get(tx_type)  # type: ignore[arg-type]
    if encoder is None:
        raise EncodingInvariantViolation(type(tx).__name__, "type")
    return _header(tx) + encoder(tx)


def compute_transaction_hash(data: bytes) -> str:
    """Hash of encoded transaction bytes, as NIS reports it (Keccak-256)."""
    return keccak_256(data).hex()


def sign_transaction(tx: Transaction, wallet: NemWallet) -> RequestAnnounce:
    """Encode *tx* and sign the bytes with *wallet*.

    Returns:
        The hex ``{data, signature}`` pair expected by the announce
        endpoint.
    """
    data = encode_transaction(tx)
    signature = wallet.sign(data)
    logger.debug(
        "transaction_signed",
        type=TransactionType(tx.type).name,
        hash=compute_transaction_hash(data)[:16],
    )
    return RequestAnnounce(data=to_hex(data), signature=signature)
