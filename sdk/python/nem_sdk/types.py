"""Core types for the NEM SDK.

Transactions are modelled as a closed set of Pydantic v2 models, one per
NIS1 transaction kind, joined into a discriminated union on ``type``.
Models are frozen: a transaction value is built once by the factory,
encoded, signed and thrown away. Field aliases follow the camelCase names
NIS uses in its JSON API so values can be dumped for inspection.

Amounts and fees are integers in micro-XEM, timestamps are seconds since
the NEM epoch, keys and hashes are hex strings.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

# Integers bounded by the width they are written with on the wire.
U32 = Annotated[int, Field(ge=0, le=0xFFFFFFFF)]
U64 = Annotated[int, Field(ge=0, le=0xFFFFFFFFFFFFFFFF)]
I32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class TransactionType(int, Enum):
    """Wire type codes of NIS1 transactions."""

    TRANSFER = 0x0101
    IMPORTANCE_TRANSFER = 0x0801
    MULTISIG_AGGREGATE_MODIFICATION = 0x1001
    MULTISIG_SIGNATURE = 0x1002
    MULTISIG = 0x1004
    PROVISION_NAMESPACE = 0x2001
    MOSAIC_DEFINITION_CREATION = 0x4001
    MOSAIC_SUPPLY_CHANGE = 0x4002


class TransactionKind(str, Enum):
    """Key of the version table.

    Plain and mosaic transfers share a type code but not a version, so
    they are separate kinds here.
    """

    TRANSFER_NEM = "transfer_nem"
    TRANSFER_MOSAICS = "transfer_mosaics"
    IMPORTANCE_TRANSFER = "importance_transfer"
    MULTISIG_AGGREGATE_MODIFICATION = "multisig_aggregate_modification"
    MULTISIG_SIGNATURE = "multisig_signature"
    MULTISIG = "multisig"
    PROVISION_NAMESPACE = "provision_namespace"
    MOSAIC_DEFINITION_CREATION = "mosaic_definition_creation"
    MOSAIC_SUPPLY_CHANGE = "mosaic_supply_change"

    @property
    def type(self) -> TransactionType:
        return _KIND_TYPES[self]


_KIND_TYPES: dict[TransactionKind, TransactionType] = {
    TransactionKind.TRANSFER_NEM: TransactionType.TRANSFER,
    TransactionKind.TRANSFER_MOSAICS: TransactionType.TRANSFER,
    TransactionKind.IMPORTANCE_TRANSFER: TransactionType.IMPORTANCE_TRANSFER,
    TransactionKind.MULTISIG_AGGREGATE_MODIFICATION: TransactionType.MULTISIG_AGGREGATE_MODIFICATION,
    TransactionKind.MULTISIG_SIGNATURE: TransactionType.MULTISIG_SIGNATURE,
    TransactionKind.MULTISIG: TransactionType.MULTISIG,
    TransactionKind.PROVISION_NAMESPACE: TransactionType.PROVISION_NAMESPACE,
    TransactionKind.MOSAIC_DEFINITION_CREATION: TransactionType.MOSAIC_DEFINITION_CREATION,
    TransactionKind.MOSAIC_SUPPLY_CHANGE: TransactionType.MOSAIC_SUPPLY_CHANGE,
}


class Network(str, Enum):
    """NEM networks with their version byte and fee sink accounts."""

    MAINNET = "mainnet"
    TESTNET = "testnet"

    @property
    def byte(self) -> int:
        return _NETWORK_PARAMS[self][0]

    @property
    def rental_fee_sink(self) -> str:
        """Account receiving namespace rental fees."""
        return _NETWORK_PARAMS[self][1]

    @property
    def creation_fee_sink(self) -> str:
        """Account receiving mosaic creation fees."""
        return _NETWORK_PARAMS[self][2]


_NETWORK_PARAMS: dict[Network, tuple[int, str, str]] = {
    Network.MAINNET: (
        0x68,
        "NAMESPACEWH4MKFMBCVFERDPOOP4FK7MTBXDPZZA",
        "NBMOSAICOD4F54EE5CDMR23CCBGOAM2XSIUX6TRS",
    ),
    Network.TESTNET: (
        0x98,
        "TAMESPACEWH4MKFMBCVFERDPOOP4FK7MTDJEYP35",
        "TBMOSAICOD4F54EE5CDMR23CCBGOAM2XSJBR5OLC",
    ),
}


class MessageType(int, Enum):
    PLAIN = 1
    SECURE = 2


class ModificationType(int, Enum):
    ADD_COSIGNATORY = 1
    REMOVE_COSIGNATORY = 2


class ImportanceAction(int, Enum):
    """Importance transfer mode."""

    ACTIVATE = 1
    DEACTIVATE = 2


class SupplyType(int, Enum):
    INCREASE = 1
    DECREASE = 2


class LevyType(int, Enum):
    ABSOLUTE = 1
    PERCENTILE = 2


# ---------------------------------------------------------------------------
# Payload values
# ---------------------------------------------------------------------------


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class Message(_Model):
    """Message attached to a transfer.

    Secure messages are carried as an already-encrypted payload; this SDK
    does not encrypt.
    """

    payload: bytes = b""
    type: MessageType = MessageType.PLAIN

    @classmethod
    def plain(cls, text: str) -> "Message":
        return cls(payload=text.encode("utf-8"))

    @field_validator("payload", mode="before")
    @classmethod
    def _parse_payload(cls, v: Any) -> bytes:
        if isinstance(v, str):
            return v.encode("utf-8")
        return v

    @field_serializer("payload")
    def _serialize_payload(self, v: bytes) -> str:
        return v.hex()


class MosaicId(_Model):
    """Fully qualified mosaic name, e.g. ``nem:xem``."""

    namespace_id: Annotated[str, Field(min_length=1)]
    name: Annotated[str, Field(min_length=1)]

    @property
    def full_name(self) -> str:
        return f"{self.namespace_id}:{self.name}"


class MosaicTransfer(_Model):
    """A mosaic attached to a transfer.

    ``divisibility`` and ``supply`` describe the mosaic definition and are
    only used to price the transfer; they are not part of the wire format.
    """

    mosaic_id: MosaicId
    quantity: U64
    divisibility: Annotated[int, Field(ge=0, le=6)] = 0
    supply: Annotated[int, Field(gt=0)]


class MosaicProperty(_Model):
    name: str
    value: str


class MosaicProperties(_Model):
    """Caller-facing mosaic definition properties."""

    divisibility: Annotated[int, Field(ge=0, le=6)] = 0
    initial_supply: Annotated[int, Field(ge=0)] = 1_000
    supply_mutable: bool = True
    transferable: bool = True

    def to_properties(self) -> tuple[MosaicProperty, ...]:
        """Return the properties in wire order, with NIS string values."""
        return (
            MosaicProperty(name="divisibility", value=str(self.divisibility)),
            MosaicProperty(name="initialSupply", value=str(self.initial_supply)),
            MosaicProperty(name="supplyMutable", value=str(self.supply_mutable).lower()),
            MosaicProperty(name="transferable", value=str(self.transferable).lower()),
        )


class Levy(_Model):
    type: LevyType
    recipient: str
    mosaic_id: MosaicId
    fee: U64


class MosaicDefinition(_Model):
    creator: str
    id: MosaicId
    description: str
    properties: tuple[MosaicProperty, ...]
    levy: Levy | None = None


class Modification(_Model):
    """A single cosignatory change of a multisig account."""

    modification_type: ModificationType
    cosignatory_account: str


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


class _TransactionBase(_Model):
    version: U32
    time_stamp: U32
    signer: str
    fee: U64
    deadline: U32

    @model_validator(mode="after")
    def _deadline_after_timestamp(self) -> "_TransactionBase":
        if self.deadline <= self.time_stamp:
            raise ValueError(
                f"deadline {self.deadline} must be after timestamp {self.time_stamp}"
            )
        return self

    @property
    def protocol_version(self) -> int:
        """Version number without the network byte."""
        return self.version & 0xFFFFFF


class TransferTransaction(_TransactionBase):
    type: Literal[TransactionType.TRANSFER] = TransactionType.TRANSFER
    recipient: str
    amount: U64
    message: Message | None = None
    mosaics: tuple[MosaicTransfer, ...] = ()


class ImportanceTransferTransaction(_TransactionBase):
    type: Literal[TransactionType.IMPORTANCE_TRANSFER] = TransactionType.IMPORTANCE_TRANSFER
    mode: ImportanceAction
    remote_account: str


class MultisigAggregateModificationTransaction(_TransactionBase):
    type: Literal[TransactionType.MULTISIG_AGGREGATE_MODIFICATION] = (
        TransactionType.MULTISIG_AGGREGATE_MODIFICATION
    )
    modifications: tuple[Modification, ...]
    min_cosignatories: I32 = 0


class MultisigSignatureTransaction(_TransactionBase):
    type: Literal[TransactionType.MULTISIG_SIGNATURE] = TransactionType.MULTISIG_SIGNATURE
    other_hash: str
    other_account: str


class ProvisionNamespaceTransaction(_TransactionBase):
    type: Literal[TransactionType.PROVISION_NAMESPACE] = TransactionType.PROVISION_NAMESPACE
    rental_fee_sink: str
    rental_fee: U64
    new_part: str
    parent: str | None = None


class MosaicDefinitionCreationTransaction(_TransactionBase):
    type: Literal[TransactionType.MOSAIC_DEFINITION_CREATION] = (
        TransactionType.MOSAIC_DEFINITION_CREATION
    )
    mosaic_definition: MosaicDefinition
    creation_fee_sink: str
    creation_fee: U64


class MosaicSupplyChangeTransaction(_TransactionBase):
    type: Literal[TransactionType.MOSAIC_SUPPLY_CHANGE] = TransactionType.MOSAIC_SUPPLY_CHANGE
    mosaic_id: MosaicId
    supply_type: SupplyType
    delta: U64


InnerTransaction = Annotated[
    Union[
        TransferTransaction,
        ImportanceTransferTransaction,
        MultisigAggregateModificationTransaction,
        MultisigSignatureTransaction,
        ProvisionNamespaceTransaction,
        MosaicDefinitionCreationTransaction,
        MosaicSupplyChangeTransaction,
    ],
    Field(discriminator="type"),
]


class MultisigTransaction(_TransactionBase):
    """Wrapper announced by a cosignatory on behalf of a multisig account.

    The wrapped transaction is signed by nobody: its ``signer`` is the
    multisig account's public key, while the wrapper's ``signer`` is the
    initiating cosignatory.
    """

    type: Literal[TransactionType.MULTISIG] = TransactionType.MULTISIG
    other_trans: InnerTransaction


Transaction = Annotated[
    Union[
        TransferTransaction,
        ImportanceTransferTransaction,
        MultisigAggregateModificationTransaction,
        MultisigSignatureTransaction,
        MultisigTransaction,
        ProvisionNamespaceTransaction,
        MosaicDefinitionCreationTransaction,
        MosaicSupplyChangeTransaction,
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Announce boundary
# ---------------------------------------------------------------------------


class RequestAnnounce(_Model):
    """Hex-encoded transaction bytes and signature, as posted to NIS."""

    data: str
    signature: str


class NemAnnounceResult(_Model):
    """Result returned by ``/transaction/announce``."""

    type: int
    code: int
    message: str
    transaction_hash: str | None = None
    inner_transaction_hash: str | None = None

    @field_validator("transaction_hash", "inner_transaction_hash", mode="before")
    @classmethod
    def _unwrap_hash(cls, v: Any) -> Any:
        # NIS wraps hashes as {"data": "..."} and sends {} when absent.
        if isinstance(v, dict):
            return v.get("data")
        return v

    @property
    def is_success(self) -> bool:
        return self.code == 1
