"""NEM (NIS1) transaction SDK for Python.

Builds, fee-prices, encodes and signs NIS1 transactions, and announces
them to a node over HTTP.

Quick start::

    from nem_sdk import Network, NisClient, TransactionClient

    async with NisClient("http://127.0.0.1:7890") as nis:
        client = TransactionClient(nis, Network.TESTNET)
        result = await client.transfer_nem(private_key, "TALICE...", 1_000_000, ttl=3600)

The pure pipeline is usable without any I/O::

    from nem_sdk import NemWallet, TransactionFactory, sign_transaction

    wallet = NemWallet(private_key)
    tx = TransactionFactory(Network.TESTNET).transfer_nem(
        wallet.public_key, "TALICE...", 1_000_000, None, time_stamp=1000, ttl=60
    )
    request = sign_transaction(tx, wallet)
"""

from nem_sdk.client import (
    NisClient,
    NisClientError,
    NisConnectionError,
    NisRequestError,
    NisTimeoutError,
    TransactionClient,
)
from nem_sdk.config import NemSettings, configure_logging
from nem_sdk.errors import (
    EncodingInvariantViolation,
    InvalidHex,
    InvalidKey,
    NemError,
    UnsupportedCombination,
)
from nem_sdk.factory import TransactionFactory
from nem_sdk.fees import DEFAULT_SCHEDULE, FeeCalculator, FeeSchedule
from nem_sdk.hexconv import from_hex, to_hex
from nem_sdk.identity import (
    create_address,
    derive_public_key,
    parse_address,
    sign_message,
    verify_signature,
)
from nem_sdk.transaction import (
    compute_transaction_hash,
    encode_transaction,
    sign_transaction,
)
from nem_sdk.types import (
    ImportanceAction,
    ImportanceTransferTransaction,
    Levy,
    LevyType,
    Message,
    MessageType,
    Modification,
    ModificationType,
    MosaicDefinition,
    MosaicDefinitionCreationTransaction,
    MosaicId,
    MosaicProperties,
    MosaicProperty,
    MosaicSupplyChangeTransaction,
    MosaicTransfer,
    MultisigAggregateModificationTransaction,
    MultisigSignatureTransaction,
    MultisigTransaction,
    NemAnnounceResult,
    Network,
    ProvisionNamespaceTransaction,
    RequestAnnounce,
    SupplyType,
    Transaction,
    TransactionKind,
    TransactionType,
    TransferTransaction,
)
from nem_sdk.version import VersionProvider
from nem_sdk.wallet import NemWallet

__all__ = [
    # Client
    "NisClient",
    "NisClientError",
    "NisConnectionError",
    "NisRequestError",
    "NisTimeoutError",
    "TransactionClient",
    # Config
    "NemSettings",
    "configure_logging",
    # Errors
    "EncodingInvariantViolation",
    "InvalidHex",
    "InvalidKey",
    "NemError",
    "UnsupportedCombination",
    # Pipeline
    "DEFAULT_SCHEDULE",
    "FeeCalculator",
    "FeeSchedule",
    "TransactionFactory",
    "VersionProvider",
    "compute_transaction_hash",
    "encode_transaction",
    "sign_transaction",
    # Identity
    "NemWallet",
    "create_address",
    "derive_public_key",
    "parse_address",
    "sign_message",
    "verify_signature",
    # Hex
    "from_hex",
    "to_hex",
    # Types
    "ImportanceAction",
    "ImportanceTransferTransaction",
    "Levy",
    "LevyType",
    "Message",
    "MessageType",
    "Modification",
    "ModificationType",
    "MosaicDefinition",
    "MosaicDefinitionCreationTransaction",
    "MosaicId",
    "MosaicProperties",
    "MosaicProperty",
    "MosaicSupplyChangeTransaction",
    "MosaicTransfer",
    "MultisigAggregateModificationTransaction",
    "MultisigSignatureTransaction",
    "MultisigTransaction",
    "NemAnnounceResult",
    "Network",
    "ProvisionNamespaceTransaction",
    "RequestAnnounce",
    "SupplyType",
    "Transaction",
    "TransactionKind",
    "TransactionType",
    "TransferTransaction",
]

__version__ = "0.1.0"
