"""Construction of fully stamped transaction values.

:class:`TransactionFactory` fills in everything the caller must not
choose: the version (from :class:`VersionProvider`), the fee (from
:class:`FeeCalculator`), the fee sink accounts of the network, and the
deadline. Addresses and keys are passed through unchecked; NIS rejects
malformed ones on announce.
"""

from __future__ import annotations

from typing import Sequence

from nem_sdk.fees import MICRO_PER_XEM, FeeCalculator
from nem_sdk.identity import create_address
from nem_sdk.types import (
    ImportanceAction,
    ImportanceTransferTransaction,
    InnerTransaction,
    Levy,
    Message,
    Modification,
    MosaicDefinition,
    MosaicDefinitionCreationTransaction,
    MosaicId,
    MosaicProperties,
    MosaicSupplyChangeTransaction,
    MosaicTransfer,
    MultisigAggregateModificationTransaction,
    MultisigSignatureTransaction,
    MultisigTransaction,
    Network,
    ProvisionNamespaceTransaction,
    SupplyType,
    TransactionKind,
    TransferTransaction,
)
from nem_sdk.version import VersionProvider


class TransactionFactory:
    """Builds transactions for one network.

    Every method takes the signer's public key, the current network time
    and a time-to-live in seconds; the deadline is ``time_stamp + ttl``.

    Args:
        network: Network the transactions are meant for.
        version_provider: Version table. Defaults to the NIS1 table.
        fee_calculator: Fee schedule. Defaults to the NIS1 schedule.
    """

    def __init__(
        self,
        network: Network,
        version_provider: VersionProvider | None = None,
        fee_calculator: FeeCalculator | None = None,
    ) -> None:
        self.network = network
        self.versions = version_provider or VersionProvider()
        self.fees = fee_calculator or FeeCalculator()

    def _common(self, kind: TransactionKind, signer: str, time_stamp: int, ttl: int, fee: int) -> dict:
        return {
            "version": self.versions.version(self.network, kind),
            "time_stamp": time_stamp,
            "signer": signer,
            "fee": fee,
            "deadline": time_stamp + ttl,
        }

    # ----- transfers -------------------------------------------------------

    def transfer_nem(
        self,
        signer: str,
        recipient: str,
        amount: int,
        message: Message | None,
        time_stamp: int,
        ttl: int,
    ) -> TransferTransaction:
        """Transfer *amount* micro-XEM to *recipient*."""
        return TransferTransaction(
            **self._common(
                TransactionKind.TRANSFER_NEM, signer, time_stamp, ttl,
                self.fees.transfer_fee(amount, message),
            ),
            recipient=recipient,
            amount=amount,
            message=message,
        )

    def transfer_mosaics(
        self,
        signer: str,
        recipient: str,
        mosaics: Sequence[MosaicTransfer],
        times: int,
        message: Message | None,
        time_stamp: int,
        ttl: int,
    ) -> TransferTransaction:
        """Transfer each of *mosaics* *times* times to *recipient*.

        NIS sends ``quantity * amount / 1_000_000`` of each attached
        mosaic, so the XEM amount field carries the multiplier.
        """
        ordered = tuple(sorted(mosaics, key=lambda m: m.mosaic_id.full_name))
        return TransferTransaction(
            **self._common(
                TransactionKind.TRANSFER_MOSAICS, signer, time_stamp, ttl,
                self.fees.mosaic_transfer_fee(ordered, times, message),
            ),
            recipient=recipient,
            amount=times * MICRO_PER_XEM,
            message=message,
            mosaics=ordered,
        )

    # ----- multisig --------------------------------------------------------

    def aggregate_modification(
        self,
        signer: str,
        modifications: Sequence[Modification],
        min_cosignatories: int,
        time_stamp: int,
        ttl: int,
    ) -> MultisigAggregateModificationTransaction:
        """Change the cosignatories of *signer*'s account.

        *min_cosignatories* is a relative change to the required number
        of cosignatures.

        Modifications are ordered by type, then by cosignatory address,
        which is the order NIS re-serializes them in.
        """
        return MultisigAggregateModificationTransaction(
            **self._common(
                TransactionKind.MULTISIG_AGGREGATE_MODIFICATION, signer, time_stamp, ttl,
                self.fees.multisig_account_creation_fee(),
            ),
            modifications=tuple(
                sorted(
                    modifications,
                    key=lambda m: (
                        m.modification_type,
                        create_address(m.cosignatory_account, self.network),
                    ),
                )
            ),
            min_cosignatories=min_cosignatories,
        )

    def multisig(
        self,
        signer: str,
        inner: InnerTransaction,
        time_stamp: int,
        ttl: int,
    ) -> MultisigTransaction:
        """Wrap *inner* for announcement by the cosignatory *signer*.

        *inner* must already be addressed from the multisig account's
        public key. The wrapper pays its own fee on top of the inner one.
        """
        return MultisigTransaction(
            **self._common(
                TransactionKind.MULTISIG, signer, time_stamp, ttl,
                self.fees.multisig_transaction_fee(),
            ),
            other_trans=inner,
        )

    def cosignature(
        self,
        signer: str,
        other_hash: str,
        multisig_address: str,
        time_stamp: int,
        ttl: int,
    ) -> MultisigSignatureTransaction:
        """Cosign the pending multisig transaction whose inner hash is *other_hash*."""
        return MultisigSignatureTransaction(
            **self._common(
                TransactionKind.MULTISIG_SIGNATURE, signer, time_stamp, ttl,
                self.fees.cosigning_fee(),
            ),
            other_hash=other_hash,
            other_account=multisig_address,
        )

    # ----- importance ------------------------------------------------------

    def importance_transfer(
        self,
        signer: str,
        action: ImportanceAction,
        remote_account: str,
        time_stamp: int,
        ttl: int,
    ) -> ImportanceTransferTransaction:
        return ImportanceTransferTransaction(
            **self._common(
                TransactionKind.IMPORTANCE_TRANSFER, signer, time_stamp, ttl,
                self.fees.importance_transfer_fee(),
            ),
            mode=action,
            remote_account=remote_account,
        )

    # ----- namespaces and mosaics -----------------------------------------

    def provision_namespace(
        self,
        signer: str,
        parent: str | None,
        namespace: str,
        time_stamp: int,
        ttl: int,
    ) -> ProvisionNamespaceTransaction:
        """Rent *namespace*, under *parent* when given, as a root otherwise."""
        return ProvisionNamespaceTransaction(
            **self._common(
                TransactionKind.PROVISION_NAMESPACE, signer, time_stamp, ttl,
                self.fees.namespace_provision_fee(),
            ),
            rental_fee_sink=self.network.rental_fee_sink,
            rental_fee=self.fees.rental_fee(parent, namespace),
            new_part=namespace,
            parent=parent or None,
        )

    def mosaic_definition_creation(
        self,
        signer: str,
        mosaic_id: MosaicId,
        description: str,
        properties: MosaicProperties,
        levy: Levy | None,
        time_stamp: int,
        ttl: int,
    ) -> MosaicDefinitionCreationTransaction:
        """Define a new mosaic created by *signer*."""
        definition = MosaicDefinition(
            creator=signer,
            id=mosaic_id,
            description=description,
            properties=properties.to_properties(),
            levy=levy,
        )
        return MosaicDefinitionCreationTransaction(
            **self._common(
                TransactionKind.MOSAIC_DEFINITION_CREATION, signer, time_stamp, ttl,
                self.fees.mosaic_creation_fee(),
            ),
            mosaic_definition=definition,
            creation_fee_sink=self.network.creation_fee_sink,
            creation_fee=self.fees.mosaic_rental_fee(),
        )

    def mosaic_supply_change(
        self,
        signer: str,
        mosaic_id: MosaicId,
        supply_type: SupplyType,
        delta: int,
        time_stamp: int,
        ttl: int,
    ) -> MosaicSupplyChangeTransaction:
        return MosaicSupplyChangeTransaction(
            **self._common(
                TransactionKind.MOSAIC_SUPPLY_CHANGE, signer, time_stamp, ttl,
                self.fees.mosaic_supply_change_fee(),
            ),
            mosaic_id=mosaic_id,
            supply_type=supply_type,
            delta=delta,
        )
