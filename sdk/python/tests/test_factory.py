"""Tests for nem_sdk.factory: version, fee and deadline stamping."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from conftest import ALICE, MULTISIG_PUBLIC_KEY, PUBLIC_KEY
from nem_sdk.errors import UnsupportedCombination
from nem_sdk.factory import TransactionFactory
from nem_sdk.identity import create_address
from nem_sdk.types import (
    ImportanceAction,
    Levy,
    LevyType,
    Message,
    Modification,
    ModificationType,
    MosaicId,
    MosaicProperties,
    MosaicTransfer,
    MultisigTransaction,
    Network,
    SupplyType,
    TransactionKind,
    TransactionType,
)
from nem_sdk.version import VersionProvider

COUPON = MosaicId(namespace_id="shop", name="coupon")


def _mosaic(namespace: str, name: str, quantity: int = 1) -> MosaicTransfer:
    return MosaicTransfer(
        mosaic_id=MosaicId(namespace_id=namespace, name=name), quantity=quantity, supply=100
    )


class TestTransfer:
    def test_scenario(self, factory: TransactionFactory) -> None:
        tx = factory.transfer_nem(PUBLIC_KEY, ALICE, 1_000_000, None, 1000, 60)
        assert tx.type is TransactionType.TRANSFER
        assert tx.version == 0x98000001
        assert tx.time_stamp == 1000
        assert tx.deadline == 1060
        assert tx.fee == 50_000
        assert tx.signer == PUBLIC_KEY
        assert tx.recipient == ALICE
        assert tx.amount == 1_000_000
        assert tx.message is None

    @pytest.mark.parametrize(("time_stamp", "ttl"), [(0, 1), (1000, 60), (86_400_000, 86_400)])
    def test_deadline(self, factory: TransactionFactory, time_stamp: int, ttl: int) -> None:
        tx = factory.transfer_nem(PUBLIC_KEY, ALICE, 1, None, time_stamp, ttl)
        assert tx.deadline == time_stamp + ttl
        assert tx.deadline > tx.time_stamp

    @pytest.mark.parametrize("amount", [-1, 2**64])
    def test_amount_outside_wire_width(self, factory: TransactionFactory, amount: int) -> None:
        with pytest.raises(ValidationError, match="amount"):
            factory.transfer_nem(PUBLIC_KEY, ALICE, amount, None, 1000, 60)

    def test_deadline_outside_wire_width(self, factory: TransactionFactory) -> None:
        with pytest.raises(ValidationError, match="deadline"):
            factory.transfer_nem(PUBLIC_KEY, ALICE, 1, None, 2**32 - 10, 60)

    def test_zero_ttl_rejected(self, factory: TransactionFactory) -> None:
        with pytest.raises(ValidationError, match="deadline"):
            factory.transfer_nem(PUBLIC_KEY, ALICE, 1, None, 1000, 0)

    def test_message_fee_included(self, factory: TransactionFactory) -> None:
        tx = factory.transfer_nem(PUBLIC_KEY, ALICE, 1_000_000, Message.plain("x" * 40), 1000, 60)
        assert tx.fee == 50_000 + 100_000

    def test_version_ignores_amount_and_time(self, factory: TransactionFactory) -> None:
        a = factory.transfer_nem(PUBLIC_KEY, ALICE, 1, None, 5, 10)
        b = factory.transfer_nem(PUBLIC_KEY, ALICE, 10**12, None, 99_999, 10)
        assert a.version == b.version

    def test_mainnet_version(self) -> None:
        tx = TransactionFactory(Network.MAINNET).transfer_nem(PUBLIC_KEY, ALICE, 1, None, 0, 1)
        assert tx.version == 0x68000001

    def test_missing_version_propagates(self) -> None:
        factory = TransactionFactory(Network.TESTNET, version_provider=VersionProvider({}))
        with pytest.raises(UnsupportedCombination):
            factory.transfer_nem(PUBLIC_KEY, ALICE, 1, None, 0, 1)


class TestMosaicTransfer:
    def test_amount_carries_multiplier(self, factory: TransactionFactory) -> None:
        tx = factory.transfer_mosaics(PUBLIC_KEY, ALICE, [_mosaic("shop", "coupon")], 3, None, 0, 60)
        assert tx.amount == 3_000_000
        assert tx.version == 0x98000002

    def test_mosaics_sorted_by_name(self, factory: TransactionFactory) -> None:
        mosaics = [_mosaic("zeta", "a"), _mosaic("alpha", "b"), _mosaic("alpha", "a")]
        tx = factory.transfer_mosaics(PUBLIC_KEY, ALICE, mosaics, 1, None, 0, 60)
        assert [m.mosaic_id.full_name for m in tx.mosaics] == ["alpha:a", "alpha:b", "zeta:a"]

    def test_fee_from_mosaics(self, factory: TransactionFactory) -> None:
        mosaics = [_mosaic("shop", "coupon"), _mosaic("shop", "voucher")]
        tx = factory.transfer_mosaics(PUBLIC_KEY, ALICE, mosaics, 1, None, 0, 60)
        assert tx.fee == 100_000


class TestMultisig:
    def test_wrapper_and_inner_signers(self, factory: TransactionFactory) -> None:
        inner = factory.transfer_nem(MULTISIG_PUBLIC_KEY, ALICE, 1_000_000, None, 1000, 60)
        wrapper = factory.multisig(PUBLIC_KEY, inner, 1000, 60)
        assert isinstance(wrapper, MultisigTransaction)
        assert wrapper.signer == PUBLIC_KEY
        assert wrapper.other_trans.signer == MULTISIG_PUBLIC_KEY

    def test_both_fees_paid(self, factory: TransactionFactory) -> None:
        inner = factory.transfer_nem(MULTISIG_PUBLIC_KEY, ALICE, 1_000_000, None, 1000, 60)
        wrapper = factory.multisig(PUBLIC_KEY, inner, 1000, 60)
        assert wrapper.fee == 150_000
        assert wrapper.other_trans.fee == 50_000
        assert wrapper.version == 0x98000001

    def test_cannot_wrap_wrapper(self, factory: TransactionFactory) -> None:
        inner = factory.transfer_nem(MULTISIG_PUBLIC_KEY, ALICE, 1, None, 1000, 60)
        wrapper = factory.multisig(PUBLIC_KEY, inner, 1000, 60)
        with pytest.raises(ValidationError):
            factory.multisig(PUBLIC_KEY, wrapper, 1000, 60)  # type: ignore[arg-type]

    def test_aggregate_modification(self, factory: TransactionFactory) -> None:
        modifications = [
            Modification(modification_type=ModificationType.ADD_COSIGNATORY, cosignatory_account="aa" * 32)
        ]
        tx = factory.aggregate_modification(PUBLIC_KEY, modifications, 1, 1000, 60)
        assert tx.fee == 500_000
        assert tx.version == 0x98000002
        assert tx.min_cosignatories == 1
        assert tx.modifications[0].cosignatory_account == "aa" * 32

    def test_modifications_ordered_by_type_then_address(self, factory: TransactionFactory) -> None:
        keys = sorted(["aa" * 32, "cc" * 32], key=lambda k: create_address(k, Network.TESTNET))
        add = ModificationType.ADD_COSIGNATORY
        delete = ModificationType.REMOVE_COSIGNATORY
        modifications = [
            Modification(modification_type=delete, cosignatory_account=keys[0]),
            Modification(modification_type=add, cosignatory_account=keys[1]),
            Modification(modification_type=add, cosignatory_account=keys[0]),
        ]
        tx = factory.aggregate_modification(PUBLIC_KEY, modifications, 0, 1000, 60)
        assert [(m.modification_type, m.cosignatory_account) for m in tx.modifications] == [
            (add, keys[0]),
            (add, keys[1]),
            (delete, keys[0]),
        ]

    def test_cosignature(self, factory: TransactionFactory) -> None:
        tx = factory.cosignature(PUBLIC_KEY, "ab" * 32, ALICE, 1000, 60)
        assert tx.type is TransactionType.MULTISIG_SIGNATURE
        assert tx.fee == 150_000
        assert tx.other_hash == "ab" * 32
        assert tx.other_account == ALICE


class TestNamespacesAndMosaics:
    def test_root_namespace(self, factory: TransactionFactory) -> None:
        tx = factory.provision_namespace(PUBLIC_KEY, None, "alice", 1000, 60)
        assert tx.rental_fee_sink == Network.TESTNET.rental_fee_sink
        assert tx.rental_fee == 100_000_000
        assert tx.fee == 150_000
        assert tx.parent is None
        assert tx.new_part == "alice"

    def test_sub_namespace(self, factory: TransactionFactory) -> None:
        tx = factory.provision_namespace(PUBLIC_KEY, "alice", "shop", 1000, 60)
        assert tx.rental_fee == 10_000_000
        assert tx.parent == "alice"

    def test_empty_parent_becomes_root(self, factory: TransactionFactory) -> None:
        assert factory.provision_namespace(PUBLIC_KEY, "", "alice", 1000, 60).parent is None

    def test_mosaic_definition(self, factory: TransactionFactory) -> None:
        properties = MosaicProperties(divisibility=2, initial_supply=500, supply_mutable=False, transferable=True)
        tx = factory.mosaic_definition_creation(PUBLIC_KEY, COUPON, "coupons", properties, None, 1000, 60)
        definition = tx.mosaic_definition
        assert definition.creator == PUBLIC_KEY
        assert [(p.name, p.value) for p in definition.properties] == [
            ("divisibility", "2"),
            ("initialSupply", "500"),
            ("supplyMutable", "false"),
            ("transferable", "true"),
        ]
        assert tx.creation_fee_sink == Network.TESTNET.creation_fee_sink
        assert tx.creation_fee == 10_000_000
        assert tx.fee == 150_000

    def test_mosaic_definition_with_levy(self, factory: TransactionFactory) -> None:
        levy = Levy(type=LevyType.ABSOLUTE, recipient=ALICE, mosaic_id=COUPON, fee=5)
        tx = factory.mosaic_definition_creation(
            PUBLIC_KEY, COUPON, "coupons", MosaicProperties(), levy, 1000, 60
        )
        assert tx.mosaic_definition.levy == levy

    def test_supply_change(self, factory: TransactionFactory) -> None:
        tx = factory.mosaic_supply_change(PUBLIC_KEY, COUPON, SupplyType.DECREASE, 42, 1000, 60)
        assert tx.supply_type is SupplyType.DECREASE
        assert tx.delta == 42
        assert tx.fee == 150_000

    def test_importance_transfer(self, factory: TransactionFactory) -> None:
        tx = factory.importance_transfer(PUBLIC_KEY, ImportanceAction.ACTIVATE, "bb" * 32, 1000, 60)
        assert tx.mode is ImportanceAction.ACTIVATE
        assert tx.remote_account == "bb" * 32
        assert tx.version == VersionProvider().version(Network.TESTNET, TransactionKind.IMPORTANCE_TRANSFER)
