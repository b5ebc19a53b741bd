"""Transaction fee schedule.

Fees are counted in *fee units* and multiplied by the schedule's unit
price at the end. The default :class:`FeeSchedule` is the NIS1 schedule
in force since the 2018 fee reduction (one unit = 0.05 XEM). Everything
is integer arithmetic; the logarithm in the mosaic supply adjustment is
taken with :mod:`decimal` so results never depend on binary floats.
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, Context, Decimal
from typing import Annotated, Sequence

from pydantic import BaseModel, ConfigDict, Field

from nem_sdk.types import Message, MosaicTransfer

MICRO_PER_XEM = 1_000_000

# Total XEM supply in whole units and the cap on any mosaic's total
# quantity in its smallest unit.
_XEM_SUPPLY = 8_999_999_999
_MAX_MOSAIC_QUANTITY = 9_000_000_000_000_000

_LN_CONTEXT = Context(prec=40)


class FeeSchedule(BaseModel):
    """Network fee constants, all in micro-XEM unless noted."""

    model_config = ConfigDict(frozen=True)

    fee_unit: Annotated[int, Field(gt=0)] = 50_000
    # Whole XEM moved per additional fee unit, and the unit cap.
    amount_step: Annotated[int, Field(gt=0)] = 10_000
    max_amount_units: Annotated[int, Field(ge=1)] = 25
    message_chunk: Annotated[int, Field(gt=0)] = 32
    small_business_supply: Annotated[int, Field(ge=0)] = 10_000

    multisig_account_creation_units: Annotated[int, Field(ge=0)] = 10
    multisig_transaction_units: Annotated[int, Field(ge=0)] = 3
    cosigning_units: Annotated[int, Field(ge=0)] = 3
    importance_transfer_units: Annotated[int, Field(ge=0)] = 3
    namespace_provision_units: Annotated[int, Field(ge=0)] = 3
    mosaic_creation_units: Annotated[int, Field(ge=0)] = 3
    mosaic_supply_change_units: Annotated[int, Field(ge=0)] = 3

    root_namespace_rental: Annotated[int, Field(ge=0)] = 100 * MICRO_PER_XEM
    sub_namespace_rental: Annotated[int, Field(ge=0)] = 10 * MICRO_PER_XEM
    namespace_char_rental: Annotated[int, Field(ge=0)] = 0
    mosaic_rental: Annotated[int, Field(ge=0)] = 10 * MICRO_PER_XEM


DEFAULT_SCHEDULE = FeeSchedule()


class FeeCalculator:
    """Computes the fee of every transaction kind from its content.

    Args:
        schedule: Fee constants. Swap it to follow a schedule change
            without touching any caller.
    """

    def __init__(self, schedule: FeeSchedule = DEFAULT_SCHEDULE) -> None:
        self.schedule = schedule

    # ----- transfers -------------------------------------------------------

    def transfer_fee(self, amount: int, message: Message | None = None) -> int:
        """Fee of a plain XEM transfer of *amount* micro-XEM."""
        units = self._amount_units(amount // MICRO_PER_XEM)
        return units * self.schedule.fee_unit + self.message_fee(message)

    def mosaic_transfer_fee(
        self,
        mosaics: Sequence[MosaicTransfer],
        multiplier: int,
        message: Message | None = None,
    ) -> int:
        """Fee of a mosaic transfer sending each mosaic *multiplier* times."""
        if not mosaics:
            return self.transfer_fee(multiplier * MICRO_PER_XEM, message)
        units = sum(self._mosaic_units(mosaic, multiplier) for mosaic in mosaics)
        return units * self.schedule.fee_unit + self.message_fee(message)

    def message_fee(self, message: Message | None) -> int:
        if message is None or not message.payload:
            return 0
        units = len(message.payload) // self.schedule.message_chunk + 1
        return units * self.schedule.fee_unit

    # ----- fixed fees ------------------------------------------------------

    def multisig_account_creation_fee(self) -> int:
        return self.schedule.multisig_account_creation_units * self.schedule.fee_unit

    def multisig_transaction_fee(self) -> int:
        return self.schedule.multisig_transaction_units * self.schedule.fee_unit

    def cosigning_fee(self) -> int:
        return self.schedule.cosigning_units * self.schedule.fee_unit

    def importance_transfer_fee(self) -> int:
        return self.schedule.importance_transfer_units * self.schedule.fee_unit

    def namespace_provision_fee(self) -> int:
        return self.schedule.namespace_provision_units * self.schedule.fee_unit

    def mosaic_creation_fee(self) -> int:
        return self.schedule.mosaic_creation_units * self.schedule.fee_unit

    def mosaic_supply_change_fee(self) -> int:
        return self.schedule.mosaic_supply_change_units * self.schedule.fee_unit

    # ----- rentals ---------------------------------------------------------

    def mosaic_rental_fee(self) -> int:
        """Creation fee paid to the mosaic fee sink."""
        return self.schedule.mosaic_rental

    def rental_fee(self, parent: str | None, namespace: str) -> int:
        """Rental fee paid to the namespace fee sink.

        Root namespaces and sub-namespaces are priced differently.
        """
        base = self.schedule.sub_namespace_rental if parent else self.schedule.root_namespace_rental
        return base + len(namespace) * self.schedule.namespace_char_rental

    # ----- internal helpers ------------------------------------------------

    def _amount_units(self, xem: int) -> int:
        units = xem // self.schedule.amount_step
        return max(1, min(units, self.schedule.max_amount_units))

    def _mosaic_units(self, mosaic: MosaicTransfer, multiplier: int) -> int:
        if mosaic.divisibility == 0 and mosaic.supply <= self.schedule.small_business_supply:
            return 1
        total_quantity = mosaic.supply * 10**mosaic.divisibility
        xem_equivalent = _XEM_SUPPLY * mosaic.quantity * multiplier // total_quantity
        units = self._amount_units(xem_equivalent) - _supply_adjustment(total_quantity)
        return max(1, units)


def _supply_adjustment(total_quantity: int) -> int:
    """``floor(0.8 * ln(max_quantity // total_quantity))``."""
    ratio = max(1, _MAX_MOSAIC_QUANTITY // total_quantity)
    scaled = Decimal("0.8") * Decimal(ratio).ln(_LN_CONTEXT)
    return int(scaled.to_integral_value(rounding=ROUND_FLOOR))
