"""Protocol versions per network and transaction kind."""

from __future__ import annotations

from typing import Mapping

from nem_sdk.errors import UnsupportedCombination
from nem_sdk.types import Network, TransactionKind

_KIND_VERSIONS: dict[TransactionKind, int] = {
    TransactionKind.TRANSFER_NEM: 1,
    TransactionKind.TRANSFER_MOSAICS: 2,
    TransactionKind.IMPORTANCE_TRANSFER: 1,
    TransactionKind.MULTISIG_AGGREGATE_MODIFICATION: 2,
    TransactionKind.MULTISIG_SIGNATURE: 1,
    TransactionKind.MULTISIG: 1,
    TransactionKind.PROVISION_NAMESPACE: 1,
    TransactionKind.MOSAIC_DEFINITION_CREATION: 1,
    TransactionKind.MOSAIC_SUPPLY_CHANGE: 1,
}

DEFAULT_VERSIONS: dict[tuple[Network, TransactionKind], int] = {
    (network, kind): version
    for network in Network
    for kind, version in _KIND_VERSIONS.items()
}


class VersionProvider:
    """Looks up the wire version of a transaction kind on a network.

    The returned value carries the network byte in its top eight bits,
    e.g. ``0x98000001`` for a plain transfer on testnet.

    Args:
        versions: ``(network, kind) -> version`` table. Defaults to the
            NIS1 versions for mainnet and testnet.
    """

    def __init__(self, versions: Mapping[tuple[Network, TransactionKind], int] | None = None) -> None:
        self._versions = dict(DEFAULT_VERSIONS if versions is None else versions)

    def version(self, network: Network, kind: TransactionKind) -> int:
        """Return the versioned wire tag for *kind* on *network*.

        Raises:
            UnsupportedCombination: If the table has no entry for the pair.
        """
        try:
            version = self._versions[(network, kind)]
        except (KeyError, TypeError) as exc:
            raise UnsupportedCombination(network, kind) from exc
        return (network.byte << 24) | version
