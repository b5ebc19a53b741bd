"""Signing wallet holding a single NEM private key.

:class:`NemWallet` is the signer used by the announce pipeline: it
derives its public key once, signs encoded transaction bytes, and hands
back hex strings ready for transport.
"""

from __future__ import annotations

import structlog

from nem_sdk.hexconv import to_hex
from nem_sdk.identity import create_address, derive_public_key, sign_message
from nem_sdk.types import Network

logger = structlog.get_logger(__name__)


class NemWallet:
    """In-memory wallet for one NEM account.

    The private key is validated on construction and never logged or
    serialised.

    Raises:
        InvalidKey: If *private_key* is not a 32-byte hex scalar.
    """

    __slots__ = ("_private_key", "_public_key")

    def __init__(self, private_key: str) -> None:
        self._public_key = derive_public_key(private_key)
        self._private_key = private_key

    def __repr__(self) -> str:
        return f"NemWallet(public_key={self._public_key!r})"

    @property
    def public_key(self) -> str:
        """The hex-encoded 32-byte public key."""
        return self._public_key

    def address(self, network: Network) -> str:
        """The base32 address of this account on *network*."""
        return create_address(self._public_key, network)

    def sign(self, data: bytes) -> str:
        """Sign *data* and return the hex-encoded 64-byte signature."""
        signature = sign_message(self._private_key, data)
        logger.debug("data_signed", signer=self._public_key[:16], size=len(data))
        return to_hex(signature)
