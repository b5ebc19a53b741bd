"""Exceptions raised by the NEM transaction pipeline.

Every failure here is local and synchronous: nothing has been sent to a
node when one of these is raised, and none of them is retried.
"""

from __future__ import annotations

from typing import Any


class NemError(Exception):
    """Base class for all SDK errors."""


class UnsupportedCombination(NemError):
    """No protocol version is defined for a ``(network, kind)`` pair."""

    def __init__(self, network: Any, kind: Any) -> None:
        self.network = network
        self.kind = kind
        super().__init__(f"no version defined for {kind!s} on {network!s}")


class InvalidKey(NemError):
    """A private key is not a well-formed 32-byte scalar."""


class InvalidHex(NemError):
    """A string could not be decoded as hexadecimal."""


class EncodingInvariantViolation(NemError):
    """A transaction value is missing a field its kind requires."""

    def __init__(self, kind: Any, field: str) -> None:
        self.kind = kind
        self.field = field
        super().__init__(f"{kind!s} transaction is missing required field '{field}'")
