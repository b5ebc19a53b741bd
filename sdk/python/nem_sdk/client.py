"""Async clients for announcing transactions to a NIS node.

:class:`NisClient` is the thin HTTP transport: it reads the node's
network time and posts signed payloads. :class:`TransactionClient` runs
the full pipeline for each supported operation: fetch the time once,
build the transaction, encode, sign, announce.

All I/O uses :mod:`httpx`. Nothing here retries; a caller that times out
may retry, and the retry gets a new timestamp and is a distinct
transaction.
"""

from __future__ import annotations

from typing import Any, Sequence

import httpx
import structlog

from nem_sdk.config import NemSettings
from nem_sdk.factory import TransactionFactory
from nem_sdk.transaction import sign_transaction
from nem_sdk.types import (
    ImportanceAction,
    InnerTransaction,
    Levy,
    Message,
    Modification,
    ModificationType,
    MosaicId,
    MosaicProperties,
    MosaicTransfer,
    NemAnnounceResult,
    Network,
    RequestAnnounce,
    SupplyType,
    Transaction,
)
from nem_sdk.wallet import NemWallet

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class NisClientError(Exception):
    """Base class for transport errors."""


class NisRequestError(NisClientError):
    """Raised when the node answers with an HTTP error status."""

    def __init__(self, status_code: int, message: str, error: str | None = None) -> None:
        self.status_code = status_code
        self.message = message
        self.error = error
        super().__init__(f"NIS error {status_code}: {message}")


class NisConnectionError(NisClientError):
    """Raised when the SDK cannot reach the node."""


class NisTimeoutError(NisClientError):
    """Raised when a request exceeds its timeout."""


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


class NisClient:
    """Async HTTP client for the NIS endpoints the announce pipeline needs.

    Args:
        node_url: Base URL of the node (e.g. ``"http://127.0.0.1:7890"``).
        timeout: Request timeout in seconds.

    Example::

        async with NisClient("http://127.0.0.1:7890") as nis:
            now = await nis.get_network_time()
    """

    def __init__(self, node_url: str, *, timeout: float = 15.0) -> None:
        self._node_url = node_url.rstrip("/")
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: NemSettings | None = None) -> "NisClient":
        settings = settings or NemSettings()
        return cls(settings.node_url, timeout=settings.timeout)

    # ----- lifecycle -------------------------------------------------------

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._node_url,
                timeout=self._timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "NisClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ----- internal helpers ------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        client = await self._ensure_client()
        try:
            resp = await client.request(method, path, **kwargs)
        except httpx.ConnectError as exc:
            raise NisConnectionError(f"cannot reach {self._node_url}: {exc}") from exc
        except httpx.TimeoutException as exc:
            raise NisTimeoutError(f"request to {self._node_url}{path} timed out") from exc

        if resp.is_error:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            logger.warning("nis_request_failed", path=path, status=resp.status_code)
            raise NisRequestError(
                status_code=resp.status_code,
                message=body.get("message", resp.reason_phrase),
                error=body.get("error"),
            )
        return resp.json()

    # ----- public API ------------------------------------------------------

    async def get_network_time(self) -> int:
        """Return the node's current network time in seconds since the NEM epoch."""
        body = await self._request("GET", "/node/extended-info")
        return int(body["nisInfo"]["currentTime"])

    async def announce(self, request: RequestAnnounce) -> NemAnnounceResult:
        """Post a signed payload to ``/transaction/announce``."""
        body = await self._request("POST", "/transaction/announce", json=request.model_dump())
        result = NemAnnounceResult.model_validate(body)
        logger.info(
            "transaction_announced",
            code=result.code,
            message=result.message,
            hash=result.transaction_hash,
        )
        return result


# ---------------------------------------------------------------------------
# Announce pipeline
# ---------------------------------------------------------------------------


class TransactionClient:
    """Builds, signs and announces transactions for one network.

    Each operation takes the private key of the announcing account and a
    time-to-live in seconds. Multisig operations additionally take the
    multisig account's public key: the inner transaction is addressed
    from it while the wrapper is signed by the cosignatory.

    Args:
        nis: Transport used for the network time and the announce call.
        network: Network the transactions are built for.
        factory: Transaction factory; defaults to one for *network*.
    """

    def __init__(
        self,
        nis: NisClient,
        network: Network,
        *,
        factory: TransactionFactory | None = None,
        default_ttl: int = 3600,
    ) -> None:
        self._nis = nis
        self._factory = factory or TransactionFactory(network)
        self._default_ttl = default_ttl

    @classmethod
    def from_settings(cls, settings: NemSettings | None = None) -> "TransactionClient":
        settings = settings or NemSettings()
        return cls(
            NisClient.from_settings(settings),
            settings.network,
            default_ttl=settings.default_ttl,
        )

    @property
    def factory(self) -> TransactionFactory:
        return self._factory

    async def _announce(self, wallet: NemWallet, tx: Transaction) -> NemAnnounceResult:
        return await self._nis.announce(sign_transaction(tx, wallet))

    async def _wrap_and_announce(
        self, wallet: NemWallet, inner: InnerTransaction, now: int, ttl: int
    ) -> NemAnnounceResult:
        wrapper = self._factory.multisig(wallet.public_key, inner, now, ttl)
        return await self._announce(wallet, wrapper)

    def _ttl(self, ttl: int | None) -> int:
        return self._default_ttl if ttl is None else ttl

    # ----- transfers -------------------------------------------------------

    async def transfer_nem(
        self,
        private_key: str,
        to_address: str,
        micro_xem_amount: int,
        message: str = "",
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        tx = self._factory.transfer_nem(
            wallet.public_key, to_address, micro_xem_amount, _message(message), now, self._ttl(ttl)
        )
        return await self._announce(wallet, tx)

    async def transfer_mosaics(
        self,
        private_key: str,
        to_address: str,
        mosaics: Sequence[MosaicTransfer],
        times: int,
        message: str = "",
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        tx = self._factory.transfer_mosaics(
            wallet.public_key, to_address, mosaics, times, _message(message), now, self._ttl(ttl)
        )
        return await self._announce(wallet, tx)

    async def multisig_transfer_nem(
        self,
        private_key: str,
        to_address: str,
        micro_xem_amount: int,
        message: str,
        multisig_public_key: str,
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        inner = self._factory.transfer_nem(
            multisig_public_key, to_address, micro_xem_amount, _message(message), now, self._ttl(ttl)
        )
        return await self._wrap_and_announce(wallet, inner, now, self._ttl(ttl))

    async def multisig_transfer_mosaics(
        self,
        private_key: str,
        to_address: str,
        mosaics: Sequence[MosaicTransfer],
        times: int,
        message: str,
        multisig_public_key: str,
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        inner = self._factory.transfer_mosaics(
            multisig_public_key, to_address, mosaics, times, _message(message), now, self._ttl(ttl)
        )
        return await self._wrap_and_announce(wallet, inner, now, self._ttl(ttl))

    # ----- multisig accounts -----------------------------------------------

    async def create_multisig_account(
        self,
        private_key: str,
        cosignatories: Sequence[str],
        min_cosignatories: int,
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        """Convert the account of *private_key* into a multisig account."""
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        tx = self._factory.aggregate_modification(
            wallet.public_key,
            _modifications(ModificationType.ADD_COSIGNATORY, cosignatories),
            min_cosignatories,
            now,
            self._ttl(ttl),
        )
        return await self._announce(wallet, tx)

    async def add_cosignatories(
        self,
        private_key: str,
        cosignatories: Sequence[str],
        relative_change: int,
        multisig_public_key: str,
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        return await self._modify_multisig_account(
            private_key, ModificationType.ADD_COSIGNATORY, cosignatories,
            relative_change, multisig_public_key, ttl,
        )

    async def remove_cosignatories(
        self,
        private_key: str,
        cosignatories: Sequence[str],
        relative_change: int,
        multisig_public_key: str,
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        return await self._modify_multisig_account(
            private_key, ModificationType.REMOVE_COSIGNATORY, cosignatories,
            relative_change, multisig_public_key, ttl,
        )

    async def _modify_multisig_account(
        self,
        private_key: str,
        modification_type: ModificationType,
        cosignatories: Sequence[str],
        relative_change: int,
        multisig_public_key: str,
        ttl: int | None,
    ) -> NemAnnounceResult:
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        inner = self._factory.aggregate_modification(
            multisig_public_key,
            _modifications(modification_type, cosignatories),
            relative_change,
            now,
            self._ttl(ttl),
        )
        return await self._wrap_and_announce(wallet, inner, now, self._ttl(ttl))

    async def cosign_transaction(
        self,
        private_key: str,
        transaction_hash: str,
        multisig_address: str,
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        """Cosign a pending multisig transaction identified by its inner hash."""
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        tx = self._factory.cosignature(
            wallet.public_key, transaction_hash, multisig_address, now, self._ttl(ttl)
        )
        return await self._announce(wallet, tx)

    # ----- importance ------------------------------------------------------

    async def importance_transfer(
        self,
        private_key: str,
        action: ImportanceAction,
        remote_account_public_key: str,
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        tx = self._factory.importance_transfer(
            wallet.public_key, action, remote_account_public_key, now, self._ttl(ttl)
        )
        return await self._announce(wallet, tx)

    async def multisig_importance_transfer(
        self,
        private_key: str,
        action: ImportanceAction,
        remote_account_public_key: str,
        multisig_public_key: str,
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        inner = self._factory.importance_transfer(
            multisig_public_key, action, remote_account_public_key, now, self._ttl(ttl)
        )
        return await self._wrap_and_announce(wallet, inner, now, self._ttl(ttl))

    # ----- namespaces ------------------------------------------------------

    async def create_namespace(
        self,
        private_key: str,
        parent_namespace: str | None,
        namespace: str,
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        tx = self._factory.provision_namespace(
            wallet.public_key, parent_namespace, namespace, now, self._ttl(ttl)
        )
        return await self._announce(wallet, tx)

    async def multisig_create_namespace(
        self,
        private_key: str,
        parent_namespace: str | None,
        namespace: str,
        multisig_public_key: str,
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        inner = self._factory.provision_namespace(
            multisig_public_key, parent_namespace, namespace, now, self._ttl(ttl)
        )
        return await self._wrap_and_announce(wallet, inner, now, self._ttl(ttl))

    # ----- mosaics ---------------------------------------------------------

    async def create_mosaic(
        self,
        private_key: str,
        mosaic_id: MosaicId,
        description: str,
        properties: MosaicProperties,
        levy: Levy | None = None,
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        tx = self._factory.mosaic_definition_creation(
            wallet.public_key, mosaic_id, description, properties, levy, now, self._ttl(ttl)
        )
        return await self._announce(wallet, tx)

    async def multisig_create_mosaic(
        self,
        private_key: str,
        mosaic_id: MosaicId,
        description: str,
        properties: MosaicProperties,
        levy: Levy | None,
        multisig_public_key: str,
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        inner = self._factory.mosaic_definition_creation(
            multisig_public_key, mosaic_id, description, properties, levy, now, self._ttl(ttl)
        )
        return await self._wrap_and_announce(wallet, inner, now, self._ttl(ttl))

    async def change_mosaic_supply(
        self,
        private_key: str,
        mosaic_id: MosaicId,
        supply_type: SupplyType,
        amount: int,
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        tx = self._factory.mosaic_supply_change(
            wallet.public_key, mosaic_id, supply_type, amount, now, self._ttl(ttl)
        )
        return await self._announce(wallet, tx)

    async def multisig_change_mosaic_supply(
        self,
        private_key: str,
        mosaic_id: MosaicId,
        supply_type: SupplyType,
        amount: int,
        multisig_public_key: str,
        ttl: int | None = None,
    ) -> NemAnnounceResult:
        wallet = NemWallet(private_key)
        now = await self._nis.get_network_time()
        inner = self._factory.mosaic_supply_change(
            multisig_public_key, mosaic_id, supply_type, amount, now, self._ttl(ttl)
        )
        return await self._wrap_and_announce(wallet, inner, now, self._ttl(ttl))


def _message(text: str) -> Message | None:
    return Message.plain(text) if text else None


def _modifications(modification_type: ModificationType, cosignatories: Sequence[str]) -> list[Modification]:
    return [
        Modification(modification_type=modification_type, cosignatory_account=key)
        for key in cosignatories
    ]
