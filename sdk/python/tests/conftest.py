"""Shared fixtures: a fixed key vector and testnet pipeline objects."""

from __future__ import annotations

import pytest

from nem_sdk.factory import TransactionFactory
from nem_sdk.types import Network
from nem_sdk.wallet import NemWallet

# Published NIS1 test vector.
PRIVATE_KEY = "575dbb3062267eff57c970a336ebbc8fbcfe12c5bd3ed7bc11eb0481d7704ced"
PUBLIC_KEY = "c5f54ba980fcbb657dbaaa42700539b207873e134d2375efeab5f1ab52f87844"
MAINNET_ADDRESS = "NDD2CT6LQLIYQ56KIXI3ENTM6EK3D44P5JFXJ4R4"

COSIGNER_KEY = "5b0e3fa5d3b49a79022d7c1e121ba1cbbf4db5821f47ab8c708ef88defc29bfe"
MULTISIG_PUBLIC_KEY = "a1aaca6c17a24252e674d155713cdf55996ad00175be4af02a20c67b59f9fe8a"
ALICE = "TALICEROONSJCPHC63F52V6FY3SDMSVAEUGHMB7C"


@pytest.fixture
def factory() -> TransactionFactory:
    return TransactionFactory(Network.TESTNET)


@pytest.fixture
def wallet() -> NemWallet:
    return NemWallet(PRIVATE_KEY)


@pytest.fixture
def cosigner() -> NemWallet:
    return NemWallet(COSIGNER_KEY)
