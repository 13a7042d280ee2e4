"""Pytest configuration and fixtures."""

import os
from unittest.mock import AsyncMock

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["TARI_INDEXER_URL"] = "http://indexer.test/json_rpc"
os.environ["SIGNER_URL"] = "http://signer.test/json_rpc"
os.environ["CONFIRMATION_MODE"] = "queue"

from tari_bridge.config import get_settings
from tari_bridge.confirmation.factory import reset_confirmation_gate
from tari_bridge.confirmation.static import StaticGate
from tari_bridge.indexer.client import IndexerClient
from tari_bridge.signing.base import KeyPair, SignedTransaction
from tari_bridge.signing.factory import reset_signing_provider
from tari_bridge.bridge.dispatcher import reset_dispatcher

SENDER_PUBLIC_KEY = "pk1"
SENDER_COMPONENT = "component_0101"


def component_for(public_key: str) -> str:
    """Deterministic stand-in for component address derivation."""
    return f"component_{public_key.encode().hex()}"


def tagged(*values: int, tag: int = 128) -> dict:
    """Build a tagged binary value as the indexer sends it."""
    return {"@@TAGGED@@": [tag, list(values)]}


class FakeSigningProvider:
    """Stands in for a SigningProvider; records calls and returns canned transactions."""

    def __init__(self, transaction_id: str = "tx_abc123"):
        self.transaction_id = transaction_id
        self.initialize = AsyncMock()
        self.derive_key_pair = AsyncMock(
            return_value=KeyPair(secret_key="sk1", public_key=SENDER_PUBLIC_KEY)
        )
        self.compute_component_address = AsyncMock(side_effect=self._component)
        self.build_transfer_transaction = AsyncMock(side_effect=self._signed)
        self.build_free_test_coins_transaction = AsyncMock(side_effect=self._signed)
        self.build_generic_transaction = AsyncMock(side_effect=self._signed)
        self.health_check = AsyncMock(return_value=True)

    async def _component(self, public_key):
        if public_key == SENDER_PUBLIC_KEY:
            return SENDER_COMPONENT
        return component_for(public_key)

    async def _signed(self, *args, **kwargs):
        return SignedTransaction(payload={"id": self.transaction_id, "instructions": []})

    @property
    def call_count(self) -> int:
        return sum(
            m.await_count
            for m in (
                self.initialize,
                self.derive_key_pair,
                self.compute_component_address,
                self.build_transfer_transaction,
                self.build_free_test_coins_transaction,
                self.build_generic_transaction,
            )
        )


@pytest.fixture(autouse=True)
def reset_singletons():
    """Clear cached settings and singletons around each test."""
    get_settings.cache_clear()
    reset_signing_provider()
    reset_confirmation_gate()
    reset_dispatcher()
    yield
    get_settings.cache_clear()
    reset_signing_provider()
    reset_confirmation_gate()
    reset_dispatcher()


@pytest.fixture
def signer() -> FakeSigningProvider:
    return FakeSigningProvider()


@pytest.fixture
def indexer() -> AsyncMock:
    """Indexer client mock; every account exists unless a test says otherwise."""
    mock = AsyncMock(spec=IndexerClient)
    mock.substate_exists.return_value = True
    mock.submit_transaction.return_value = {"transaction_hash": "ignored"}
    return mock


@pytest.fixture
def approve_gate() -> StaticGate:
    return StaticGate(True)


@pytest.fixture
def reject_gate() -> StaticGate:
    return StaticGate(False)
