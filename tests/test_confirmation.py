"""Tests for confirmation gates."""

import asyncio

import pytest

from tari_bridge.confirmation.base import ConfirmationSummary, OperationKind
from tari_bridge.confirmation.factory import get_confirmation_gate
from tari_bridge.confirmation.queue import ApprovalQueueGate
from tari_bridge.confirmation.static import StaticGate


def summary() -> ConfirmationSummary:
    return ConfirmationSummary.for_free_test_coins(1000, 10)


async def wait_for_pending(gate: ApprovalQueueGate):
    for _ in range(100):
        pending = gate.list_pending()
        if pending:
            return pending[0]
        await asyncio.sleep(0)
    raise AssertionError("operation never became pending")


class TestSummaries:

    def test_transfer_summary(self):
        s = ConfirmationSummary.for_transfer("pk2", "resource_ab", 500, 5)

        assert s.heading == "Transfer"
        assert "**Destination:** pk2" in s.lines
        assert "**Resource:** resource_ab" in s.lines
        assert "**Amount:** 500" in s.lines
        assert "**Fee:** 5" in s.lines

    def test_transaction_summary_includes_instructions(self):
        s = ConfirmationSummary.for_transaction([{"CallMethod": {"method": "withdraw"}}])

        assert s.heading == "New transaction"
        assert any('"withdraw"' in line for line in s.lines)

    def test_big_amount_rendered_exactly(self):
        s = ConfirmationSummary.for_free_test_coins(10**25, 0)
        assert f"**Amount:** {10**25}" in s.lines


class TestStaticGate:

    @pytest.mark.asyncio
    async def test_returns_decision(self):
        assert await StaticGate(True).confirm(OperationKind.TRANSFER, summary()) is True
        assert await StaticGate(False).confirm(OperationKind.TRANSFER, summary()) is False


class TestApprovalQueueGate:
    """Tests for the approval-queue gate."""

    @pytest.mark.asyncio
    async def test_approve(self):
        gate = ApprovalQueueGate()
        task = asyncio.create_task(
            gate.confirm(OperationKind.FREE_TEST_COINS, summary(), origin="https://dapp.test")
        )

        operation = await wait_for_pending(gate)
        assert operation.origin == "https://dapp.test"
        assert operation.to_dict()["kind"] == "getFreeTestCoins"

        assert gate.resolve(operation.id, approved=True) is True
        assert await task is True
        assert gate.list_pending() == []

    @pytest.mark.asyncio
    async def test_reject(self):
        gate = ApprovalQueueGate()
        task = asyncio.create_task(gate.confirm(OperationKind.TRANSFER, summary()))

        operation = await wait_for_pending(gate)
        gate.resolve(operation.id, approved=False)

        assert await task is False

    @pytest.mark.asyncio
    async def test_resolve_twice(self):
        gate = ApprovalQueueGate()
        task = asyncio.create_task(gate.confirm(OperationKind.TRANSFER, summary()))

        operation = await wait_for_pending(gate)
        assert gate.resolve(operation.id, approved=False) is True
        assert gate.resolve(operation.id, approved=True) is False

        assert await task is False

    def test_resolve_unknown(self):
        assert ApprovalQueueGate().resolve("missing", approved=True) is False

    @pytest.mark.asyncio
    async def test_timeout_is_no_decision(self):
        gate = ApprovalQueueGate(timeout=0.01)

        assert await gate.confirm(OperationKind.TRANSFER, summary()) is False
        assert gate.list_pending() == []


class TestGateFactory:

    def test_default_is_queue(self):
        assert isinstance(get_confirmation_gate(), ApprovalQueueGate)

    def test_singleton(self):
        assert get_confirmation_gate() is get_confirmation_gate()

    def test_auto_approve(self, monkeypatch):
        monkeypatch.setenv("CONFIRMATION_MODE", "auto_approve")

        gate = get_confirmation_gate()

        assert isinstance(gate, StaticGate)
        assert gate.decision is True

    def test_auto_modes_refused_in_production(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("CONFIRMATION_MODE", "auto_approve")

        with pytest.raises(RuntimeError):
            get_confirmation_gate()
