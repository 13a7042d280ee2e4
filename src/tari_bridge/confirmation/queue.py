"""Approval-queue confirmation gate.

``confirm`` registers a PendingOperation and suspends until the external
approval surface resolves it, or until the optional timeout elapses
(treated as no decision).
"""

import asyncio
import logging
from typing import Optional

from tari_bridge.confirmation.base import (
    ConfirmationGate,
    ConfirmationSummary,
    Decision,
    OperationKind,
    PendingOperation,
)

logger = logging.getLogger(__name__)


class ApprovalQueueGate(ConfirmationGate):
    """Gate resolved by an external approval surface."""

    def __init__(self, timeout: Optional[float] = None):
        """Initialize the gate.

        Args:
            timeout: Seconds to wait for a decision (None = wait forever)
        """
        self.timeout = timeout
        self._pending: dict[str, PendingOperation] = {}

    def list_pending(self) -> list[PendingOperation]:
        """Operations still awaiting a decision, oldest first."""
        return sorted(self._pending.values(), key=lambda op: op.created_at)

    def resolve(self, operation_id: str, approved: bool) -> bool:
        """Record the user's decision for a pending operation.

        Returns:
            False if the operation is unknown or already decided
        """
        operation = self._pending.get(operation_id)
        if operation is None:
            return False

        decision = Decision.APPROVED if approved else Decision.REJECTED
        resolved = operation.resolve(decision)
        if resolved:
            logger.info(f"Operation {operation_id} ({operation.kind.value}) {decision.value}")
        return resolved

    async def confirm(
        self,
        kind: OperationKind,
        summary: ConfirmationSummary,
        origin: Optional[str] = None,
    ) -> bool:
        operation = PendingOperation(kind=kind, summary=summary, origin=origin)
        future = operation.future
        self._pending[operation.id] = operation
        logger.info(f"Awaiting confirmation for {kind.value} ({operation.id}) from {origin or 'unknown origin'}")

        try:
            if self.timeout:
                decision = await asyncio.wait_for(asyncio.shield(future), timeout=self.timeout)
            else:
                decision = await future
        except asyncio.TimeoutError:
            logger.info(f"No decision for {operation.id} within {self.timeout}s")
            return False
        finally:
            self._pending.pop(operation.id, None)

        return decision == Decision.APPROVED
