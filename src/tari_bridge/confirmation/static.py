"""Confirmation gate with a fixed decision.

For development setups without an approval surface, and for read-only
deployments that must refuse every state-changing request.
"""

import logging
from typing import Optional

from tari_bridge.confirmation.base import ConfirmationGate, ConfirmationSummary, OperationKind

logger = logging.getLogger(__name__)


class StaticGate(ConfirmationGate):
    def __init__(self, decision: bool):
        self.decision = decision

    async def confirm(
        self,
        kind: OperationKind,
        summary: ConfirmationSummary,
        origin: Optional[str] = None,
    ) -> bool:
        logger.info(
            f"{'Auto-approving' if self.decision else 'Auto-rejecting'} {kind.value} "
            f"from {origin or 'unknown origin'}"
        )
        return self.decision

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(decision={self.decision})"
