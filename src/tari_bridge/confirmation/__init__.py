"""User confirmation for state-changing operations."""

from tari_bridge.confirmation.base import (
    ConfirmationGate,
    ConfirmationSummary,
    Decision,
    OperationKind,
    PendingOperation,
)
from tari_bridge.confirmation.factory import get_confirmation_gate
from tari_bridge.confirmation.queue import ApprovalQueueGate
from tari_bridge.confirmation.static import StaticGate

__all__ = [
    "ConfirmationGate",
    "ConfirmationSummary",
    "Decision",
    "OperationKind",
    "PendingOperation",
    "ApprovalQueueGate",
    "StaticGate",
    "get_confirmation_gate",
]
