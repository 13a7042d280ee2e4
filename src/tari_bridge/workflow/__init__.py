"""Confirm, build, resolve and submit value-moving transactions."""

from tari_bridge.workflow.transaction import (
    TransactionSubmission,
    TransactionWorkflow,
    WorkflowOutcome,
    WorkflowState,
)

__all__ = [
    "TransactionSubmission",
    "TransactionWorkflow",
    "WorkflowOutcome",
    "WorkflowState",
]
