"""Approval surface for pending confirmations.

Only meaningful with the approval-queue gate; other gates never have
pending operations.
"""

from fastapi import APIRouter, HTTPException

from tari_bridge.confirmation.factory import get_confirmation_gate
from tari_bridge.confirmation.queue import ApprovalQueueGate

router = APIRouter(prefix="/approvals", tags=["approvals"])


def _queue() -> ApprovalQueueGate:
    gate = get_confirmation_gate()
    if not isinstance(gate, ApprovalQueueGate):
        raise HTTPException(status_code=409, detail="Confirmation gate does not queue approvals")
    return gate


@router.get("")
async def list_pending():
    """List operations awaiting a decision."""
    return {"pending": [op.to_dict() for op in _queue().list_pending()]}


@router.post("/{operation_id}/approve")
async def approve(operation_id: str):
    if not _queue().resolve(operation_id, approved=True):
        raise HTTPException(status_code=404, detail="No pending operation with that id")
    return {"id": operation_id, "decision": "approved"}


@router.post("/{operation_id}/reject")
async def reject(operation_id: str):
    if not _queue().resolve(operation_id, approved=False):
        raise HTTPException(status_code=404, detail="No pending operation with that id")
    return {"id": operation_id, "decision": "rejected"}
