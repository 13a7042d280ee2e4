"""Inbound JSON-RPC endpoint.

Web origins call wallet methods here. Bridge errors become JSON-RPC error
objects; a cancelled transaction yields ``result: null``.
"""

import logging
from typing import Any, Optional, Union

from fastapi import APIRouter, Header
from pydantic import BaseModel, Field

from tari_bridge.bridge.dispatcher import get_dispatcher
from tari_bridge.exceptions import BridgeError

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR = -32603


class RpcRequest(BaseModel):
    """JSON-RPC 2.0 request envelope."""

    jsonrpc: str = Field(default="2.0")
    method: Any = None
    params: Optional[Union[dict[str, Any], list[Any]]] = None
    id: Optional[Union[int, str]] = None


@router.post("/rpc")
async def rpc(request: RpcRequest, origin: Optional[str] = Header(None)) -> dict:
    """Dispatch a wallet method call."""
    response: dict[str, Any] = {"jsonrpc": "2.0", "id": request.id}
    dispatcher = get_dispatcher()

    try:
        response["result"] = await dispatcher.dispatch(request.method, request.params, origin=origin)
    except BridgeError as e:
        logger.warning(f"{request.method!r} failed: {e.message}")
        response["error"] = e.to_rpc_error()
    except Exception as e:
        logger.exception(f"Unexpected error handling {request.method!r}: {e}")
        response["error"] = {"code": INTERNAL_ERROR, "message": "Internal error"}

    return response
