"""JSON-RPC client for the Tari indexer.

Single-attempt semantics: no retries or backoff. A human confirmation
already sits in the critical path of every state-changing call, so a
failed call is surfaced to the caller instead of silently repeated.
"""

import logging
from typing import Any, Optional

import httpx

from tari_bridge.exceptions import ProtocolError, TransportError

logger = logging.getLogger(__name__)

# Calls are never pipelined, so a fixed request id is enough
JSONRPC_ID = 1

HEADERS = {
    "content-type": "application/json",
    "accept": "application/json",
}


def substate_ref(address: str, version: Optional[int] = None) -> dict:
    """Substate reference; ``version=None`` means latest."""
    return {"address": address, "version": version}


class IndexerClient:
    """Stateless JSON-RPC transport bound to one indexer endpoint."""

    def __init__(
        self,
        url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            url: Indexer JSON-RPC endpoint
            timeout: Request timeout in seconds (None = no timeout)
            transport: Optional httpx transport (used by tests)
        """
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def _post(self, method: str, params: Any) -> dict:
        """Send one request and return the decoded response envelope."""
        body = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": JSONRPC_ID,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.url, json=body, headers=HEADERS)
        except httpx.HTTPError as e:
            logger.error(f"Indexer request {method} failed: {e}")
            raise TransportError(f"Indexer unreachable: {e}")

        try:
            envelope = response.json()
        except ValueError as e:
            raise ProtocolError(
                f"Invalid JSON from indexer (HTTP {response.status_code}): {e}"
            )

        if not isinstance(envelope, dict):
            raise ProtocolError(f"Unexpected JSON-RPC envelope: {envelope!r}")

        return envelope

    async def call(self, method: str, params: Any) -> Any:
        """Call an indexer method and return its ``result``.

        Raises:
            TransportError: On network failure
            ProtocolError: If the response carries an error or lacks a result
        """
        envelope = await self._post(method, params)

        if envelope.get("error") is not None:
            error = envelope["error"]
            logger.warning(f"Indexer returned error for {method}: {error}")
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise ProtocolError(f"Indexer error on {method}: {message}", data=error)

        if "result" not in envelope:
            raise ProtocolError(f"Indexer response for {method} has no result")

        return envelope["result"]

    async def substate_exists(self, address: str) -> bool:
        """Check whether a substate exists.

        Any error, including transport failure, is reported as
        non-existence. Callers using this for dependency resolution must
        tolerate false negatives.
        """
        try:
            envelope = await self._post("get_substate", substate_ref(address))
        except (TransportError, ProtocolError) as e:
            logger.warning(f"Existence probe for {address} failed, assuming absent: {e}")
            return False

        exists = envelope.get("error") is None
        logger.debug(f"Substate {address} exists: {exists}")
        return exists

    async def inspect_substate(self, address: str, version: Optional[int] = None) -> Any:
        return await self.call("inspect_substate", substate_ref(address, version))

    async def get_substate(self, address: str, version: Optional[int] = None) -> Any:
        return await self.call("get_substate", substate_ref(address, version))

    async def get_transactions_for_address(
        self, address: str, version: Optional[int] = None
    ) -> Any:
        return await self.call("get_substate_transactions", substate_ref(address, version))

    async def submit_transaction(
        self,
        transaction: Any,
        required_substates: list[dict],
        is_dry_run: bool = False,
    ) -> Any:
        """Submit a signed transaction.

        Args:
            transaction: Signed transaction object from the signing provider
            required_substates: Ordered ``{address, version}`` dependencies
            is_dry_run: Simulate instead of committing
        """
        return await self.call(
            "submit_transaction",
            {
                "transaction": transaction,
                "is_dry_run": is_dry_run,
                "required_substates": required_substates,
            },
        )
