"""Signing provider reached over JSON-RPC.

Talks to a signer daemon that owns the wallet seed and the Tari wallet
library. Amounts are sent as JSON integers so they never pass through a
float.
"""

import logging
from typing import Any, Optional

import httpx

from tari_bridge.exceptions import ProtocolError, SigningError, TransportError
from tari_bridge.signing.base import KeyPair, SignedTransaction, SigningProvider

logger = logging.getLogger(__name__)


class RemoteSigningProvider(SigningProvider):
    """Signing provider backed by a signer daemon."""

    def __init__(
        self,
        url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the provider.

        Args:
            url: Signer daemon JSON-RPC endpoint
            timeout: Request timeout in seconds (None = no timeout)
            transport: Optional httpx transport (used by tests)
        """
        self.url = url
        self.timeout = timeout
        self._transport = transport
        self._request_id = 0

    async def _call(self, method: str, params: dict) -> Any:
        self._request_id += 1
        body = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": self._request_id,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.url, json=body)
        except httpx.HTTPError as e:
            logger.error(f"Signer request {method} failed: {e}")
            raise TransportError(f"Signer unreachable: {e}")

        try:
            data = response.json()
        except ValueError as e:
            raise ProtocolError(f"Invalid JSON from signer (HTTP {response.status_code}): {e}")

        if not isinstance(data, dict):
            raise ProtocolError(f"Unexpected JSON-RPC envelope from signer: {data!r}")

        if data.get("error") is not None:
            error = data["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise SigningError(f"Signer rejected {method}: {message}")

        if "result" not in data:
            raise ProtocolError(f"Signer response for {method} has no result")

        return data["result"]

    async def initialize(self) -> None:
        await self._call("ping", {})
        logger.info(f"Signer runtime ready at {self.url}")

    async def derive_key_pair(self, account_index: int) -> KeyPair:
        result = await self._call("keys.derive", {"index": account_index})
        try:
            return KeyPair(secret_key=result["secret_key"], public_key=result["public_key"])
        except (KeyError, TypeError):
            raise ProtocolError("Signer returned an incomplete key pair")

    async def compute_component_address(self, public_key: str) -> str:
        result = await self._call("accounts.component_address", {"public_key": public_key})
        if not isinstance(result, str):
            raise ProtocolError(f"Unexpected component address: {result!r}")
        return result

    async def build_transfer_transaction(
        self,
        secret_key: str,
        destination_public_key: str,
        create_destination: bool,
        resource_address: str,
        amount: int,
        fee: int,
    ) -> SignedTransaction:
        result = await self._call(
            "transactions.build_transfer",
            {
                "secret_key": secret_key,
                "destination_public_key": destination_public_key,
                "create_destination_account": create_destination,
                "resource_address": resource_address,
                "amount": amount,
                "fee": fee,
            },
        )
        return SignedTransaction.from_payload(result)

    async def build_free_test_coins_transaction(
        self,
        is_new_account: bool,
        secret_key: str,
        amount: int,
        fee: int,
    ) -> SignedTransaction:
        result = await self._call(
            "transactions.build_free_test_coins",
            {
                "is_new_account": is_new_account,
                "secret_key": secret_key,
                "amount": amount,
                "fee": fee,
            },
        )
        return SignedTransaction.from_payload(result)

    async def build_generic_transaction(
        self,
        secret_key: str,
        instructions: list,
        input_refs: list,
    ) -> SignedTransaction:
        result = await self._call(
            "transactions.build",
            {
                "secret_key": secret_key,
                "instructions": instructions,
                "input_refs": input_refs,
            },
        )
        return SignedTransaction.from_payload(result)

    async def health_check(self) -> bool:
        try:
            await self._call("ping", {})
            return True
        except (TransportError, ProtocolError, SigningError) as e:
            logger.warning(f"Signer health check failed: {e}")
            return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(url={self.url})"
