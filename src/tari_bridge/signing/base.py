"""Interface to the external signing provider.

The bridge never holds raw key material beyond what it passes straight
back to the provider. Signing flow:
1. Derive the account key pair for a derivation index
2. Ask the provider to build and sign an operation-specific transaction
3. Receive a signed transaction with its identifier embedded
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from tari_bridge.exceptions import ProtocolError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyPair:
    """Account key pair.

    Attributes:
        secret_key: Hex secret key (only ever handed back to the provider)
        public_key: Hex public key
    """
    secret_key: str = field(repr=False)
    public_key: str


@dataclass(frozen=True)
class SignedTransaction:
    """A signed transaction as produced by the provider.

    ``payload`` is the provider's serialized transaction and is forwarded
    to the indexer untouched.
    """
    payload: dict

    @property
    def id(self) -> str:
        return self.payload["id"]

    @classmethod
    def from_payload(cls, payload: Any) -> "SignedTransaction":
        """Wrap a provider result.

        Raises:
            ProtocolError: If the payload has no transaction id
        """
        if not isinstance(payload, dict) or not payload.get("id"):
            raise ProtocolError("Signed transaction has no id")
        return cls(payload=payload)


class SigningProvider(ABC):
    """Abstract base class for signing providers.

    Implementations must never return secret keys except through
    ``derive_key_pair``.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the signing runtime. Called once before first use."""
        pass

    @abstractmethod
    async def derive_key_pair(self, account_index: int) -> KeyPair:
        """Derive the key pair for an account index."""
        pass

    @abstractmethod
    async def compute_component_address(self, public_key: str) -> str:
        """Compute the on-chain account component address for a public key."""
        pass

    @abstractmethod
    async def build_transfer_transaction(
        self,
        secret_key: str,
        destination_public_key: str,
        create_destination: bool,
        resource_address: str,
        amount: int,
        fee: int,
    ) -> SignedTransaction:
        """Build and sign a transfer.

        Args:
            secret_key: Sender secret key
            destination_public_key: Recipient public key
            create_destination: Also create the recipient account
            resource_address: Resource being moved
            amount: Amount to transfer
            fee: Fee paid from the sender account
        """
        pass

    @abstractmethod
    async def build_free_test_coins_transaction(
        self,
        is_new_account: bool,
        secret_key: str,
        amount: int,
        fee: int,
    ) -> SignedTransaction:
        """Build and sign a free test coins deposit."""
        pass

    @abstractmethod
    async def build_generic_transaction(
        self,
        secret_key: str,
        instructions: list,
        input_refs: list,
    ) -> SignedTransaction:
        """Build and sign a transaction from raw instructions."""
        pass

    async def health_check(self) -> bool:
        """Check if the provider is available."""
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
