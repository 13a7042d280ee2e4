"""Signing provider interface and adapters.

- SigningProvider: interface consumed by the transaction workflow
- RemoteSigningProvider: JSON-RPC client for a signer daemon
"""

from tari_bridge.signing.base import KeyPair, SignedTransaction, SigningProvider
from tari_bridge.signing.factory import get_signing_provider
from tari_bridge.signing.remote import RemoteSigningProvider

__all__ = [
    "KeyPair",
    "SignedTransaction",
    "SigningProvider",
    "RemoteSigningProvider",
    "get_signing_provider",
]
