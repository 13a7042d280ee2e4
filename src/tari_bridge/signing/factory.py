"""Signing provider factory.

Creates the configured provider once per process.
"""

import logging
from typing import Optional

from tari_bridge.config import get_settings
from tari_bridge.signing.base import SigningProvider

logger = logging.getLogger(__name__)

_provider_instance: Optional[SigningProvider] = None


def get_signing_provider() -> SigningProvider:
    """Get the configured signing provider (singleton)."""
    global _provider_instance

    if _provider_instance is not None:
        return _provider_instance

    settings = get_settings()

    from tari_bridge.signing.remote import RemoteSigningProvider
    _provider_instance = RemoteSigningProvider(settings.signer_url)
    logger.info(f"Using signing provider {_provider_instance!r}")

    return _provider_instance


def reset_signing_provider() -> None:
    """Reset the provider instance (for testing)."""
    global _provider_instance
    _provider_instance = None
