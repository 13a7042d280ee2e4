"""Confirmation gate factory."""

import logging
from typing import Optional

from tari_bridge.config import ConfirmationMode, get_settings
from tari_bridge.confirmation.base import ConfirmationGate

logger = logging.getLogger(__name__)

_gate_instance: Optional[ConfirmationGate] = None


def get_confirmation_gate() -> ConfirmationGate:
    """Get the configured confirmation gate (singleton).

    Raises:
        RuntimeError: If an automatic mode is configured in production
    """
    global _gate_instance

    if _gate_instance is not None:
        return _gate_instance

    settings = get_settings()
    settings.require_interactive_confirmation()

    if settings.confirmation_mode == ConfirmationMode.AUTO_APPROVE:
        from tari_bridge.confirmation.static import StaticGate
        logger.warning("Confirmation gate auto-approves every operation")
        _gate_instance = StaticGate(True)

    elif settings.confirmation_mode == ConfirmationMode.AUTO_REJECT:
        from tari_bridge.confirmation.static import StaticGate
        _gate_instance = StaticGate(False)

    else:  # QUEUE
        from tari_bridge.confirmation.queue import ApprovalQueueGate
        _gate_instance = ApprovalQueueGate(timeout=settings.confirmation_timeout)

    return _gate_instance


def reset_confirmation_gate() -> None:
    """Reset the gate instance (for testing)."""
    global _gate_instance
    _gate_instance = None
