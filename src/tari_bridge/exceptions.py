"""Error taxonomy for the request bridge.

Every error carries a JSON-RPC error code so the inbound surface can
report it without a lookup table. User rejection at the confirmation
gate is not an error and has no class here.
"""

from typing import Any, Optional


class BridgeError(Exception):
    """Base class for errors surfaced to the caller."""

    code: int = -32000

    def __init__(self, message: str, data: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.data = data

    def to_rpc_error(self) -> dict:
        """Render as a JSON-RPC error object."""
        error = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


class MethodNotFound(BridgeError):
    """Raised when a dispatch target is not registered."""

    code = -32601

    def __init__(self, method: str):
        super().__init__(f"Method not found: {method}")
        self.method = method


class InvalidParams(BridgeError):
    """Raised when request parameters fail validation."""

    code = -32602


class TransportError(BridgeError):
    """Raised on network failure talking to the indexer or signer."""

    code = -32000


class ProtocolError(BridgeError):
    """Raised when a JSON-RPC response is malformed or carries an error."""

    code = -32001


class MalformedAddress(BridgeError):
    """Raised when a tagged binary identifier cannot be decoded."""

    code = -32002


class UnsupportedVariant(BridgeError):
    """Raised for resource containers the bridge cannot decode."""

    code = -32003

    def __init__(self, variant: str):
        super().__init__(f"Unsupported resource container variant: {variant}")
        self.variant = variant


class SigningError(BridgeError):
    """Raised when the signing provider rejects an operation."""

    code = -32010
