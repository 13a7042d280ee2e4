"""Application configuration using pydantic-settings.

The indexer and signer endpoints are supplied out-of-band through the
environment (or a .env file) and never hardcoded in the request handlers.
"""

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfirmationMode(str, Enum):
    """How state-changing requests are confirmed."""
    QUEUE = "queue"                 # Wait for the approval surface
    AUTO_APPROVE = "auto_approve"   # Development only
    AUTO_REJECT = "auto_reject"     # Read-only deployments


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Indexer
    # ======================
    tari_indexer_url: str = Field(
        default="http://127.0.0.1:18300/json_rpc",
        description="Tari indexer JSON-RPC endpoint",
    )

    # ======================
    # Signing provider
    # ======================
    signer_url: str = Field(
        default="http://127.0.0.1:18400/json_rpc",
        description="Signer daemon JSON-RPC endpoint",
    )
    account_index: int = Field(
        default=0, ge=0, description="Key derivation index of the wallet account"
    )

    # ======================
    # Confirmation
    # ======================
    confirmation_mode: ConfirmationMode = Field(
        default=ConfirmationMode.QUEUE, description="Confirmation gate backend"
    )
    confirmation_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Seconds to wait for a decision (unset = wait forever)",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="127.0.0.1", description="API server host")
    api_port: int = Field(default=8080, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def require_interactive_confirmation(self) -> None:
        """Refuse auto-decision gates outside development.

        Raises:
            RuntimeError: If an automatic confirmation mode is set in production
        """
        if self.is_production and self.confirmation_mode != ConfirmationMode.QUEUE:
            raise RuntimeError(
                f"Confirmation mode '{self.confirmation_mode.value}' is not allowed in production"
            )

    def get_safe_dict(self) -> dict:
        """Return settings dict with credentials redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "indexer_url": self._redact_url(self.tari_indexer_url),
            "signer_url": self._redact_url(self.signer_url),
            "account_index": self.account_index,
            "confirmation": {
                "mode": self.confirmation_mode.value,
                "timeout": self.confirmation_timeout,
            },
            "api_host": self.api_host,
            "api_port": self.api_port,
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact credentials embedded in a URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            if "@" in rest:
                creds, host = rest.rsplit("@", 1)
                if ":" in creds:
                    user, _ = creds.split(":", 1)
                    return f"{proto}://{user}:***@{host}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
