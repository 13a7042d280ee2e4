"""Confirmation gate interface.

A gate presents a summary of a state-changing operation to the user and
returns their decision. ``False`` and "no decision" mean the same thing:
the operation is cancelled silently.
"""

import asyncio
import json
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)


class OperationKind(str, Enum):
    """Kinds of operations that require confirmation."""
    TRANSFER = "transfer"
    FREE_TEST_COINS = "getFreeTestCoins"
    SEND_TRANSACTION = "sendTransaction"


class Decision(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class ConfirmationSummary:
    """Heading plus free-text lines shown to the user."""
    heading: str
    lines: tuple[str, ...]

    @classmethod
    def for_transfer(
        cls, destination_public_key: str, resource_address: str, amount: int, fee: int
    ) -> "ConfirmationSummary":
        return cls(
            heading="Transfer",
            lines=(
                "This website requests a transfer of funds from your account, do you want to proceed?",
                f"**Destination:** {destination_public_key}",
                f"**Resource:** {resource_address}",
                f"**Amount:** {amount}",
                f"**Fee:** {fee}",
            ),
        )

    @classmethod
    def for_free_test_coins(cls, amount: int, fee: int) -> "ConfirmationSummary":
        return cls(
            heading="Transfer",
            lines=(
                "This website requests a deposit of free test coins into your account. Do you want to proceed?",
                f"**Amount:** {amount}",
                f"**Fee:** {fee}",
            ),
        )

    @classmethod
    def for_transaction(cls, instructions: list) -> "ConfirmationSummary":
        return cls(
            heading="New transaction",
            lines=(
                "This website requests a transaction from your account, do you want to proceed?",
                f"**Instructions:** {json.dumps(instructions)}",
            ),
        )

    def to_dict(self) -> dict:
        return {"heading": self.heading, "lines": list(self.lines)}


@dataclass
class PendingOperation:
    """An operation awaiting a user decision.

    Lives only for the duration of one request.
    """
    kind: OperationKind
    summary: ConfirmationSummary
    origin: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _future: Optional[asyncio.Future] = field(default=None, repr=False)

    @property
    def future(self) -> asyncio.Future:
        if self._future is None:
            self._future = asyncio.get_running_loop().create_future()
        return self._future

    def resolve(self, decision: Decision) -> bool:
        """Record a decision. Returns False if one was already recorded."""
        if self.future.done():
            return False
        self.future.set_result(decision)
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "origin": self.origin,
            "created_at": self.created_at.isoformat(),
            **self.summary.to_dict(),
        }


class ConfirmationGate(ABC):
    """Abstract base class for confirmation gates."""

    @abstractmethod
    async def confirm(
        self,
        kind: OperationKind,
        summary: ConfirmationSummary,
        origin: Optional[str] = None,
    ) -> bool:
        """Ask the user to approve an operation.

        Returns:
            True only if the user explicitly approved
        """
        pass
