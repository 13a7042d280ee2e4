"""Request and response contracts for the bridge methods.

Amounts and fees are arbitrary-precision integers. Floats are rejected
outright rather than coerced, so no value is ever rounded on the way in.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tari_bridge.indexer.substate import Balance


def _reject_float(value: Any) -> Any:
    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError("must be an integer, not a float or boolean")
    return value


class SubstateRequirement(BaseModel):
    """A substate the transaction depends on (``version=None`` = latest)."""

    address: str = Field(..., min_length=1, description="Canonical substate address")
    version: Optional[int] = Field(None, ge=0, description="Substate version")


class TransferRequest(BaseModel):
    """Parameters of ``transfer``."""

    model_config = ConfigDict(extra="ignore")

    amount: int = Field(..., gt=0, description="Amount to transfer")
    resource_address: str = Field(..., min_length=1, description="Resource to transfer")
    destination_public_key: str = Field(..., min_length=1, description="Recipient public key (hex)")
    fee: int = Field(..., ge=0, description="Transaction fee")

    @field_validator("amount", "fee", mode="before")
    @classmethod
    def check_integers(cls, value: Any) -> Any:
        return _reject_float(value)


class GetFreeTestCoinsRequest(BaseModel):
    """Parameters of ``getFreeTestCoins``."""

    model_config = ConfigDict(extra="ignore")

    amount: int = Field(..., gt=0, description="Amount of test coins")
    fee: int = Field(..., ge=0, description="Transaction fee")

    @field_validator("amount", "fee", mode="before")
    @classmethod
    def check_integers(cls, value: Any) -> Any:
        return _reject_float(value)


class SendTransactionRequest(BaseModel):
    """Parameters of ``sendTransaction``."""

    model_config = ConfigDict(extra="ignore")

    instructions: list[Any] = Field(..., description="Raw transaction instructions")
    input_refs: list[Any] = Field(default_factory=list, description="Input references")
    required_substates: list[SubstateRequirement] = Field(
        default_factory=list, description="Substates the transaction depends on"
    )
    is_dry_run: bool = Field(default=False, description="Simulate without committing")


class TransactionResult(BaseModel):
    """Returned as soon as a transaction is submitted (not finalized)."""

    transaction_id: str


class AccountData(BaseModel):
    """Result of ``getAccountData``."""

    public_key: str
    component_address: str
    balances: list[Balance] = Field(default_factory=list)
