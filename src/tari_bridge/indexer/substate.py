"""Vault contents as returned by ``inspect_substate``.

A vault's resource container is a closed sum over three variants. The
decoder below is the only place the wire shape is inspected; adding a
variant means adding a class and a branch here.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from tari_bridge.exceptions import MalformedAddress, ProtocolError, UnsupportedVariant
from tari_bridge.indexer.address import decode_resource_address, decode_vault_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Confidential:
    """Confidential container; only the revealed part is visible."""
    resource_address: str
    revealed_amount: int


@dataclass(frozen=True)
class Fungible:
    resource_address: str
    amount: int


@dataclass(frozen=True)
class NonFungible:
    """Placeholder for non-fungible containers (contents not decoded)."""
    raw: Any


ResourceContainer = Union[Confidential, Fungible, NonFungible]


class Balance(BaseModel):
    """Per-vault balance projection."""

    resource_address: str = Field(..., description="Canonical resource address")
    balance: int = Field(..., description="Amount held (revealed amount if confidential)")
    is_confidential: bool = Field(
        ..., serialization_alias="isConfidential", description="Whether the vault is confidential"
    )


def _as_int(value: Any, field: str) -> int:
    # Amounts arrive as JSON integers or decimal strings; never floats
    if isinstance(value, bool):
        raise ProtocolError(f"Invalid {field}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and re.fullmatch(r"-?[0-9]+", value):
        return int(value)
    raise ProtocolError(f"Invalid {field}: {value!r}")


def decode_resource_container(container: dict) -> ResourceContainer:
    """Decode a ``resource_container`` wire object.

    Raises:
        ProtocolError: If a known variant is missing required fields
        UnsupportedVariant: If the variant is not one of the three known ones
    """
    if not isinstance(container, dict) or len(container) != 1:
        raise UnsupportedVariant(repr(container))

    (variant, data), = container.items()

    try:
        if variant == "Confidential":
            return Confidential(
                resource_address=decode_resource_address(data["address"]),
                revealed_amount=_as_int(data["revealed_amount"], "revealed_amount"),
            )
        if variant == "Fungible":
            return Fungible(
                resource_address=decode_resource_address(data["address"]),
                amount=_as_int(data["amount"], "amount"),
            )
    except (KeyError, TypeError) as e:
        raise ProtocolError(f"Malformed {variant} container: {e}")

    if variant == "NonFungible":
        return NonFungible(raw=data)

    raise UnsupportedVariant(variant)


def container_balance(container: ResourceContainer) -> Balance:
    """Project a decoded container onto a balance record.

    Raises:
        UnsupportedVariant: For non-fungible containers
    """
    if isinstance(container, Confidential):
        return Balance(
            resource_address=container.resource_address,
            balance=container.revealed_amount,
            is_confidential=True,
        )
    if isinstance(container, Fungible):
        return Balance(
            resource_address=container.resource_address,
            balance=container.amount,
            is_confidential=False,
        )
    if isinstance(container, NonFungible):
        raise UnsupportedVariant("NonFungible")
    raise TypeError(f"Unhandled resource container: {type(container).__name__}")


def vault_balance(vault_substate: dict) -> Optional[Balance]:
    """Balance of a single vault, or None when the container is skipped.

    Args:
        vault_substate: ``inspect_substate`` result for a vault address
    """
    try:
        container = vault_substate["substate_contents"]["substate"]["Vault"]["resource_container"]
    except (KeyError, TypeError) as e:
        raise ProtocolError(f"Vault substate missing resource container: {e}")

    try:
        return container_balance(decode_resource_container(container))
    except UnsupportedVariant as e:
        logger.info(f"Skipping vault: {e.message}")
        return None


def aggregate_balances(vault_substates: list[dict]) -> list[Balance]:
    """Balances for a list of vault substates, skipping undecodable ones."""
    balances = []
    for substate in vault_substates:
        balance = vault_balance(substate)
        if balance is not None:
            balances.append(balance)
    return balances


def component_vault_ids(component_substate: Optional[dict]) -> Optional[list[str]]:
    """Vault addresses owned by an account component.

    Returns:
        List of ``vault_<hex>`` addresses, or None if the component has no
        contents (account not created yet)
    """
    if not component_substate or not component_substate.get("substate_contents"):
        return None

    try:
        vaults = component_substate["substate_contents"]["substate"]["Component"]["state"]["vaults"]
    except (KeyError, TypeError) as e:
        raise ProtocolError(f"Component substate missing vaults: {e}")

    # Each entry is a (resource, vault id) pair
    vault_ids = []
    for entry in vaults:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise MalformedAddress(f"Unexpected vault entry: {entry!r}")
        vault_ids.append(decode_vault_id(entry[1]))
    return vault_ids
