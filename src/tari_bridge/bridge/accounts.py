"""Read-only handlers.

Both handlers query the indexer directly; neither needs confirmation.
Balances are recomputed from scratch on every call.
"""

import asyncio
import logging
from typing import Any

from tari_bridge.bridge.contracts import AccountData
from tari_bridge.exceptions import ProtocolError
from tari_bridge.indexer.client import IndexerClient
from tari_bridge.indexer.substate import aggregate_balances, component_vault_ids
from tari_bridge.signing.base import SigningProvider

logger = logging.getLogger(__name__)


class AccountService:
    """Account queries for the wallet's own account."""

    def __init__(
        self,
        indexer: IndexerClient,
        signer: SigningProvider,
        account_index: int = 0,
    ):
        self.indexer = indexer
        self.signer = signer
        self.account_index = account_index

    async def _account_address(self) -> tuple[str, str]:
        """Public key and component address of the account."""
        keys = await self.signer.derive_key_pair(self.account_index)
        component_address = await self.signer.compute_component_address(keys.public_key)
        return keys.public_key, component_address

    async def get_account_data(self) -> AccountData:
        """Public key, component address and per-vault balances.

        An account that does not exist on-chain yet has no balances.
        Non-fungible vaults are skipped.
        """
        public_key, component_address = await self._account_address()

        try:
            component = await self.indexer.inspect_substate(component_address)
        except ProtocolError as e:
            # The indexer reports unknown substates as errors
            logger.info(f"Account {component_address} not found: {e}")
            component = None

        vault_ids = component_vault_ids(component)
        if vault_ids is None:
            return AccountData(public_key=public_key, component_address=component_address)

        vault_substates = await asyncio.gather(
            *(self.indexer.inspect_substate(vault_id) for vault_id in vault_ids)
        )
        balances = aggregate_balances(list(vault_substates))
        logger.debug(f"Account {component_address}: {len(balances)} balances from {len(vault_ids)} vaults")

        return AccountData(
            public_key=public_key,
            component_address=component_address,
            balances=balances,
        )

    async def get_transactions(self) -> Any:
        """Transactions touching the account component (indexer format)."""
        _, component_address = await self._account_address()
        return await self.indexer.get_transactions_for_address(component_address)
