"""Tari indexer protocol: JSON-RPC client and substate decoding."""

from tari_bridge.indexer.address import (
    SubstateKind,
    TaggedValue,
    decode_resource_address,
    decode_tagged_address,
    decode_vault_id,
)
from tari_bridge.indexer.client import IndexerClient, substate_ref
from tari_bridge.indexer.substate import Balance, aggregate_balances

__all__ = [
    "SubstateKind",
    "TaggedValue",
    "decode_resource_address",
    "decode_tagged_address",
    "decode_vault_id",
    "IndexerClient",
    "substate_ref",
    "Balance",
    "aggregate_balances",
]
