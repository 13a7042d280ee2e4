"""Tests for vault decoding and balance aggregation."""

import pytest

from tari_bridge.exceptions import MalformedAddress, ProtocolError, UnsupportedVariant
from tari_bridge.indexer.substate import (
    Confidential,
    Fungible,
    NonFungible,
    aggregate_balances,
    component_vault_ids,
    container_balance,
    decode_resource_container,
)

from conftest import tagged


def vault(container: dict) -> dict:
    return {"substate_contents": {"substate": {"Vault": {"resource_container": container}}}}


class TestResourceContainer:
    """Tests for the resource container sum type."""

    def test_fungible(self):
        container = decode_resource_container(
            {"Fungible": {"address": tagged(0xAB), "amount": 100}}
        )
        assert container == Fungible(resource_address="resource_ab", amount=100)

    def test_confidential_uses_revealed_amount(self):
        container = decode_resource_container(
            {"Confidential": {"address": tagged(0xCD), "revealed_amount": 42, "commitment": {}}}
        )
        assert container == Confidential(resource_address="resource_cd", revealed_amount=42)

        balance = container_balance(container)
        assert balance.balance == 42
        assert balance.is_confidential is True

    def test_large_amount_keeps_precision(self):
        amount = 2**70 + 1
        container = decode_resource_container(
            {"Fungible": {"address": tagged(1), "amount": amount}}
        )
        assert container_balance(container).balance == amount

    def test_float_amount_rejected(self):
        with pytest.raises(ProtocolError):
            decode_resource_container({"Fungible": {"address": tagged(1), "amount": 1.5}})

    def test_decimal_string_amount(self):
        container = decode_resource_container(
            {"Fungible": {"address": tagged(1), "amount": "12345678901234567890"}}
        )
        assert container.amount == 12345678901234567890

    @pytest.mark.parametrize("amount", ["--5", "²", "1.5", "", "-", " 7"])
    def test_non_decimal_string_amount_rejected(self, amount):
        with pytest.raises(ProtocolError):
            aggregate_balances([vault({"Fungible": {"address": tagged(1), "amount": amount}})])

    def test_non_fungible_is_unsupported(self):
        container = decode_resource_container({"NonFungible": {"token_ids": []}})
        assert isinstance(container, NonFungible)

        with pytest.raises(UnsupportedVariant):
            container_balance(container)

    def test_unknown_variant(self):
        with pytest.raises(UnsupportedVariant):
            decode_resource_container({"Mystery": {}})

    def test_missing_fields(self):
        with pytest.raises(ProtocolError):
            decode_resource_container({"Fungible": {"amount": 1}})


class TestAggregateBalances:
    """Tests for per-account balance aggregation."""

    def test_skips_non_fungible(self):
        """One fungible and one non-fungible vault yield exactly one balance."""
        balances = aggregate_balances([
            vault({"Fungible": {"address": tagged(0xAB), "amount": 100}}),
            vault({"NonFungible": {"token_ids": [1, 2]}}),
        ])

        assert [b.model_dump(by_alias=True) for b in balances] == [
            {"resource_address": "resource_ab", "balance": 100, "isConfidential": False}
        ]

    def test_preserves_vault_order(self):
        balances = aggregate_balances([
            vault({"Confidential": {"address": tagged(2), "revealed_amount": 7}}),
            vault({"Fungible": {"address": tagged(1), "amount": 3}}),
        ])

        assert [b.resource_address for b in balances] == ["resource_02", "resource_01"]

    def test_empty(self):
        assert aggregate_balances([]) == []

    def test_vault_without_container(self):
        with pytest.raises(ProtocolError):
            aggregate_balances([{"substate_contents": {"substate": {}}}])


class TestComponentVaultIds:
    """Tests for reading vault ids from an account component."""

    def test_reads_second_position(self):
        component = {
            "substate_contents": {
                "substate": {
                    "Component": {
                        "state": {
                            "vaults": [
                                [tagged(0xAA), tagged(0x01, 0x02)],
                                [tagged(0xBB), tagged(0x03)],
                            ]
                        }
                    }
                }
            }
        }

        assert component_vault_ids(component) == ["vault_0102", "vault_03"]

    @pytest.mark.parametrize("component", [None, {}, {"substate_contents": None}])
    def test_missing_account(self, component):
        assert component_vault_ids(component) is None

    def test_bad_entry(self):
        component = {
            "substate_contents": {"substate": {"Component": {"state": {"vaults": [[tagged(1)]]}}}}
        }
        with pytest.raises(MalformedAddress):
            component_vault_ids(component)
