from __future__ import annotations

import json

import pytest
from web3 import Web3
from web3.exceptions import ContractLogicError

from conftest import OWNER, WRAPPER
from lyra.constants import (
    LYRA_OPTIMISM_MAINNET_ADDRESS,
    LYRA_TOKEN,
    Deployment,
    LyraContractId,
    LyraMarketContractId,
)
from lyra.contracts import (
    LYRA_CONTRACT_ABIS,
    MarketContractAddresses,
    build_tx_with_gas_estimate,
    get_lyra_contract_address,
    load_address_book,
)


class TestAddressBook:
    def test_mainnet_builtins(self):
        book = load_address_book(Deployment.MAINNET)
        assert book[LYRA_TOKEN] == LYRA_OPTIMISM_MAINNET_ADDRESS

    def test_file_keyed_by_deployment(self, tmp_path):
        path = tmp_path / "addresses.json"
        path.write_text(json.dumps({"kovan": {"OptionMarketWrapper": WRAPPER}, "mainnet": {}}))
        book = load_address_book(Deployment.KOVAN, str(path))
        assert book == {"OptionMarketWrapper": WRAPPER}

    def test_flat_file_overlays_builtins(self, tmp_path):
        path = tmp_path / "addresses.json"
        path.write_text(json.dumps({"OptionMarketViewer": OWNER}))
        book = load_address_book(Deployment.MAINNET, str(path))
        assert book["OptionMarketViewer"] == OWNER
        assert LYRA_TOKEN in book

    def test_non_object_file_rejected(self, tmp_path):
        path = tmp_path / "addresses.json"
        path.write_text("[]")
        with pytest.raises(ValueError, match="must be a JSON object"):
            load_address_book(Deployment.LOCAL, str(path))


def test_missing_address_raises(fake_lyra):
    with pytest.raises(ValueError, match="OptionMarketViewer is not configured on mainnet"):
        get_lyra_contract_address(fake_lyra, LyraContractId.OPTION_MARKET_VIEWER)


def test_address_is_checksummed(fake_lyra):
    fake_lyra.addresses = {"OptionMarketWrapper": WRAPPER}
    assert get_lyra_contract_address(fake_lyra, LyraContractId.OPTION_MARKET_WRAPPER) == (
        Web3.to_checksum_address(WRAPPER)
    )


def test_market_addresses_from_viewer_tuple():
    raw = ["0x" + f"{i:02x}" * 20 for i in range(1, 11)]
    addresses = MarketContractAddresses.from_tuple(raw)
    assert addresses.liquidity_pool == Web3.to_checksum_address(raw[0])
    assert addresses.base_asset == Web3.to_checksum_address(raw[9])
    assert addresses.for_id(LyraMarketContractId.OPTION_TOKEN) == Web3.to_checksum_address(raw[5])


class TestGasEstimate:
    def test_applies_buffer(self, fake_lyra):
        fake_lyra.provider.eth.estimate_gas.return_value = 100_000
        tx = build_tx_with_gas_estimate(fake_lyra, WRAPPER, OWNER, "0xabcdef")
        assert tx["gasLimit"] == 110_000
        assert tx["to"] == Web3.to_checksum_address(WRAPPER)
        assert tx["from"] == Web3.to_checksum_address(OWNER)
        assert tx["data"] == "0xabcdef"

    def test_revert_returns_none(self, fake_lyra):
        fake_lyra.provider.eth.estimate_gas.side_effect = ContractLogicError("execution reverted")
        assert build_tx_with_gas_estimate(fake_lyra, WRAPPER, OWNER, "0x") is None


def test_every_bundled_abi_has_functions():
    for contract_id, abi in LYRA_CONTRACT_ABIS.items():
        assert abi, contract_id
    # The wrapper is only ever an approval spender, resolved by address.
    assert LyraContractId.OPTION_MARKET_WRAPPER not in LYRA_CONTRACT_ABIS
