"""
Contract access: address book, typed contract handles and transaction population.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from web3 import Web3
from web3.contract import Contract
from web3.exceptions import ContractLogicError, Web3RPCError

from lyra.constants import (
    LYRA_OPTIMISM_MAINNET_ADDRESS,
    LYRA_TOKEN,
    OP_OPTIMISM_MAINNET_ADDRESS,
    OP_TOKEN,
    STAKED_LYRA_OPTIMISM_ADDRESS,
    STAKED_LYRA_TOKEN,
    Deployment,
    LyraContractId,
    LyraMarketContractId,
)
from lyra.contracts.abis import (
    ERC20_ABI,
    LIQUIDITY_POOL_ABI,
    LYRA_STAKING_MODULE_ABI,
    MULTI_DISTRIBUTOR_ABI,
    OPTION_MARKET_ABI,
    OPTION_MARKET_VIEWER_ABI,
    OPTION_TOKEN_ABI,
    TEST_FAUCET_ABI,
)

if TYPE_CHECKING:
    from lyra.lyra import Lyra

logger = logging.getLogger(__name__)

# A populated, unsigned transaction: {"to", "from", "data", "gasLimit"}.
PopulatedTransaction = dict[str, Any]


# ============================================================================
# Address book
# ============================================================================

BUILTIN_ADDRESSES: dict[Deployment, dict[str, str]] = {
    Deployment.MAINNET: {
        LYRA_TOKEN: LYRA_OPTIMISM_MAINNET_ADDRESS,
        STAKED_LYRA_TOKEN: STAKED_LYRA_OPTIMISM_ADDRESS,
        OP_TOKEN: OP_OPTIMISM_MAINNET_ADDRESS,
        # stkLYRA is the staking module proxy itself.
        LyraContractId.LYRA_STAKING_MODULE_PROXY.value: STAKED_LYRA_OPTIMISM_ADDRESS,
    },
    Deployment.KOVAN: {},
    Deployment.LOCAL: {},
}


def load_address_book(deployment: Deployment, path: str | None = None) -> dict[str, str]:
    """
    Built-in addresses for the deployment, overlaid with a JSON file of
    `{contract_id: address}` when `path` is given.
    """
    book = dict(BUILTIN_ADDRESSES.get(deployment, {}))
    if path:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"Address book {path} must be a JSON object")
        # Allow either a flat book or one keyed by deployment.
        section = raw.get(deployment.value, raw)
        book.update({str(k): str(v) for k, v in section.items() if isinstance(v, str)})
    return book


def get_lyra_contract_address(lyra: "Lyra", contract_id: str | LyraContractId) -> str:
    key = contract_id.value if isinstance(contract_id, LyraContractId) else str(contract_id)
    address = lyra.addresses.get(key)
    if not address:
        raise ValueError(f"Contract address for {key} is not configured on {lyra.deployment.value}")
    return Web3.to_checksum_address(address)


# ============================================================================
# Contract handles
# ============================================================================

LYRA_CONTRACT_ABIS = {
    LyraContractId.OPTION_MARKET_VIEWER: OPTION_MARKET_VIEWER_ABI,
    LyraContractId.LYRA_STAKING_MODULE_PROXY: LYRA_STAKING_MODULE_ABI,
    LyraContractId.MULTI_DISTRIBUTOR: MULTI_DISTRIBUTOR_ABI,
    LyraContractId.TEST_FAUCET: TEST_FAUCET_ABI,
}

LYRA_MARKET_CONTRACT_ABIS = {
    LyraMarketContractId.OPTION_MARKET: OPTION_MARKET_ABI,
    LyraMarketContractId.LIQUIDITY_POOL: LIQUIDITY_POOL_ABI,
    LyraMarketContractId.LIQUIDITY_TOKENS: ERC20_ABI,
    LyraMarketContractId.OPTION_TOKEN: OPTION_TOKEN_ABI,
}


def get_erc20_contract(provider: Web3, address: str) -> Contract:
    return provider.eth.contract(address=Web3.to_checksum_address(address), abi=ERC20_ABI)


def get_lyra_contract(lyra: "Lyra", contract_id: LyraContractId) -> Contract:
    return lyra.provider.eth.contract(
        address=get_lyra_contract_address(lyra, contract_id),
        abi=LYRA_CONTRACT_ABIS[contract_id],
    )


@dataclass(frozen=True)
class MarketContractAddresses:
    liquidity_pool: str
    liquidity_tokens: str
    greek_cache: str
    option_market: str
    option_market_pricer: str
    option_token: str
    short_collateral: str
    pool_hedger: str
    quote_asset: str
    base_asset: str

    @classmethod
    def from_tuple(cls, raw: Any) -> "MarketContractAddresses":
        """Build from the OptionMarketViewer struct (tuple in component order)."""
        values = [Web3.to_checksum_address(a) for a in list(raw)[:10]]
        return cls(*values)

    def for_id(self, contract_id: LyraMarketContractId) -> str:
        return {
            LyraMarketContractId.OPTION_MARKET: self.option_market,
            LyraMarketContractId.LIQUIDITY_POOL: self.liquidity_pool,
            LyraMarketContractId.LIQUIDITY_TOKENS: self.liquidity_tokens,
            LyraMarketContractId.OPTION_GREEK_CACHE: self.greek_cache,
            LyraMarketContractId.OPTION_MARKET_PRICER: self.option_market_pricer,
            LyraMarketContractId.OPTION_TOKEN: self.option_token,
            LyraMarketContractId.SHORT_COLLATERAL: self.short_collateral,
            LyraMarketContractId.POOL_HEDGER: self.pool_hedger,
        }[contract_id]


def get_lyra_market_contract(
    lyra: "Lyra",
    addresses: MarketContractAddresses,
    contract_id: LyraMarketContractId,
) -> Contract:
    abi = LYRA_MARKET_CONTRACT_ABIS.get(contract_id)
    if abi is None:
        raise ValueError(f"No ABI bundled for {contract_id.value}")
    return lyra.provider.eth.contract(address=addresses.for_id(contract_id), abi=abi)


# ============================================================================
# Transactions
# ============================================================================

def build_tx(to: str, from_: str, data: str) -> PopulatedTransaction:
    return {
        "to": Web3.to_checksum_address(to),
        "from": Web3.to_checksum_address(from_),
        "data": data,
    }


def build_tx_with_gas_estimate(lyra: "Lyra", to: str, from_: str, data: str) -> Optional[PopulatedTransaction]:
    """
    Populate a transaction and attach a buffered gas limit.

    Returns None when the node rejects the estimate (the call would revert).
    """
    tx = build_tx(to, from_, data)
    try:
        gas = lyra.provider.eth.estimate_gas(tx)
    except (ContractLogicError, Web3RPCError, ValueError) as e:
        logger.warning(f"Gas estimate failed for call to {tx['to']} from {tx['from']}: {e}")
        return None
    tx["gasLimit"] = int(int(gas) * lyra.settings.gas_limit_buffer)
    logger.debug(f"Gas estimate for {tx['to']}: {gas} -> limit {tx['gasLimit']}")
    return tx
