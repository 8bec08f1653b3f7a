"""
Wallet balances and approvals across every market: quote ("stable") tokens,
base tokens and option tokens, all measured against the OptionMarketWrapper.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel
from web3 import Web3

from lyra.constants import LyraContractId, LyraMarketContractId
from lyra.contracts import get_erc20_contract, get_lyra_contract_address, get_lyra_market_contract

if TYPE_CHECKING:
    from lyra.lyra import Lyra
    from lyra.market import Market


class AccountStableBalance(BaseModel):
    address: str
    symbol: str
    decimals: int
    balance: int
    allowance: int


class AccountBaseBalance(BaseModel):
    market_address: str
    address: str
    symbol: str
    decimals: int
    balance: int
    allowance: int


class AccountOptionTokenBalance(BaseModel):
    market_address: str
    address: str
    is_approved_for_all: bool


@dataclass
class AccountBalances:
    stables: list[AccountStableBalance] = field(default_factory=list)
    bases: list[AccountBaseBalance] = field(default_factory=list)
    option_tokens: list[AccountOptionTokenBalance] = field(default_factory=list)

    def stable(self, token_address_or_name: str) -> AccountStableBalance:
        needle = token_address_or_name.lower()
        for stable in self.stables:
            if stable.address.lower() == needle or stable.symbol.lower() == needle:
                return stable
        raise ValueError("Stable token does not exist")

    def base(self, token_or_market_address_or_name: str) -> AccountBaseBalance:
        needle = token_or_market_address_or_name.lower()
        for base in self.bases:
            if needle in (base.market_address.lower(), base.address.lower()) or base.symbol.lower() == needle:
                return base
        raise ValueError("Base token does not exist")

    def option_token(self, token_or_market_address: str) -> AccountOptionTokenBalance:
        needle = token_or_market_address.lower()
        for option_token in self.option_tokens:
            if needle in (option_token.market_address.lower(), option_token.address.lower()):
                return option_token
        raise ValueError("Option token does not exist")


def _stable_balance(lyra: "Lyra", owner: str, spender: str, market: "Market") -> AccountStableBalance:
    erc20 = get_erc20_contract(lyra.provider, market.quote_token.address)
    res = lyra.fan_out({
        "balance": lambda: erc20.functions.balanceOf(owner).call(),
        "allowance": lambda: erc20.functions.allowance(owner, spender).call(),
    })
    return AccountStableBalance(
        address=market.quote_token.address,
        symbol=market.quote_token.symbol,
        decimals=market.quote_token.decimals,
        balance=int(res["balance"]),
        allowance=int(res["allowance"]),
    )


def _base_balance(lyra: "Lyra", owner: str, spender: str, market: "Market") -> AccountBaseBalance:
    erc20 = get_erc20_contract(lyra.provider, market.base_token.address)
    res = lyra.fan_out({
        "balance": lambda: erc20.functions.balanceOf(owner).call(),
        "allowance": lambda: erc20.functions.allowance(owner, spender).call(),
    })
    return AccountBaseBalance(
        market_address=market.address,
        address=market.base_token.address,
        symbol=market.base_token.symbol,
        decimals=market.base_token.decimals,
        balance=int(res["balance"]),
        allowance=int(res["allowance"]),
    )


def _option_token_balance(lyra: "Lyra", owner: str, operator: str, market: "Market") -> AccountOptionTokenBalance:
    option_token = get_lyra_market_contract(lyra, market.contract_addresses, LyraMarketContractId.OPTION_TOKEN)
    return AccountOptionTokenBalance(
        market_address=market.address,
        address=option_token.address,
        is_approved_for_all=bool(option_token.functions.isApprovedForAll(owner, operator).call()),
    )


def get_account_balances_and_allowances(lyra: "Lyra", owner: str) -> AccountBalances:
    owner = Web3.to_checksum_address(owner)
    wrapper = get_lyra_contract_address(lyra, LyraContractId.OPTION_MARKET_WRAPPER)
    markets = lyra.markets()

    # Markets usually share one quote token; read each once.
    stable_markets: dict[str, "Market"] = {}
    for market in markets:
        stable_markets.setdefault(market.quote_token.address.lower(), market)

    stables = lyra.map_concurrently(lambda m: _stable_balance(lyra, owner, wrapper, m), list(stable_markets.values()))
    bases = lyra.map_concurrently(lambda m: _base_balance(lyra, owner, wrapper, m), markets)
    option_tokens = lyra.map_concurrently(lambda m: _option_token_balance(lyra, owner, wrapper, m), markets)
    return AccountBalances(stables=stables, bases=bases, option_tokens=option_tokens)
