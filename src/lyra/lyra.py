"""
Lyra facade: one stateless object holding the provider, the subgraph client
and the deployment's address book. Every resource is fetched fresh per call.

Usage:
    from lyra import Lyra

    lyra = Lyra()
    market = lyra.market("sETH")
    history = market.liquidity_history(start_timestamp=1650000000)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from web3 import Web3

from lyra.config import Settings, load_settings
from lyra.constants import Deployment
from lyra.contracts import load_address_book
from lyra.subgraph import SubgraphClient
from lyra.utils.concurrency import fan_out, map_concurrently

if TYPE_CHECKING:
    from lyra.account import Account
    from lyra.liquidity_deposit import LiquidityDeposit
    from lyra.liquidity_withdrawal import LiquidityWithdrawal
    from lyra.lyra_staking import LyraStaking
    from lyra.market import Market
    from lyra.option import Option

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Block:
    number: int
    timestamp: int


class Lyra:
    def __init__(
        self,
        settings: Settings | None = None,
        provider: Web3 | None = None,
        subgraph: SubgraphClient | None = None,
        addresses: dict[str, str] | None = None,
    ):
        self.settings = settings or load_settings()
        self.deployment: Deployment = self.settings.deployment
        self.provider = provider or Web3(
            Web3.HTTPProvider(self.settings.rpc_url, request_kwargs={"timeout": self.settings.request_timeout})
        )
        self.subgraph = subgraph or SubgraphClient(self.settings.subgraph_url, timeout=self.settings.request_timeout)
        self.addresses = (
            addresses
            if addresses is not None
            else load_address_book(self.deployment, self.settings.contract_addresses_path)
        )
        logger.debug(f"Lyra client on {self.deployment.value} via {self.settings.rpc_url}")

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def get_block(self, block_identifier: str | int = "latest") -> Block:
        raw = self.provider.eth.get_block(block_identifier)
        return Block(number=int(raw["number"]), timestamp=int(raw["timestamp"]))

    def fan_out(self, calls: dict[str, Callable[[], Any]]) -> dict[str, Any]:
        return fan_out(calls, max_workers=self.settings.max_workers)

    def map_concurrently(self, fn: Callable[[Any], Any], items: list[Any]) -> list[Any]:
        return map_concurrently(fn, items, max_workers=self.settings.max_workers)

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def markets(self) -> list["Market"]:
        from lyra.market import Market

        return Market.get_all(self)

    def market(self, market_address_or_name: str) -> "Market":
        from lyra.market import Market

        return Market.get(self, market_address_or_name)

    def option(self, market_address_or_name: str, strike_id: int, is_call: bool) -> "Option":
        from lyra.option import Option

        return Option.get(self, market_address_or_name, strike_id, is_call)

    def account(self, address: str) -> "Account":
        from lyra.account import Account

        return Account.get(self, address)

    def liquidity_deposits(self, market_address_or_name: str, owner: str) -> list["LiquidityDeposit"]:
        from lyra.liquidity_deposit import LiquidityDeposit

        return LiquidityDeposit.get_by_owner(self, market_address_or_name, owner)

    def liquidity_withdrawals(self, market_address_or_name: str, owner: str) -> list["LiquidityWithdrawal"]:
        from lyra.liquidity_withdrawal import LiquidityWithdrawal

        return LiquidityWithdrawal.get_by_owner(self, market_address_or_name, owner)

    def lyra_staking(self) -> "LyraStaking":
        from lyra.lyra_staking import LyraStaking

        return LyraStaking.get(self)
