from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel

from lyra.constants import LyraContractId, LyraMarketContractId
from lyra.contracts import (
    MarketContractAddresses,
    get_erc20_contract,
    get_lyra_contract,
    get_lyra_market_contract,
)
from lyra.queries import MARKET_TOTAL_VALUE_SNAPSHOTS_QUERY
from lyra.utils.bn import from_big_number, unit_div
from lyra.utils.snapshots import fetch_snapshots, get_snapshot_period

if TYPE_CHECKING:
    from lyra.lyra import Block, Lyra
    from lyra.option import Option

logger = logging.getLogger(__name__)


class MarketToken(BaseModel):
    address: str
    symbol: str
    decimals: int


class MarketLiquidity(BaseModel):
    free_liquidity: int
    burnable_liquidity: int
    total_queued_deposits: int
    nav: int
    utilization: float
    total_withdrawing_deposits: int
    used_collat_liquidity: int
    pending_delta_liquidity: int
    used_delta_liquidity: int
    token_price: int


class MarketLiquidityHistory(MarketLiquidity):
    timestamp: int
    pending_deposits: int
    pending_withdrawals: int


def get_utilization(nav: int, free_liquidity: int) -> float:
    """Share of NAV not free. Zero when NAV is zero."""
    if nav <= 0:
        return 0.0
    return from_big_number(unit_div(nav - free_liquidity, nav))


def parse_liquidity_snapshot(row: dict[str, Any]) -> MarketLiquidityHistory:
    nav = int(row["NAV"])
    free = int(row["freeLiquidity"])
    return MarketLiquidityHistory(
        free_liquidity=free,
        burnable_liquidity=int(row["burnableLiquidity"]),
        # Not indexed; reported as zero.
        total_queued_deposits=0,
        nav=nav,
        utilization=get_utilization(nav, free),
        total_withdrawing_deposits=0,
        used_collat_liquidity=int(row["usedCollatLiquidity"]),
        pending_delta_liquidity=int(row["pendingDeltaLiquidity"]),
        used_delta_liquidity=int(row["usedDeltaLiquidity"]),
        token_price=int(row["tokenPrice"]),
        timestamp=int(row["timestamp"]),
        pending_deposits=int(row.get("pendingDeposits") or 0),
        pending_withdrawals=int(row.get("pendingWithdrawals") or 0),
    )


def find_market(markets: list["Market"], market_address_or_name: str) -> "Market":
    """Case-insensitive match on market address or name."""
    needle = market_address_or_name.lower()
    for market in markets:
        if market.address.lower() == needle or market.name.lower() == needle:
            return market
    raise ValueError("Market does not exist")


@dataclass
class Market:
    lyra: "Lyra" = field(repr=False)
    address: str
    name: str
    base_token: MarketToken
    quote_token: MarketToken
    contract_addresses: MarketContractAddresses
    block: "Block"

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------

    @classmethod
    def get_all(cls, lyra: "Lyra") -> list["Market"]:
        viewer = get_lyra_contract(lyra, LyraContractId.OPTION_MARKET_VIEWER)
        res = lyra.fan_out({
            "block": lambda: lyra.get_block("latest"),
            "addresses": lambda: viewer.functions.getMarketAddresses().call(),
        })
        block = res["block"]
        addresses = [MarketContractAddresses.from_tuple(raw) for raw in res["addresses"]]
        return lyra.map_concurrently(lambda a: cls._from_addresses(lyra, a, block), addresses)

    @classmethod
    def get(cls, lyra: "Lyra", market_address_or_name: str) -> "Market":
        return find_market(cls.get_all(lyra), market_address_or_name)

    @classmethod
    def _from_addresses(cls, lyra: "Lyra", addresses: MarketContractAddresses, block: "Block") -> "Market":
        base = get_erc20_contract(lyra.provider, addresses.base_asset)
        quote = get_erc20_contract(lyra.provider, addresses.quote_asset)
        res = lyra.fan_out({
            "base_symbol": lambda: base.functions.symbol().call(),
            "base_decimals": lambda: base.functions.decimals().call(),
            "quote_symbol": lambda: quote.functions.symbol().call(),
            "quote_decimals": lambda: quote.functions.decimals().call(),
        })
        return cls(
            lyra=lyra,
            address=addresses.option_market,
            name=res["base_symbol"],
            base_token=MarketToken(
                address=addresses.base_asset,
                symbol=res["base_symbol"],
                decimals=int(res["base_decimals"]),
            ),
            quote_token=MarketToken(
                address=addresses.quote_asset,
                symbol=res["quote_symbol"],
                decimals=int(res["quote_decimals"]),
            ),
            contract_addresses=addresses,
            block=block,
        )

    # ------------------------------------------------------------------
    # Dynamic fields
    # ------------------------------------------------------------------

    def liquidity(self) -> MarketLiquidity:
        pool = get_lyra_market_contract(self.lyra, self.contract_addresses, LyraMarketContractId.LIQUIDITY_POOL)
        res = self.lyra.fan_out({
            "liquidity": lambda: pool.functions.getCurrentLiquidity().call(),
            "token_price": lambda: pool.functions.getTokenPrice().call(),
            "queued_deposits": lambda: pool.functions.totalQueuedDeposits().call(),
            "queued_withdrawals": lambda: pool.functions.totalQueuedWithdrawals().call(),
        })
        (free, burnable, used_collat, pending_delta, used_delta, nav) = [int(v) for v in res["liquidity"]]
        return MarketLiquidity(
            free_liquidity=free,
            burnable_liquidity=burnable,
            total_queued_deposits=int(res["queued_deposits"]),
            nav=nav,
            utilization=get_utilization(nav, free),
            total_withdrawing_deposits=int(res["queued_withdrawals"]),
            used_collat_liquidity=used_collat,
            pending_delta_liquidity=pending_delta,
            used_delta_liquidity=used_delta,
            token_price=int(res["token_price"]),
        )

    def liquidity_history(
        self,
        start_timestamp: Optional[int] = None,
        end_timestamp: Optional[int] = None,
    ) -> list[MarketLiquidityHistory]:
        start = start_timestamp if start_timestamp is not None else 0
        end = end_timestamp if end_timestamp is not None else self.block.timestamp
        rows = fetch_snapshots(
            self.lyra,
            MARKET_TOTAL_VALUE_SNAPSHOTS_QUERY,
            "marketTotalValueSnapshots",
            {
                "market": self.address.lower(),
                "startTimestamp": start,
                "endTimestamp": end,
                "period": int(get_snapshot_period(start, end)),
            },
        )
        return [parse_liquidity_snapshot(row) for row in rows]

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def option(self, strike_id: int, is_call: bool) -> "Option":
        from lyra.option import Option

        return Option.from_market(self, strike_id, is_call)
