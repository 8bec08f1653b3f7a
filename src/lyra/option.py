from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel

from lyra.constants import LyraMarketContractId
from lyra.contracts import get_lyra_market_contract
from lyra.queries import OPTION_VOLUME_SNAPSHOTS_QUERY
from lyra.utils.snapshots import fetch_snapshots, get_snapshot_period

if TYPE_CHECKING:
    from lyra.lyra import Lyra
    from lyra.market import Market


class Strike(BaseModel):
    id: int
    strike_price: int
    skew: int
    long_call_open_interest: int
    short_call_base_open_interest: int
    short_call_quote_open_interest: int
    long_put_open_interest: int
    short_put_open_interest: int
    board_id: int


class OptionTradingVolume(BaseModel):
    timestamp: int
    notional_volume: int
    premium_volume: int
    total_notional_volume: int
    total_premium_volume: int


def subgraph_option_id(market_address: str, strike_id: int, is_call: bool) -> str:
    return f"{market_address.lower()}-{int(strike_id)}-{'call' if is_call else 'put'}"


def parse_trading_volume(row: dict[str, Any]) -> OptionTradingVolume:
    return OptionTradingVolume(
        timestamp=int(row["timestamp"]),
        notional_volume=int(row["notionalVolume"]),
        premium_volume=int(row["premiumVolume"]),
        total_notional_volume=int(row["totalNotionalVolume"]),
        total_premium_volume=int(row["totalPremiumVolume"]),
    )


@dataclass
class Option:
    market: "Market"
    strike: Strike
    is_call: bool

    @property
    def strike_id(self) -> int:
        return self.strike.id

    @property
    def open_interest(self) -> int:
        if self.is_call:
            return (
                self.strike.long_call_open_interest
                + self.strike.short_call_base_open_interest
                + self.strike.short_call_quote_open_interest
            )
        return self.strike.long_put_open_interest + self.strike.short_put_open_interest

    @classmethod
    def get(cls, lyra: "Lyra", market_address_or_name: str, strike_id: int, is_call: bool) -> "Option":
        return cls.from_market(lyra.market(market_address_or_name), strike_id, is_call)

    @classmethod
    def from_market(cls, market: "Market", strike_id: int, is_call: bool) -> "Option":
        option_market = get_lyra_market_contract(
            market.lyra, market.contract_addresses, LyraMarketContractId.OPTION_MARKET
        )
        raw = option_market.functions.getStrike(int(strike_id)).call()
        values = [int(v) for v in raw]
        # An unlisted strike comes back zeroed.
        if values[0] == 0:
            raise ValueError("Strike does not exist")
        return cls(market=market, strike=Strike(**dict(zip(Strike.model_fields, values))), is_call=is_call)

    def trading_volume_history(
        self,
        start_timestamp: Optional[int] = None,
        end_timestamp: Optional[int] = None,
    ) -> list[OptionTradingVolume]:
        start = start_timestamp if start_timestamp is not None else 0
        end = end_timestamp if end_timestamp is not None else self.market.block.timestamp
        rows = fetch_snapshots(
            self.market.lyra,
            OPTION_VOLUME_SNAPSHOTS_QUERY,
            "optionVolumeSnapshots",
            {
                "option": subgraph_option_id(self.market.address, self.strike_id, self.is_call),
                "startTimestamp": start,
                "endTimestamp": end,
                "period": int(get_snapshot_period(start, end)),
            },
        )
        return [parse_trading_volume(row) for row in rows]
