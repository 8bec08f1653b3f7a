from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from lyra.constants import LyraContractId
from lyra.contracts import get_lyra_contract

if TYPE_CHECKING:
    from lyra.lyra import Lyra


class LyraStaking(BaseModel):
    # Seconds between requesting an unstake and the window opening.
    cooldown_period: int
    # Seconds the unstake window stays open.
    unstake_window: int
    total_supply: int

    @classmethod
    def get(cls, lyra: "Lyra") -> "LyraStaking":
        proxy = get_lyra_contract(lyra, LyraContractId.LYRA_STAKING_MODULE_PROXY)
        res = lyra.fan_out({
            "cooldown_period": lambda: proxy.functions.COOLDOWN_SECONDS().call(),
            "unstake_window": lambda: proxy.functions.UNSTAKE_WINDOW().call(),
            "total_supply": lambda: proxy.functions.totalSupply().call(),
        })
        return cls(
            cooldown_period=int(res["cooldown_period"]),
            unstake_window=int(res["unstake_window"]),
            total_supply=int(res["total_supply"]),
        )
