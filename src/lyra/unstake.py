from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel
from web3 import Web3

from lyra.constants import LyraContractId
from lyra.contracts import PopulatedTransaction, build_tx_with_gas_estimate, get_lyra_contract

if TYPE_CHECKING:
    from lyra.lyra import Lyra


class Unstake(BaseModel):
    owner: str
    amount: int
    staked_balance: int
    new_staked_balance: int
    is_in_cooldown: bool
    is_in_unstake_window: bool
    unstake_window_start_timestamp: Optional[int] = None
    unstake_window_end_timestamp: Optional[int] = None
    tx: Optional[PopulatedTransaction] = None

    @staticmethod
    def request_unstake(lyra: "Lyra", owner: str) -> Optional[PopulatedTransaction]:
        proxy = get_lyra_contract(lyra, LyraContractId.LYRA_STAKING_MODULE_PROXY)
        data = proxy.encode_abi("cooldown", args=[])
        return build_tx_with_gas_estimate(lyra, proxy.address, owner, data)

    @classmethod
    def get(cls, lyra: "Lyra", owner: str, amount: int) -> "Unstake":
        owner = Web3.to_checksum_address(owner)
        staking = lyra.account(owner).lyra_staking()
        staked = staking.staked_lyra_balance.balance
        tx = None
        # redeem() reverts outside the unstake window.
        if staking.is_in_unstake_window and 0 < amount <= staked:
            proxy = get_lyra_contract(lyra, LyraContractId.LYRA_STAKING_MODULE_PROXY)
            data = proxy.encode_abi("redeem", args=[owner, int(amount)])
            tx = build_tx_with_gas_estimate(lyra, proxy.address, owner, data)
        return cls(
            owner=owner,
            amount=int(amount),
            staked_balance=staked,
            new_staked_balance=max(0, staked - int(amount)),
            is_in_cooldown=staking.is_in_cooldown,
            is_in_unstake_window=staking.is_in_unstake_window,
            unstake_window_start_timestamp=staking.unstake_window_start_timestamp,
            unstake_window_end_timestamp=staking.unstake_window_end_timestamp,
            tx=tx,
        )
