from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel
from web3 import Web3

from lyra.constants import LYRA_TOKEN, MAX_UINT256, LyraContractId
from lyra.contracts import (
    PopulatedTransaction,
    build_tx_with_gas_estimate,
    get_erc20_contract,
    get_lyra_contract,
    get_lyra_contract_address,
)

if TYPE_CHECKING:
    from lyra.lyra import Lyra


class Stake(BaseModel):
    owner: str
    amount: int
    lyra_balance: int
    staking_allowance: int
    staked_balance: int
    new_staked_balance: int
    has_sufficient_balance: bool
    has_allowance: bool
    tx: Optional[PopulatedTransaction] = None

    @staticmethod
    def approve(lyra: "Lyra", owner: str) -> Optional[PopulatedTransaction]:
        token = get_erc20_contract(lyra.provider, get_lyra_contract_address(lyra, LYRA_TOKEN))
        proxy_address = get_lyra_contract_address(lyra, LyraContractId.LYRA_STAKING_MODULE_PROXY)
        data = token.encode_abi("approve", args=[proxy_address, MAX_UINT256])
        return build_tx_with_gas_estimate(lyra, token.address, owner, data)

    @classmethod
    def get(cls, lyra: "Lyra", owner: str, amount: int) -> "Stake":
        owner = Web3.to_checksum_address(owner)
        account = lyra.account(owner)
        res = lyra.fan_out({
            "lyra_balance": account.lyra_balance,
            "staked": account.staked_lyra_balance,
        })
        lyra_balance = res["lyra_balance"]
        staked = res["staked"]
        has_sufficient_balance = 0 < amount <= lyra_balance.balance
        has_allowance = lyra_balance.staking_allowance >= amount
        tx = None
        # Estimation would revert without balance and allowance.
        if has_sufficient_balance and has_allowance:
            proxy = get_lyra_contract(lyra, LyraContractId.LYRA_STAKING_MODULE_PROXY)
            data = proxy.encode_abi("stake", args=[owner, int(amount)])
            tx = build_tx_with_gas_estimate(lyra, proxy.address, owner, data)
        return cls(
            owner=owner,
            amount=int(amount),
            lyra_balance=lyra_balance.balance,
            staking_allowance=lyra_balance.staking_allowance,
            staked_balance=staked.balance,
            new_staked_balance=staked.balance + int(amount),
            has_sufficient_balance=has_sufficient_balance,
            has_allowance=has_allowance,
            tx=tx,
        )
