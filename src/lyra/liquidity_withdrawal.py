from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel
from web3 import Web3

from lyra.constants import LyraMarketContractId
from lyra.contracts import PopulatedTransaction, build_tx_with_gas_estimate, get_lyra_market_contract
from lyra.utils.lp_user_liquidity import fetch_lp_user_liquidity

if TYPE_CHECKING:
    from lyra.lyra import Lyra
    from lyra.market import Market


class LiquidityWithdrawal(BaseModel):
    market_address: str
    beneficiary: str
    queue_id: Optional[int] = None
    # Liquidity tokens burned (or still queued).
    balance: int
    # Quote received; zero while pending.
    value: int
    token_price_at_withdraw: Optional[int] = None
    is_pending: bool
    withdrawal_requested_timestamp: int
    withdrawal_timestamp: Optional[int] = None
    transaction_hash: Optional[str] = None

    @classmethod
    def from_processed(cls, market_address: str, beneficiary: str, row: dict[str, Any]) -> "LiquidityWithdrawal":
        ts = int(row["timestamp"])
        return cls(
            market_address=market_address,
            beneficiary=beneficiary,
            balance=int(row["tokenAmount"]),
            value=int(row["quoteAmount"]),
            token_price_at_withdraw=int(row["tokenPriceAtAction"]),
            is_pending=False,
            withdrawal_requested_timestamp=ts,
            withdrawal_timestamp=ts,
            transaction_hash=row.get("transactionHash"),
        )

    @classmethod
    def from_pending(cls, market_address: str, beneficiary: str, row: dict[str, Any]) -> "LiquidityWithdrawal":
        queue_id = row.get("queueID")
        return cls(
            market_address=market_address,
            beneficiary=beneficiary,
            queue_id=int(queue_id) if queue_id is not None else None,
            balance=int(row["pendingAmount"]),
            value=0,
            is_pending=True,
            withdrawal_requested_timestamp=int(row["timestamp"]),
            transaction_hash=row.get("transactionHash"),
        )

    @classmethod
    def get_by_owner(cls, lyra: "Lyra", market_address_or_name: str, owner: str) -> list["LiquidityWithdrawal"]:
        return cls.get_by_market(lyra, lyra.market(market_address_or_name), owner)

    @classmethod
    def get_by_market(cls, lyra: "Lyra", market: "Market", owner: str) -> list["LiquidityWithdrawal"]:
        actions = fetch_lp_user_liquidity(lyra, market, owner)
        withdrawals = [
            cls.from_processed(market.address, owner, row)
            for row in actions["processed"]
            if not row.get("isDeposit")
        ]
        withdrawals += [
            cls.from_pending(market.address, owner, row)
            for row in actions["pending"]
            if not row.get("isDeposit") and int(row.get("pendingAmount") or 0) > 0
        ]
        return sorted(withdrawals, key=lambda w: w.withdrawal_requested_timestamp)

    @staticmethod
    def withdraw(
        lyra: "Lyra",
        market_address_or_name: str,
        beneficiary: str,
        amount_liquidity_tokens: int,
    ) -> Optional[PopulatedTransaction]:
        market = lyra.market(market_address_or_name)
        pool = get_lyra_market_contract(lyra, market.contract_addresses, LyraMarketContractId.LIQUIDITY_POOL)
        data = pool.encode_abi("initiateWithdraw", args=[Web3.to_checksum_address(beneficiary), int(amount_liquidity_tokens)])
        return build_tx_with_gas_estimate(lyra, pool.address, beneficiary, data)
