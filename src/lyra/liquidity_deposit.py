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


class LiquidityDeposit(BaseModel):
    market_address: str
    beneficiary: str
    queue_id: Optional[int] = None
    # Quote deposited (or still queued).
    value: int
    # Liquidity tokens minted; zero while pending.
    balance: int
    token_price_at_deposit: Optional[int] = None
    is_pending: bool
    deposit_requested_timestamp: int
    deposit_timestamp: Optional[int] = None
    transaction_hash: Optional[str] = None

    @classmethod
    def from_processed(cls, market_address: str, beneficiary: str, row: dict[str, Any]) -> "LiquidityDeposit":
        ts = int(row["timestamp"])
        return cls(
            market_address=market_address,
            beneficiary=beneficiary,
            value=int(row["quoteAmount"]),
            balance=int(row["tokenAmount"]),
            token_price_at_deposit=int(row["tokenPriceAtAction"]),
            is_pending=False,
            deposit_requested_timestamp=ts,
            deposit_timestamp=ts,
            transaction_hash=row.get("transactionHash"),
        )

    @classmethod
    def from_pending(cls, market_address: str, beneficiary: str, row: dict[str, Any]) -> "LiquidityDeposit":
        queue_id = row.get("queueID")
        return cls(
            market_address=market_address,
            beneficiary=beneficiary,
            queue_id=int(queue_id) if queue_id is not None else None,
            value=int(row["pendingAmount"]),
            balance=0,
            is_pending=True,
            deposit_requested_timestamp=int(row["timestamp"]),
            transaction_hash=row.get("transactionHash"),
        )

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------

    @classmethod
    def get_by_owner(cls, lyra: "Lyra", market_address_or_name: str, owner: str) -> list["LiquidityDeposit"]:
        return cls.get_by_market(lyra, lyra.market(market_address_or_name), owner)

    @classmethod
    def get_by_market(cls, lyra: "Lyra", market: "Market", owner: str) -> list["LiquidityDeposit"]:
        actions = fetch_lp_user_liquidity(lyra, market, owner)
        deposits = [
            cls.from_processed(market.address, owner, row)
            for row in actions["processed"]
            if row.get("isDeposit")
        ]
        deposits += [
            cls.from_pending(market.address, owner, row)
            for row in actions["pending"]
            if row.get("isDeposit") and int(row.get("pendingAmount") or 0) > 0
        ]
        return sorted(deposits, key=lambda d: d.deposit_requested_timestamp)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @staticmethod
    def deposit(
        lyra: "Lyra",
        market_address_or_name: str,
        beneficiary: str,
        amount_quote: int,
    ) -> Optional[PopulatedTransaction]:
        market = lyra.market(market_address_or_name)
        pool = get_lyra_market_contract(lyra, market.contract_addresses, LyraMarketContractId.LIQUIDITY_POOL)
        data = pool.encode_abi("initiateDeposit", args=[Web3.to_checksum_address(beneficiary), int(amount_quote)])
        return build_tx_with_gas_estimate(lyra, pool.address, beneficiary, data)
