"""
Account: everything the SDK knows about one wallet.

Reads balances, LP positions, staking state and portfolio history, and
populates the unsigned transactions a wallet needs (approvals, deposits,
withdrawals, staking, reward claims). Nothing is cached; every call reads
fresh remote state.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel
from web3 import Web3

from lyra.account.balances import (
    AccountBalances,
    AccountBaseBalance,
    AccountOptionTokenBalance,
    AccountStableBalance,
    get_account_balances_and_allowances,
)
from lyra.account.liquidity import (
    AccountLiquidityProfitAndLoss,
    AccountLiquidityTokenBalance,
    get_average_cost_per_lp_token,
    get_liquidity_deposit_balance,
    get_liquidity_profit_and_loss,
    get_liquidity_token_balance,
)
from lyra.account.portfolio import (
    AccountPortfolioBalance,
    AccountPortfolioHistorySnapshot,
    get_portfolio_balance,
    get_portfolio_history,
)
from lyra.constants import (
    LYRA_TOKEN,
    OP_TOKEN,
    STAKED_LYRA_TOKEN,
    TESTNET_DEPLOYMENTS,
    ZERO_BN,
    LyraContractId,
    LyraMarketContractId,
)
from lyra.contracts import (
    PopulatedTransaction,
    build_tx_with_gas_estimate,
    get_erc20_contract,
    get_lyra_contract,
    get_lyra_contract_address,
    get_lyra_market_contract,
)
from lyra.liquidity_deposit import LiquidityDeposit
from lyra.liquidity_withdrawal import LiquidityWithdrawal
from lyra.lyra_staking import LyraStaking
from lyra.stake import Stake
from lyra.unstake import Unstake
from lyra.utils.windows import get_staking_windows

if TYPE_CHECKING:
    from lyra.lyra import Lyra

logger = logging.getLogger(__name__)

__all__ = [
    "Account",
    "AccountBalances",
    "AccountBaseBalance",
    "AccountLiquidityProfitAndLoss",
    "AccountLiquidityTokenBalance",
    "AccountLyraBalance",
    "AccountLyraStaking",
    "AccountOptionTokenBalance",
    "AccountPortfolioBalance",
    "AccountPortfolioHistorySnapshot",
    "AccountStableBalance",
    "AccountStakedLyraBalance",
    "ClaimableBalance",
]


class AccountLyraBalance(BaseModel):
    balance: int
    staking_allowance: int


class AccountStakedLyraBalance(BaseModel):
    balance: int


class ClaimableBalance(BaseModel):
    op: int
    lyra: int


class AccountLyraStaking(BaseModel):
    staking: LyraStaking
    lyra_balance: AccountLyraBalance
    staked_lyra_balance: AccountStakedLyraBalance
    is_in_unstake_window: bool
    is_in_cooldown: bool
    unstake_window_start_timestamp: Optional[int] = None
    unstake_window_end_timestamp: Optional[int] = None


class Account:
    def __init__(self, lyra: "Lyra", address: str):
        self.lyra = lyra
        self.address = Web3.to_checksum_address(address)

    def __repr__(self) -> str:
        return f"Account({self.address})"

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------

    @classmethod
    def get(cls, lyra: "Lyra", address: str) -> "Account":
        return cls(lyra, address)

    # ------------------------------------------------------------------
    # Dynamic fields
    # ------------------------------------------------------------------

    def balances(self) -> AccountBalances:
        return get_account_balances_and_allowances(self.lyra, self.address)

    def liquidity_deposit_balance(self, market_address_or_name: str) -> AccountStableBalance:
        market = self.lyra.market(market_address_or_name)
        return get_liquidity_deposit_balance(self.lyra, self.address, market)

    def liquidity_token_balance(self, market_address_or_name: str) -> AccountLiquidityTokenBalance:
        market = self.lyra.market(market_address_or_name)
        return get_liquidity_token_balance(self.lyra, self.address, market)

    def liquidity_unrealized_pnl(self, market_address_or_name: str) -> AccountLiquidityProfitAndLoss:
        market = self.lyra.market(market_address_or_name)
        res = self.lyra.fan_out({
            "token_balance": lambda: get_liquidity_token_balance(self.lyra, self.address, market),
            "deposits": lambda: LiquidityDeposit.get_by_market(self.lyra, market, self.address),
            "withdrawals": lambda: LiquidityWithdrawal.get_by_market(self.lyra, market, self.address),
        })
        token_balance = res["token_balance"]
        avg_cost = get_average_cost_per_lp_token(res["deposits"], res["withdrawals"])
        return get_liquidity_profit_and_loss(
            balance=token_balance.balance,
            value=token_balance.value,
            token_price=token_balance.token_price,
            avg_cost_per_token=avg_cost,
        )

    def lyra_balance(self) -> AccountLyraBalance:
        token = get_erc20_contract(self.lyra.provider, get_lyra_contract_address(self.lyra, LYRA_TOKEN))
        proxy_address = get_lyra_contract_address(self.lyra, LyraContractId.LYRA_STAKING_MODULE_PROXY)
        res = self.lyra.fan_out({
            "balance": lambda: token.functions.balanceOf(self.address).call(),
            "allowance": lambda: token.functions.allowance(self.address, proxy_address).call(),
        })
        return AccountLyraBalance(balance=int(res["balance"]), staking_allowance=int(res["allowance"]))

    def staked_lyra_balance(self) -> AccountStakedLyraBalance:
        token = get_erc20_contract(self.lyra.provider, get_lyra_contract_address(self.lyra, STAKED_LYRA_TOKEN))
        return AccountStakedLyraBalance(balance=int(token.functions.balanceOf(self.address).call()))

    def claimable_rewards(self) -> ClaimableBalance:
        distributor = get_lyra_contract(self.lyra, LyraContractId.MULTI_DISTRIBUTOR)
        stk_lyra = get_lyra_contract_address(self.lyra, STAKED_LYRA_TOKEN)
        op = get_lyra_contract_address(self.lyra, OP_TOKEN)
        res = self.lyra.fan_out({
            "lyra": lambda: distributor.functions.claimableBalances(self.address, stk_lyra).call(),
            "op": lambda: distributor.functions.claimableBalances(self.address, op).call(),
        })
        return ClaimableBalance(
            lyra=int(res["lyra"] or ZERO_BN),
            op=int(res["op"] or ZERO_BN),
        )

    def claim(self, token_addresses: list[str]) -> Optional[PopulatedTransaction]:
        distributor = get_lyra_contract(self.lyra, LyraContractId.MULTI_DISTRIBUTOR)
        tokens = [Web3.to_checksum_address(t) for t in token_addresses]
        data = distributor.encode_abi("claim", args=[tokens])
        return build_tx_with_gas_estimate(self.lyra, distributor.address, self.address, data)

    # ------------------------------------------------------------------
    # Approval
    # ------------------------------------------------------------------

    def approve_option_token(self, market_address_or_name: str, is_allowed: bool) -> PopulatedTransaction:
        market = self.lyra.market(market_address_or_name)
        option_token = get_lyra_market_contract(self.lyra, market.contract_addresses, LyraMarketContractId.OPTION_TOKEN)
        wrapper = get_lyra_contract_address(self.lyra, LyraContractId.OPTION_MARKET_WRAPPER)
        data = option_token.encode_abi("setApprovalForAll", args=[wrapper, bool(is_allowed)])
        tx = build_tx_with_gas_estimate(self.lyra, option_token.address, self.address, data)
        if not tx:
            raise RuntimeError("Failed to estimate gas for setApprovalForAll transaction")
        return tx

    def _approve_wrapper(self, token_address: str, amount: int) -> Optional[PopulatedTransaction]:
        wrapper = get_lyra_contract_address(self.lyra, LyraContractId.OPTION_MARKET_WRAPPER)
        erc20 = get_erc20_contract(self.lyra.provider, token_address)
        data = erc20.encode_abi("approve", args=[wrapper, int(amount)])
        return build_tx_with_gas_estimate(self.lyra, erc20.address, self.address, data)

    def approve_stable_token(self, token_address_or_name: str, amount: int) -> Optional[PopulatedTransaction]:
        stable = self.balances().stable(token_address_or_name)
        return self._approve_wrapper(stable.address, amount)

    def approve_base_token(self, token_or_market_address_or_name: str, amount: int) -> Optional[PopulatedTransaction]:
        base = self.balances().base(token_or_market_address_or_name)
        return self._approve_wrapper(base.address, amount)

    def drip(self) -> PopulatedTransaction:
        if self.lyra.deployment not in TESTNET_DEPLOYMENTS:
            raise RuntimeError("Faucet is only supported on local and kovan contracts")
        faucet = get_lyra_contract(self.lyra, LyraContractId.TEST_FAUCET)
        data = faucet.encode_abi("drip", args=[])
        tx = build_tx_with_gas_estimate(self.lyra, faucet.address, self.address, data)
        if not tx:
            raise RuntimeError("Failed to estimate gas for drip transaction")
        return tx

    def approve_deposit(self, market_address_or_name: str, amount: int) -> Optional[PopulatedTransaction]:
        market = self.lyra.market(market_address_or_name)
        quote = get_liquidity_deposit_balance(self.lyra, self.address, market)
        erc20 = get_erc20_contract(self.lyra.provider, quote.address)
        data = erc20.encode_abi("approve", args=[market.contract_addresses.liquidity_pool, int(amount)])
        return build_tx_with_gas_estimate(self.lyra, erc20.address, self.address, data)

    def deposit(
        self,
        market_address_or_name: str,
        beneficiary: str,
        amount_quote: int,
    ) -> Optional[PopulatedTransaction]:
        return LiquidityDeposit.deposit(self.lyra, market_address_or_name, beneficiary, amount_quote)

    def withdraw(
        self,
        market_address_or_name: str,
        beneficiary: str,
        amount_liquidity_tokens: int,
    ) -> Optional[PopulatedTransaction]:
        return LiquidityWithdrawal.withdraw(self.lyra, market_address_or_name, beneficiary, amount_liquidity_tokens)

    # ------------------------------------------------------------------
    # Staking
    # ------------------------------------------------------------------

    def lyra_staking(self) -> AccountLyraStaking:
        proxy = get_lyra_contract(self.lyra, LyraContractId.LYRA_STAKING_MODULE_PROXY)
        res = self.lyra.fan_out({
            "block": lambda: self.lyra.get_block("latest"),
            "lyra_balance": self.lyra_balance,
            "staked_lyra_balance": self.staked_lyra_balance,
            "staking": self.lyra.lyra_staking,
            "cooldown": lambda: proxy.functions.stakersCooldowns(self.address).call(),
        })
        staking: LyraStaking = res["staking"]
        windows = get_staking_windows(
            account_cooldown=int(res["cooldown"]),
            cooldown_period=staking.cooldown_period,
            unstake_window=staking.unstake_window,
            now=res["block"].timestamp,
        )
        return AccountLyraStaking(
            staking=staking,
            lyra_balance=res["lyra_balance"],
            staked_lyra_balance=res["staked_lyra_balance"],
            is_in_unstake_window=windows.is_in_unstake_window,
            is_in_cooldown=windows.is_in_cooldown,
            unstake_window_start_timestamp=windows.unstake_window_start_timestamp,
            unstake_window_end_timestamp=windows.unstake_window_end_timestamp,
        )

    def approve_stake(self) -> Optional[PopulatedTransaction]:
        return Stake.approve(self.lyra, self.address)

    def stake(self, amount: int) -> Stake:
        return Stake.get(self.lyra, self.address, amount)

    def request_unstake(self) -> Optional[PopulatedTransaction]:
        return Unstake.request_unstake(self.lyra, self.address)

    def unstake(self, amount: int) -> Unstake:
        return Unstake.get(self.lyra, self.address, amount)

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def liquidity_deposits(self, market_address_or_name: str) -> list[LiquidityDeposit]:
        return self.lyra.liquidity_deposits(market_address_or_name, self.address)

    def liquidity_withdrawals(self, market_address_or_name: str) -> list[LiquidityWithdrawal]:
        return self.lyra.liquidity_withdrawals(market_address_or_name, self.address)

    def portfolio_history(self, start_timestamp: int) -> list[AccountPortfolioHistorySnapshot]:
        end_timestamp = self.lyra.get_block("latest").timestamp
        return get_portfolio_history(self.lyra, self.address, start_timestamp, end_timestamp)

    def portfolio_balance(self) -> AccountPortfolioBalance:
        return get_portfolio_balance(self.lyra, self.address)
