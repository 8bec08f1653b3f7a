from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from web3 import Web3

from lyra.account.balances import AccountStableBalance
from lyra.constants import ONE_BN, UNIT, ZERO_BN, LyraContractId, LyraMarketContractId
from lyra.contracts import get_erc20_contract, get_lyra_contract_address, get_lyra_market_contract
from lyra.utils.bn import bn_div, bn_mul_div

if TYPE_CHECKING:
    from lyra.liquidity_deposit import LiquidityDeposit
    from lyra.liquidity_withdrawal import LiquidityWithdrawal
    from lyra.lyra import Lyra
    from lyra.market import Market


@dataclass
class AccountLiquidityTokenBalance:
    market: "Market"
    address: str
    balance: int
    value: int
    token_price: int
    symbol: str
    decimals: int
    allowance: int


@dataclass(frozen=True)
class AccountLiquidityProfitAndLoss:
    pnl: int
    pnl_percent: int


def get_liquidity_deposit_balance(lyra: "Lyra", owner: str, market: "Market") -> AccountStableBalance:
    """Quote balance available to deposit and its allowance to the market's LiquidityPool."""
    owner = Web3.to_checksum_address(owner)
    erc20 = get_erc20_contract(lyra.provider, market.quote_token.address)
    pool_address = market.contract_addresses.liquidity_pool
    res = lyra.fan_out({
        "balance": lambda: erc20.functions.balanceOf(owner).call(),
        "allowance": lambda: erc20.functions.allowance(owner, pool_address).call(),
    })
    return AccountStableBalance(
        address=market.quote_token.address,
        symbol=market.quote_token.symbol,
        decimals=market.quote_token.decimals,
        balance=int(res["balance"]),
        allowance=int(res["allowance"]),
    )


def get_liquidity_token_balance(lyra: "Lyra", owner: str, market: "Market") -> AccountLiquidityTokenBalance:
    owner = Web3.to_checksum_address(owner)
    tokens = get_lyra_market_contract(lyra, market.contract_addresses, LyraMarketContractId.LIQUIDITY_TOKENS)
    pool = get_lyra_market_contract(lyra, market.contract_addresses, LyraMarketContractId.LIQUIDITY_POOL)
    wrapper = get_lyra_contract_address(lyra, LyraContractId.OPTION_MARKET_WRAPPER)
    res = lyra.fan_out({
        "balance": lambda: tokens.functions.balanceOf(owner).call(),
        "allowance": lambda: tokens.functions.allowance(owner, wrapper).call(),
        "symbol": lambda: tokens.functions.symbol().call(),
        "decimals": lambda: tokens.functions.decimals().call(),
        "token_price": lambda: pool.functions.getTokenPrice().call(),
    })
    balance = int(res["balance"])
    token_price = int(res["token_price"])
    return AccountLiquidityTokenBalance(
        market=market,
        address=tokens.address,
        balance=balance,
        value=bn_mul_div(balance, token_price, UNIT),
        token_price=token_price,
        symbol=res["symbol"],
        decimals=int(res["decimals"]),
        allowance=int(res["allowance"]),
    )


def get_average_cost_per_lp_token(
    deposits: list["LiquidityDeposit"],
    withdrawals: list["LiquidityWithdrawal"],
) -> int:
    """
    Running average quote cost of one liquidity token.

    Processed deposits add their quote value and minted tokens; processed
    withdrawals remove their tokens together with the matching share of cost
    at the running average. Pending actions are ignored. Zero when no tokens
    remain.
    """
    events: list[tuple[int, int, bool, int, int]] = []
    for d in deposits:
        if not d.is_pending:
            events.append((d.deposit_timestamp or d.deposit_requested_timestamp, 0, True, d.value, d.balance))
    for w in withdrawals:
        if not w.is_pending:
            events.append((w.withdrawal_timestamp or w.withdrawal_requested_timestamp, 1, False, w.value, w.balance))
    # Deposits sort ahead of withdrawals sharing a timestamp.
    events.sort(key=lambda e: (e[0], e[1]))

    total_cost = ZERO_BN
    total_tokens = ZERO_BN
    for _, _, is_deposit, value, tokens in events:
        if is_deposit:
            total_cost += value
            total_tokens += tokens
        elif total_tokens > 0:
            burned = min(tokens, total_tokens)
            total_cost -= bn_mul_div(total_cost, burned, total_tokens)
            total_tokens -= burned
    if total_tokens <= 0:
        return ZERO_BN
    return bn_div(total_cost * UNIT, total_tokens)


def get_liquidity_profit_and_loss(
    balance: int,
    value: int,
    token_price: int,
    avg_cost_per_token: int,
) -> AccountLiquidityProfitAndLoss:
    """Unrealized PnL of an LP position; percent is zero when there is no cost basis."""
    avg_value = bn_mul_div(avg_cost_per_token, balance, UNIT)
    pnl = value - avg_value
    pnl_percent = bn_div(token_price * UNIT, avg_cost_per_token) - ONE_BN if avg_cost_per_token > 0 else ZERO_BN
    return AccountLiquidityProfitAndLoss(pnl=pnl, pnl_percent=pnl_percent)
