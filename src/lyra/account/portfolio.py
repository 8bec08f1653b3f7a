"""
Portfolio value of an account over time.

The indexer keeps three per-account series (stable balance, long option value,
short option value with its collateral). They are bucketed by timestamp,
aligned on the union of timestamps and forward-filled so every row carries the
latest known value of each series.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pandas as pd
from pydantic import BaseModel

from lyra.account.balances import get_account_balances_and_allowances
from lyra.constants import SnapshotPeriod
from lyra.queries import (
    ACCOUNT_BALANCE_SNAPSHOTS_QUERY,
    LONG_OPTION_SNAPSHOTS_QUERY,
    SHORT_OPTION_SNAPSHOTS_QUERY,
)
from lyra.utils.bn import from_big_number
from lyra.utils.snapshots import fetch_snapshots, get_snapshot_period

if TYPE_CHECKING:
    from lyra.lyra import Lyra


class AccountPortfolioBalance(BaseModel):
    long_option_value: float
    short_option_value: float
    collateral_value: float
    balance: float
    total: float


class AccountPortfolioHistorySnapshot(AccountPortfolioBalance):
    timestamp: int


PORTFOLIO_COLUMNS = ["balance", "long_option_value", "short_option_value", "collateral_value"]


def portfolio_total(balance: float, long_value: float, short_value: float, collateral: float) -> float:
    # Short positions are liabilities backed by the posted collateral.
    return balance + long_value + collateral - short_value


def _bucket(rows: list[dict[str, Any]], fields: dict[str, str]) -> pd.DataFrame:
    """Sum each subgraph field (renamed per `fields`) per timestamp."""
    records = [
        {"timestamp": int(r["timestamp"]), **{col: from_big_number(r.get(src)) for src, col in fields.items()}}
        for r in rows
    ]
    df = pd.DataFrame.from_records(records, columns=["timestamp", *fields.values()])
    return df.groupby("timestamp").sum()


def bucket_portfolio_snapshots(
    balances: list[dict[str, Any]],
    longs: list[dict[str, Any]],
    shorts: list[dict[str, Any]],
) -> list[AccountPortfolioHistorySnapshot]:
    frames = [
        _bucket(balances, {"balance": "balance"}),
        _bucket(longs, {"optionValue": "long_option_value"}),
        _bucket(shorts, {"optionValue": "short_option_value", "collateralValue": "collateral_value"}),
    ]
    combined = pd.concat(frames, axis=1).sort_index()
    if combined.empty:
        return []
    combined = combined.reindex(columns=PORTFOLIO_COLUMNS).ffill().fillna(0.0)

    out: list[AccountPortfolioHistorySnapshot] = []
    for ts, row in combined.iterrows():
        balance = float(row["balance"])
        long_value = float(row["long_option_value"])
        short_value = float(row["short_option_value"])
        collateral = float(row["collateral_value"])
        out.append(
            AccountPortfolioHistorySnapshot(
                timestamp=int(ts),
                long_option_value=long_value,
                short_option_value=short_value,
                collateral_value=collateral,
                balance=balance,
                total=portfolio_total(balance, long_value, short_value, collateral),
            )
        )
    return out


def get_portfolio_history(
    lyra: "Lyra",
    owner: str,
    start_timestamp: int,
    end_timestamp: int,
) -> list[AccountPortfolioHistorySnapshot]:
    variables = {
        "account": owner.lower(),
        "startTimestamp": int(start_timestamp),
        "endTimestamp": int(end_timestamp),
        "period": int(get_snapshot_period(start_timestamp, end_timestamp)),
    }
    res = lyra.fan_out({
        "balances": lambda: fetch_snapshots(
            lyra, ACCOUNT_BALANCE_SNAPSHOTS_QUERY, "accountBalanceSnapshots", variables
        ),
        "longs": lambda: fetch_snapshots(lyra, LONG_OPTION_SNAPSHOTS_QUERY, "longOptionSnapshots", variables),
        "shorts": lambda: fetch_snapshots(lyra, SHORT_OPTION_SNAPSHOTS_QUERY, "shortOptionSnapshots", variables),
    })
    return bucket_portfolio_snapshots(res["balances"], res["longs"], res["shorts"])


def get_portfolio_balance(lyra: "Lyra", owner: str) -> AccountPortfolioBalance:
    """
    Portfolio value now: stable balances read on chain, option and collateral
    values from the most recent indexed snapshot of the last day.
    """
    res = lyra.fan_out({
        "balances": lambda: get_account_balances_and_allowances(lyra, owner),
        "block": lambda: lyra.get_block("latest"),
    })
    end = res["block"].timestamp
    history = get_portfolio_history(lyra, owner, end - int(SnapshotPeriod.ONE_DAY), end)
    latest = history[-1] if history else None

    balance = sum(from_big_number(s.balance, s.decimals) for s in res["balances"].stables)
    long_value = latest.long_option_value if latest else 0.0
    short_value = latest.short_option_value if latest else 0.0
    collateral = latest.collateral_value if latest else 0.0
    return AccountPortfolioBalance(
        long_option_value=long_value,
        short_option_value=short_value,
        collateral_value=collateral,
        balance=balance,
        total=portfolio_total(balance, long_value, short_value, collateral),
    )
