from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lyra.queries import LP_USER_LIQUIDITY_QUERY

if TYPE_CHECKING:
    from lyra.lyra import Lyra
    from lyra.market import Market


def fetch_lp_user_liquidity(lyra: "Lyra", market: "Market", owner: str) -> dict[str, list[dict[str, Any]]]:
    """
    Pending and processed LP actions for one user in one market's pool.

    Returns {"pending": [...], "processed": [...]}, each ordered by timestamp.
    """
    data = lyra.subgraph.query(
        LP_USER_LIQUIDITY_QUERY,
        {
            "user": owner.lower(),
            "pool": market.contract_addresses.liquidity_pool.lower(),
        },
    )
    pending: list[dict[str, Any]] = []
    processed: list[dict[str, Any]] = []
    for entry in data.get("lpuserLiquidities") or []:
        pending.extend(entry.get("pendingDepositsAndWithdrawals") or [])
        processed.extend(entry.get("depositsAndWithdrawals") or [])
    pending.sort(key=lambda r: int(r["timestamp"]))
    processed.sort(key=lambda r: int(r["timestamp"]))
    return {"pending": pending, "processed": processed}
