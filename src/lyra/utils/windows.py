"""
Staking cooldown and unstake windows.

A staker's recorded cooldown timestamp opens the cooldown; the unstake window
opens when the cooldown ends and lasts `unstake_window` seconds. Both ranges
are inclusive on both ends. A cooldown of 0 means none was requested.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StakingWindows:
    cooldown_start_timestamp: Optional[int]
    cooldown_end_timestamp: Optional[int]
    unstake_window_start_timestamp: Optional[int]
    unstake_window_end_timestamp: Optional[int]
    is_in_cooldown: bool
    is_in_unstake_window: bool


def _contains(start: Optional[int], end: Optional[int], now: int) -> bool:
    return start is not None and end is not None and start <= now <= end


def get_staking_windows(
    account_cooldown: int,
    cooldown_period: int,
    unstake_window: int,
    now: int,
) -> StakingWindows:
    cooldown_start = account_cooldown if account_cooldown > 0 else None
    cooldown_end = cooldown_start + cooldown_period if cooldown_start is not None else None
    unstake_start = cooldown_end
    unstake_end = unstake_start + unstake_window if unstake_start is not None else None
    return StakingWindows(
        cooldown_start_timestamp=cooldown_start,
        cooldown_end_timestamp=cooldown_end,
        unstake_window_start_timestamp=unstake_start,
        unstake_window_end_timestamp=unstake_end,
        is_in_cooldown=_contains(cooldown_start, cooldown_end, now),
        is_in_unstake_window=_contains(unstake_start, unstake_end, now),
    )
