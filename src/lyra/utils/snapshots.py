"""
Subgraph snapshot helpers: period selection and timestamp pagination.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from lyra.constants import SNAPSHOT_RESULT_LIMIT, SnapshotPeriod

if TYPE_CHECKING:
    from lyra.lyra import Lyra

logger = logging.getLogger(__name__)


def get_snapshot_period(
    start_timestamp: int,
    end_timestamp: int,
    periods: list[SnapshotPeriod] | None = None,
) -> SnapshotPeriod:
    """
    Smallest period that covers [start, end] in at most SNAPSHOT_RESULT_LIMIT buckets.

    Falls back to the largest candidate when even that one overflows the limit.
    """
    candidates = sorted(periods or list(SnapshotPeriod))
    duration = max(0, int(end_timestamp) - int(start_timestamp))
    for period in candidates:
        if duration / int(period) <= SNAPSHOT_RESULT_LIMIT:
            return period
    return candidates[-1]


def _row_key(row: dict[str, Any]) -> Any:
    if row.get("id") is not None:
        return row["id"]
    return tuple(sorted((k, str(v)) for k, v in row.items()))


def fetch_snapshots(
    lyra: "Lyra",
    query: str,
    key: str,
    variables: dict[str, Any],
) -> list[dict[str, Any]]:
    """
    Run a timestamp-ordered snapshot query, paging while pages come back full.

    The query must accept `$startTimestamp` and return at most
    SNAPSHOT_RESULT_LIMIT rows ordered by timestamp ascending. The next page
    starts at the last timestamp seen, so rows sharing it across a page
    boundary are still fetched; rows already collected are dropped by `id`.
    """
    rows: list[dict[str, Any]] = []
    seen: set[Any] = set()
    page_vars = dict(variables)
    while True:
        data = lyra.subgraph.query(query, page_vars)
        page = data.get(key) or []
        fresh = [r for r in page if _row_key(r) not in seen]
        seen.update(_row_key(r) for r in fresh)
        rows.extend(fresh)
        if len(page) < SNAPSHOT_RESULT_LIMIT:
            break
        if not fresh:
            logger.warning(f"{key}: page at {page_vars.get('startTimestamp')} had no new rows, stopping")
            break
        last_ts = int(page[-1]["timestamp"])
        logger.debug(f"{key}: page full, continuing from {last_ts}")
        page_vars = {**page_vars, "startTimestamp": last_ts}
    return rows
