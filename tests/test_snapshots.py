from __future__ import annotations

from lyra.constants import SNAPSHOT_RESULT_LIMIT, SnapshotPeriod
from lyra.utils.snapshots import fetch_snapshots, get_snapshot_period


class TestSnapshotPeriod:
    def test_short_range_uses_fifteen_minutes(self):
        assert get_snapshot_period(0, 0) == SnapshotPeriod.FIFTEEN_MINUTES
        assert get_snapshot_period(0, 900 * SNAPSHOT_RESULT_LIMIT) == SnapshotPeriod.FIFTEEN_MINUTES

    def test_range_just_over_limit_moves_up_one_period(self):
        assert get_snapshot_period(0, 900 * SNAPSHOT_RESULT_LIMIT + 1) == SnapshotPeriod.ONE_HOUR

    def test_multi_year_range_uses_daily_or_weekly(self):
        two_years = 2 * 365 * 86400
        assert get_snapshot_period(0, two_years) == SnapshotPeriod.ONE_DAY
        assert get_snapshot_period(0, 10 * 365 * 86400) == SnapshotPeriod.SEVEN_DAYS

    def test_overflow_falls_back_to_largest(self):
        huge = int(SnapshotPeriod.SEVEN_DAYS) * SNAPSHOT_RESULT_LIMIT * 10
        assert get_snapshot_period(0, huge) == SnapshotPeriod.SEVEN_DAYS

    def test_reversed_range_is_treated_as_empty(self):
        assert get_snapshot_period(100, 0) == SnapshotPeriod.FIFTEEN_MINUTES


def test_fetch_snapshots_pages_until_short_page(fake_lyra):
    full_page = [{"timestamp": ts} for ts in range(1, SNAPSHOT_RESULT_LIMIT + 1)]
    last_page = [{"timestamp": ts} for ts in range(2000, 2005)]
    fake_lyra.subgraph.query.side_effect = [{"things": full_page}, {"things": last_page}]

    rows = fetch_snapshots(fake_lyra, "query", "things", {"startTimestamp": 0, "endTimestamp": 9999})

    assert len(rows) == SNAPSHOT_RESULT_LIMIT + 5
    assert fake_lyra.subgraph.query.call_count == 2
    second_vars = fake_lyra.subgraph.query.call_args_list[1].args[1]
    # Restarts at the last timestamp seen; rows already collected are dropped.
    assert second_vars["startTimestamp"] == SNAPSHOT_RESULT_LIMIT
    assert second_vars["endTimestamp"] == 9999


def test_fetch_snapshots_missing_key_is_empty(fake_lyra):
    fake_lyra.subgraph.query.return_value = {}
    assert fetch_snapshots(fake_lyra, "query", "things", {"startTimestamp": 0}) == []


def _indexer(rows: list[dict]):
    """Fake subgraph honouring `timestamp_gte` and the page size."""

    def _query(query, variables):
        start = variables.get("startTimestamp", 0)
        return {"things": [r for r in rows if r["timestamp"] >= start][:SNAPSHOT_RESULT_LIMIT]}

    return _query


def test_fetch_snapshots_keeps_timestamp_split_across_pages(fake_lyra):
    rows = [{"id": f"s-{i}", "timestamp": i} for i in range(998)]
    # Three rows share the final timestamp; the page boundary falls between them.
    rows += [{"id": f"s-{i}", "timestamp": 999} for i in range(998, 1001)]
    fake_lyra.subgraph.query.side_effect = _indexer(rows)

    out = fetch_snapshots(fake_lyra, "query", "things", {"startTimestamp": 0})

    assert len(out) == 1001
    assert [r["id"] for r in out] == [r["id"] for r in rows]


def test_fetch_snapshots_stops_when_page_has_nothing_new(fake_lyra):
    rows = [{"id": f"s-{i}", "timestamp": 5} for i in range(SNAPSHOT_RESULT_LIMIT + 10)]
    fake_lyra.subgraph.query.side_effect = _indexer(rows)

    out = fetch_snapshots(fake_lyra, "query", "things", {"startTimestamp": 0})

    assert len(out) == SNAPSHOT_RESULT_LIMIT
    assert fake_lyra.subgraph.query.call_count == 2
