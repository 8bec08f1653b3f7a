from __future__ import annotations

import pytest

from conftest import MARKET_ADDRESS, UNIT
from lyra.constants import SnapshotPeriod
from lyra.market import find_market, get_utilization, parse_liquidity_snapshot


class TestUtilization:
    def test_share_of_nav_in_use(self):
        assert get_utilization(100 * UNIT, 25 * UNIT) == 0.75

    def test_fully_free_pool(self):
        assert get_utilization(100 * UNIT, 100 * UNIT) == 0.0

    def test_zero_nav_is_zero_not_division_error(self):
        assert get_utilization(0, 0) == 0.0
        assert get_utilization(0, 5 * UNIT) == 0.0


def test_parse_liquidity_snapshot(sample_liquidity_rows):
    snap = parse_liquidity_snapshot(sample_liquidity_rows[0])
    assert snap.timestamp == 1_650_000_000
    assert snap.nav == 100 * UNIT
    assert snap.free_liquidity == 25 * UNIT
    assert snap.utilization == 0.75
    assert snap.pending_deposits == 3 * UNIT
    assert snap.total_queued_deposits == 0
    assert snap.total_withdrawing_deposits == 0


class TestFindMarket:
    def test_matches_name_case_insensitively(self, make_market):
        eth = make_market(name="sETH")
        btc = make_market(name="sBTC", address="0x" + "1b" * 20)
        assert find_market([eth, btc], "sbtc") is btc
        assert find_market([eth, btc], "SETH") is eth

    def test_matches_address_case_insensitively(self, make_market):
        eth = make_market()
        assert find_market([eth], MARKET_ADDRESS.upper().replace("0X", "0x")) is eth

    def test_unknown_market_raises(self, make_market):
        with pytest.raises(ValueError, match="Market does not exist"):
            find_market([make_market()], "sLINK")


def test_liquidity_history_queries_lowercase_market(fake_lyra, make_market, sample_liquidity_rows):
    market = make_market(timestamp=1_650_010_000)
    fake_lyra.subgraph.query.return_value = {"marketTotalValueSnapshots": sample_liquidity_rows}

    history = market.liquidity_history(start_timestamp=1_650_000_000)

    assert [h.timestamp for h in history] == [1_650_000_000, 1_650_003_600]
    assert history[1].utilization == 0.0
    variables = fake_lyra.subgraph.query.call_args.args[1]
    assert variables["market"] == MARKET_ADDRESS.lower()
    assert variables["startTimestamp"] == 1_650_000_000
    # End defaults to the market's block.
    assert variables["endTimestamp"] == 1_650_010_000
    assert variables["period"] == int(SnapshotPeriod.FIFTEEN_MINUTES)


def test_liquidity_history_defaults_to_full_range(fake_lyra, make_market):
    market = make_market(timestamp=2 * 365 * 86400)
    fake_lyra.subgraph.query.return_value = {"marketTotalValueSnapshots": []}

    assert market.liquidity_history() == []
    variables = fake_lyra.subgraph.query.call_args.args[1]
    assert variables["startTimestamp"] == 0
    assert variables["period"] == int(SnapshotPeriod.ONE_DAY)
