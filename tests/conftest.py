"""
Pytest configuration and shared fixtures for lyra tests.

Usage:
    @pytest.fixture functions are automatically available to all tests.
    Import helpers from conftest when needed.
"""
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest


def pytest_configure():
    """
    Ensure `src/` is on sys.path for the src-layout package import (`lyra`).
    This keeps tests runnable without requiring an editable install.
    """
    root = Path(__file__).resolve().parents[1]
    src = root / "src"
    if src.exists():
        sys.path.insert(0, str(src))


UNIT = 10**18

OWNER = "0x" + "ab" * 20
WRAPPER = "0x" + "0c" * 20
MARKET_ADDRESS = "0x" + "1a" * 20
LIQUIDITY_POOL = "0x" + "2b" * 20
QUOTE_ADDRESS = "0x" + "3c" * 20
BASE_ADDRESS = "0x" + "4d" * 20


# =============================================================================
# Mock Settings Fixture
# =============================================================================

@dataclass
class MockSettings:
    """Mock settings object for tests that never reach a node."""
    rpc_url: str = "http://127.0.0.1:8545"
    subgraph_url: str = "http://127.0.0.1:8000/subgraphs/name/lyra"
    contract_addresses_path: str | None = None
    gas_limit_buffer: float = 1.1
    request_timeout: float = 5.0
    max_workers: int = 4


@pytest.fixture
def mock_settings() -> MockSettings:
    return MockSettings()


# =============================================================================
# Fake Lyra facade
# =============================================================================

def _run_sequentially(calls: dict[str, Callable[[], Any]]) -> dict[str, Any]:
    return {name: fn() for name, fn in calls.items()}


@pytest.fixture
def fake_lyra(mock_settings) -> MagicMock:
    """
    MagicMock standing in for `lyra.Lyra`.

    fan_out / map_concurrently run inline so tests stay deterministic.
    """
    from lyra.constants import Deployment

    lyra = MagicMock()
    lyra.settings = mock_settings
    lyra.deployment = Deployment.MAINNET
    lyra.addresses = {}
    lyra.fan_out.side_effect = _run_sequentially
    lyra.map_concurrently.side_effect = lambda fn, items: [fn(i) for i in items]
    return lyra


@pytest.fixture
def make_market(fake_lyra) -> Callable[..., Any]:
    """
    Build a `Market` bound to the fake facade.

    Usage:
        market = make_market(name="sETH", timestamp=1_700_000_000)
    """
    from lyra.contracts import MarketContractAddresses
    from lyra.lyra import Block
    from lyra.market import Market, MarketToken

    def _make(
        name: str = "sETH",
        address: str = MARKET_ADDRESS,
        timestamp: int = 1_700_000_000,
        quote_address: str = QUOTE_ADDRESS,
        base_address: str = BASE_ADDRESS,
    ) -> Market:
        addresses = MarketContractAddresses(
            liquidity_pool=LIQUIDITY_POOL,
            liquidity_tokens="0x" + "5e" * 20,
            greek_cache="0x" + "6f" * 20,
            option_market=address,
            option_market_pricer="0x" + "70" * 20,
            option_token="0x" + "81" * 20,
            short_collateral="0x" + "92" * 20,
            pool_hedger="0x" + "a3" * 20,
            quote_asset=quote_address,
            base_asset=base_address,
        )
        return Market(
            lyra=fake_lyra,
            address=address,
            name=name,
            base_token=MarketToken(address=base_address, symbol=name, decimals=18),
            quote_token=MarketToken(address=quote_address, symbol="sUSD", decimals=18),
            contract_addresses=addresses,
            block=Block(number=1, timestamp=timestamp),
        )

    return _make


# =============================================================================
# Sample subgraph rows
# =============================================================================

@pytest.fixture
def sample_liquidity_rows() -> list[dict]:
    return [
        {
            "id": "snap-1",
            "timestamp": 1_650_000_000,
            "period": 3600,
            "freeLiquidity": str(25 * UNIT),
            "burnableLiquidity": str(20 * UNIT),
            "NAV": str(100 * UNIT),
            "usedCollatLiquidity": str(50 * UNIT),
            "pendingDeltaLiquidity": str(5 * UNIT),
            "usedDeltaLiquidity": str(20 * UNIT),
            "tokenPrice": str(UNIT),
            "pendingDeposits": str(3 * UNIT),
            "pendingWithdrawals": "0",
        },
        {
            "id": "snap-2",
            "timestamp": 1_650_003_600,
            "period": 3600,
            "freeLiquidity": str(100 * UNIT),
            "burnableLiquidity": str(100 * UNIT),
            "NAV": str(100 * UNIT),
            "usedCollatLiquidity": "0",
            "pendingDeltaLiquidity": "0",
            "usedDeltaLiquidity": "0",
            "tokenPrice": str(UNIT),
            "pendingDeposits": "0",
            "pendingWithdrawals": str(UNIT),
        },
    ]
