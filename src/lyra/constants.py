"""
Protocol constants: fixed-point units, deployments, contract ids and snapshot periods.
"""
from __future__ import annotations

from enum import Enum, IntEnum

# ============================================================================
# Fixed-point
# ============================================================================

UNIT = 10**18
ZERO_BN = 0
ONE_BN = UNIT
MAX_UINT256 = 2**256 - 1


# ============================================================================
# Deployments
# ============================================================================

class Deployment(str, Enum):
    MAINNET = "mainnet"
    KOVAN = "kovan"
    LOCAL = "local"


TESTNET_DEPLOYMENTS = {Deployment.KOVAN, Deployment.LOCAL}


class LyraContractId(str, Enum):
    OPTION_MARKET_VIEWER = "OptionMarketViewer"
    OPTION_MARKET_WRAPPER = "OptionMarketWrapper"
    LYRA_STAKING_MODULE_PROXY = "LyraStakingModuleProxy"
    MULTI_DISTRIBUTOR = "MultiDistributor"
    TEST_FAUCET = "TestFaucet"


class LyraMarketContractId(str, Enum):
    OPTION_MARKET = "OptionMarket"
    LIQUIDITY_POOL = "LiquidityPool"
    LIQUIDITY_TOKENS = "LiquidityTokens"
    OPTION_GREEK_CACHE = "OptionGreekCache"
    OPTION_MARKET_PRICER = "OptionMarketPricer"
    OPTION_TOKEN = "OptionToken"
    SHORT_COLLATERAL = "ShortCollateral"
    POOL_HEDGER = "PoolHedger"


# Token addresses. Testnet deployments ship their own token contracts, so the
# address book for kovan/local must supply them (see lyra.contracts.load_address_book).
LYRA_TOKEN = "LyraToken"
STAKED_LYRA_TOKEN = "StakedLyraToken"
OP_TOKEN = "OpToken"

LYRA_OPTIMISM_MAINNET_ADDRESS = "0x50c5725949A6F0c72E6C4a641F24049A917DB0Cb"
STAKED_LYRA_OPTIMISM_ADDRESS = "0xdE48b1B5853cc63B1D05e507414D3E02831722F8"
OP_OPTIMISM_MAINNET_ADDRESS = "0x4200000000000000000000000000000000000042"


# ============================================================================
# Subgraph snapshots
# ============================================================================

class SnapshotPeriod(IntEnum):
    FIFTEEN_MINUTES = 900
    ONE_HOUR = 3600
    FOUR_HOURS = 14400
    TWELVE_HOURS = 43200
    ONE_DAY = 86400
    SEVEN_DAYS = 604800


SNAPSHOT_RESULT_LIMIT = 1000
