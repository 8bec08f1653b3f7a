"""
GraphQL documents for the Lyra subgraph.

Snapshot queries take `$startTimestamp`/`$endTimestamp`/`$period`, order by
timestamp ascending and cap pages at 1000 rows (see lyra.utils.snapshots).
"""
from __future__ import annotations

MARKET_TOTAL_VALUE_SNAPSHOT_FRAGMENT = """
      id
      timestamp
      period
      freeLiquidity
      burnableLiquidity
      NAV
      usedCollatLiquidity
      pendingDeltaLiquidity
      usedDeltaLiquidity
      tokenPrice
      pendingDeposits
      pendingWithdrawals
"""

MARKET_TOTAL_VALUE_SNAPSHOTS_QUERY = f"""
  query marketTotalValueSnapshots(
    $market: String!, $startTimestamp: Int!, $endTimestamp: Int!, $period: Int!
  ) {{
    marketTotalValueSnapshots(
      first: 1000, orderBy: timestamp, orderDirection: asc, where: {{
        market: $market,
        NAV_gt: 0,
        timestamp_gte: $startTimestamp,
        timestamp_lte: $endTimestamp,
        period: $period
      }}
    ) {{
      {MARKET_TOTAL_VALUE_SNAPSHOT_FRAGMENT}
    }}
  }}
"""

OPTION_VOLUME_SNAPSHOTS_QUERY = """
  query optionVolumeSnapshots(
    $option: String!, $startTimestamp: Int!, $endTimestamp: Int!, $period: Int!
  ) {
    optionVolumeSnapshots(
      first: 1000, orderBy: timestamp, orderDirection: asc, where: {
        option: $option,
        timestamp_gte: $startTimestamp,
        timestamp_lte: $endTimestamp,
        period: $period
      }
    ) {
      id
      timestamp
      period
      notionalVolume
      premiumVolume
      totalNotionalVolume
      totalPremiumVolume
    }
  }
"""

LP_USER_LIQUIDITY_QUERY = """
  query lpUserLiquidities($user: String!, $pool: String!) {
    lpuserLiquidities(where: { user: $user, pool: $pool }) {
      id
      pendingDepositsAndWithdrawals(orderBy: timestamp, orderDirection: asc) {
        id
        isDeposit
        queueID
        pendingAmount
        processedAmount
        timestamp
        transactionHash
      }
      depositsAndWithdrawals(orderBy: timestamp, orderDirection: asc) {
        id
        isDeposit
        quoteAmount
        tokenAmount
        tokenPriceAtAction
        timestamp
        transactionHash
      }
    }
  }
"""

ACCOUNT_BALANCE_SNAPSHOTS_QUERY = """
  query accountBalanceSnapshots(
    $account: String!, $startTimestamp: Int!, $endTimestamp: Int!, $period: Int!
  ) {
    accountBalanceSnapshots(
      first: 1000, orderBy: timestamp, orderDirection: asc, where: {
        account: $account,
        timestamp_gte: $startTimestamp,
        timestamp_lte: $endTimestamp,
        period: $period
      }
    ) {
      id
      timestamp
      balance
    }
  }
"""

LONG_OPTION_SNAPSHOTS_QUERY = """
  query longOptionSnapshots(
    $account: String!, $startTimestamp: Int!, $endTimestamp: Int!, $period: Int!
  ) {
    longOptionSnapshots(
      first: 1000, orderBy: timestamp, orderDirection: asc, where: {
        account: $account,
        timestamp_gte: $startTimestamp,
        timestamp_lte: $endTimestamp,
        period: $period
      }
    ) {
      id
      timestamp
      optionValue
    }
  }
"""

SHORT_OPTION_SNAPSHOTS_QUERY = """
  query shortOptionSnapshots(
    $account: String!, $startTimestamp: Int!, $endTimestamp: Int!, $period: Int!
  ) {
    shortOptionSnapshots(
      first: 1000, orderBy: timestamp, orderDirection: asc, where: {
        account: $account,
        timestamp_gte: $startTimestamp,
        timestamp_lte: $endTimestamp,
        period: $period
      }
    ) {
      id
      timestamp
      optionValue
      collateralValue
    }
  }
"""
