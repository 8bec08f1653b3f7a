"""
Minimal ABIs: only the functions this SDK reads or encodes.
"""
from __future__ import annotations


def _fn(name: str, inputs: list[tuple[str, str]], outputs: list[tuple[str, str]], mutability: str = "view") -> dict:
    return {
        "type": "function",
        "name": name,
        "stateMutability": mutability,
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "outputs": [{"name": n, "type": t} for n, t in outputs],
    }


ERC20_ABI = [
    _fn("balanceOf", [("owner", "address")], [("", "uint256")]),
    _fn("allowance", [("owner", "address"), ("spender", "address")], [("", "uint256")]),
    _fn("approve", [("spender", "address"), ("amount", "uint256")], [("", "bool")], "nonpayable"),
    _fn("symbol", [], [("", "string")]),
    _fn("decimals", [], [("", "uint8")]),
    _fn("totalSupply", [], [("", "uint256")]),
]

OPTION_MARKET_ADDRESSES_COMPONENTS = [
    {"name": "liquidityPool", "type": "address"},
    {"name": "liquidityTokens", "type": "address"},
    {"name": "greekCache", "type": "address"},
    {"name": "optionMarket", "type": "address"},
    {"name": "optionMarketPricer", "type": "address"},
    {"name": "optionToken", "type": "address"},
    {"name": "shortCollateral", "type": "address"},
    {"name": "poolHedger", "type": "address"},
    {"name": "quoteAsset", "type": "address"},
    {"name": "baseAsset", "type": "address"},
]

OPTION_MARKET_VIEWER_ABI = [
    {
        "type": "function",
        "name": "getMarketAddresses",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {
                "name": "",
                "type": "tuple[]",
                "components": OPTION_MARKET_ADDRESSES_COMPONENTS,
            }
        ],
    },
]

OPTION_MARKET_ABI = [
    {
        "type": "function",
        "name": "getStrike",
        "stateMutability": "view",
        "inputs": [{"name": "strikeId", "type": "uint256"}],
        "outputs": [
            {
                "name": "",
                "type": "tuple",
                "components": [
                    {"name": "id", "type": "uint256"},
                    {"name": "strikePrice", "type": "uint256"},
                    {"name": "skew", "type": "uint256"},
                    {"name": "longCall", "type": "uint256"},
                    {"name": "shortCallBase", "type": "uint256"},
                    {"name": "shortCallQuote", "type": "uint256"},
                    {"name": "longPut", "type": "uint256"},
                    {"name": "shortPut", "type": "uint256"},
                    {"name": "boardId", "type": "uint256"},
                ],
            }
        ],
    },
]

LIQUIDITY_POOL_ABI = [
    _fn("getTokenPrice", [], [("", "uint256")]),
    {
        "type": "function",
        "name": "getCurrentLiquidity",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {
                "name": "",
                "type": "tuple",
                "components": [
                    {"name": "freeLiquidity", "type": "uint256"},
                    {"name": "burnableLiquidity", "type": "uint256"},
                    {"name": "usedCollatLiquidity", "type": "uint256"},
                    {"name": "pendingDeltaLiquidity", "type": "uint256"},
                    {"name": "usedDeltaLiquidity", "type": "uint256"},
                    {"name": "NAV", "type": "uint256"},
                ],
            }
        ],
    },
    _fn("totalQueuedDeposits", [], [("", "uint256")]),
    _fn("totalQueuedWithdrawals", [], [("", "uint256")]),
    _fn("initiateDeposit", [("beneficiary", "address"), ("amountQuote", "uint256")], [], "nonpayable"),
    _fn("initiateWithdraw", [("beneficiary", "address"), ("amountLiquidityTokens", "uint256")], [], "nonpayable"),
]

OPTION_TOKEN_ABI = [
    _fn("isApprovedForAll", [("owner", "address"), ("operator", "address")], [("", "bool")]),
    _fn("setApprovalForAll", [("operator", "address"), ("approved", "bool")], [], "nonpayable"),
]

LYRA_STAKING_MODULE_ABI = [
    _fn("stakersCooldowns", [("staker", "address")], [("", "uint256")]),
    _fn("COOLDOWN_SECONDS", [], [("", "uint256")]),
    _fn("UNSTAKE_WINDOW", [], [("", "uint256")]),
    _fn("totalSupply", [], [("", "uint256")]),
    _fn("balanceOf", [("owner", "address")], [("", "uint256")]),
    _fn("stake", [("onBehalfOf", "address"), ("amount", "uint256")], [], "nonpayable"),
    _fn("cooldown", [], [], "nonpayable"),
    _fn("redeem", [("to", "address"), ("amount", "uint256")], [], "nonpayable"),
]

MULTI_DISTRIBUTOR_ABI = [
    _fn("claimableBalances", [("user", "address"), ("token", "address")], [("", "uint256")]),
    _fn("claim", [("tokens", "address[]")], [], "nonpayable"),
]

TEST_FAUCET_ABI = [
    _fn("drip", [], [], "nonpayable"),
]
