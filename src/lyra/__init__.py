"""Python client for the Lyra options protocol."""
from __future__ import annotations

from lyra.account import Account
from lyra.config import Settings, load_settings
from lyra.constants import Deployment
from lyra.lyra import Block, Lyra
from lyra.market import Market
from lyra.option import Option

__all__ = [
    "Account",
    "Block",
    "Deployment",
    "Lyra",
    "Market",
    "Option",
    "Settings",
    "load_settings",
]
