from __future__ import annotations

import requests
from web3.exceptions import Web3Exception

from lyra.lyra import Lyra

# Failures a command reports as a red message and exit code 1.
COMMAND_ERRORS = (ValueError, RuntimeError, requests.RequestException, Web3Exception)


def get_lyra() -> Lyra:
    """Facade built from environment / .env settings."""
    return Lyra()
