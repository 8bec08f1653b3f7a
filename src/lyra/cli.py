"""
Lyra CLI

Commands:
- lyra option-trading-volume   Volume snapshots for one strike
- lyra liquidity-history       Pool NAV / utilization snapshots
- lyra account-staking         Cooldown and unstake window state
- lyra portfolio-history       Account portfolio snapshots
"""
from __future__ import annotations

import logging

import typer

app = typer.Typer(
    add_completion=False,
    help="Lyra CLI: read markets, accounts and subgraph history",
)

_COMMANDS_REGISTERED = False


@app.callback()
def _root(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


def _register_commands() -> None:
    global _COMMANDS_REGISTERED
    if _COMMANDS_REGISTERED:
        return
    # Import here to keep `lyra.cli` lightweight at import time.
    from lyra.cli_commands.market_cmd import register as register_market
    from lyra.cli_commands.account_cmd import register as register_account

    register_market(app)
    register_account(app)
    _COMMANDS_REGISTERED = True


def main():
    _register_commands()
    app()


# Register on import (`pyproject.toml` uses `lyra.cli:main`).
_register_commands()


if __name__ == "__main__":
    main()
