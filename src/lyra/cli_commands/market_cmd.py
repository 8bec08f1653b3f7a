"""Market and option history commands."""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from lyra.utils.logging import log_event


def register(app: typer.Typer) -> None:
    @app.command("option-trading-volume")
    def option_trading_volume(
        market: str = typer.Option(..., "--market", "-m", help="Market address or name"),
        strike_id: int = typer.Option(..., "--strike-id", "-s", help="Strike id"),
        is_call: bool = typer.Option(False, "--is-call/--is-put", "-i/-p", help="Call (default put)"),
        timestamp: Optional[int] = typer.Option(None, "--timestamp", "-t", help="Start timestamp"),
        as_json: bool = typer.Option(False, "--json", help="Print the snapshots"),
    ):
        """Count trading volume snapshots for an option."""
        from lyra import cli_commands

        console = Console()
        try:
            lyra = cli_commands.get_lyra()
            option = lyra.option(market, strike_id, is_call)
            volumes = option.trading_volume_history(start_timestamp=timestamp)
        except cli_commands.COMMAND_ERRORS as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
        if as_json:
            log_event("option_trading_volume", {"market": market, "strike_id": strike_id, "volumes": volumes})
        console.print(len(volumes))

    @app.command("liquidity-history")
    def liquidity_history(
        market: str = typer.Option(..., "--market", "-m", help="Market address or name"),
        timestamp: Optional[int] = typer.Option(None, "--timestamp", "-t", help="Start timestamp"),
        as_json: bool = typer.Option(False, "--json", help="Print the snapshots"),
    ):
        """Count liquidity snapshots for a market."""
        from lyra import cli_commands

        console = Console()
        try:
            lyra = cli_commands.get_lyra()
            history = lyra.market(market).liquidity_history(start_timestamp=timestamp)
        except cli_commands.COMMAND_ERRORS as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
        if as_json:
            log_event("liquidity_history", {"market": market, "snapshots": history})
        console.print(len(history))
