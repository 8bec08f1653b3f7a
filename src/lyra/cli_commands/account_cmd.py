"""Account staking and portfolio commands."""
from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from lyra.utils.bn import from_big_number
from lyra.utils.logging import log_event


def register(app: typer.Typer) -> None:
    @app.command("account-staking")
    def account_staking(
        address: str = typer.Option(..., "--address", "-a", help="Wallet address"),
        as_json: bool = typer.Option(False, "--json", help="Print the raw staking state"),
    ):
        """Staking balances and cooldown / unstake window state."""
        from lyra import cli_commands

        console = Console()
        try:
            lyra = cli_commands.get_lyra()
            staking = lyra.account(address).lyra_staking()
        except cli_commands.COMMAND_ERRORS as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
        if as_json:
            log_event("account_staking", {"address": address, "staking": staking})
            return

        table = Table(title=f"Staking {address}", show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("LYRA", f"{from_big_number(staking.lyra_balance.balance):,.4f}")
        table.add_row("stkLYRA", f"{from_big_number(staking.staked_lyra_balance.balance):,.4f}")
        table.add_row("In cooldown", "yes" if staking.is_in_cooldown else "no")
        table.add_row("In unstake window", "yes" if staking.is_in_unstake_window else "no")
        table.add_row("Window start", str(staking.unstake_window_start_timestamp or "-"))
        table.add_row("Window end", str(staking.unstake_window_end_timestamp or "-"))
        console.print(table)

    @app.command("portfolio-history")
    def portfolio_history(
        address: str = typer.Option(..., "--address", "-a", help="Wallet address"),
        timestamp: int = typer.Option(0, "--timestamp", "-t", help="Start timestamp"),
        as_json: bool = typer.Option(False, "--json", help="Print the snapshots"),
    ):
        """Count portfolio snapshots for an account."""
        from lyra import cli_commands

        console = Console()
        try:
            lyra = cli_commands.get_lyra()
            history = lyra.account(address).portfolio_history(timestamp)
        except cli_commands.COMMAND_ERRORS as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
        if as_json:
            log_event("portfolio_history", {"address": address, "snapshots": history})
        console.print(len(history))
