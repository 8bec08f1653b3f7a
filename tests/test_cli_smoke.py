"""
CLI smoke tests: commands are wired up and print snapshot counts.

The Lyra facade is patched so nothing reaches a node or the indexer.
"""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import requests
from typer.testing import CliRunner

from conftest import OWNER, UNIT

runner = CliRunner()


class TestCLIStructure:
    def test_main_help(self):
        from lyra.cli import app

        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for name in ("option-trading-volume", "liquidity-history", "account-staking", "portfolio-history"):
            assert name in result.output


class TestCommands:
    def test_option_trading_volume_prints_count(self):
        from lyra.cli import app

        lyra = MagicMock()
        lyra.option.return_value.trading_volume_history.return_value = [object(), object(), object()]
        with patch("lyra.cli_commands.get_lyra", return_value=lyra):
            result = runner.invoke(app, ["option-trading-volume", "-m", "sETH", "-s", "5", "--is-call"])
        assert result.exit_code == 0
        assert result.output.strip() == "3"
        lyra.option.assert_called_once_with("sETH", 5, True)

    def test_liquidity_history_prints_count(self):
        from lyra.cli import app

        lyra = MagicMock()
        lyra.market.return_value.liquidity_history.return_value = [object(), object()]
        with patch("lyra.cli_commands.get_lyra", return_value=lyra):
            result = runner.invoke(app, ["liquidity-history", "-m", "sETH", "-t", "1650000000"])
        assert result.exit_code == 0
        assert result.output.strip() == "2"
        lyra.market.return_value.liquidity_history.assert_called_once_with(start_timestamp=1650000000)

    def test_portfolio_history_prints_count(self):
        from lyra.cli import app

        lyra = MagicMock()
        lyra.account.return_value.portfolio_history.return_value = []
        with patch("lyra.cli_commands.get_lyra", return_value=lyra):
            result = runner.invoke(app, ["portfolio-history", "-a", OWNER])
        assert result.exit_code == 0
        assert result.output.strip() == "0"
        lyra.account.return_value.portfolio_history.assert_called_once_with(0)

    def test_unknown_market_exits_nonzero(self):
        from lyra.cli import app

        lyra = MagicMock()
        lyra.market.side_effect = ValueError("Market does not exist")
        with patch("lyra.cli_commands.get_lyra", return_value=lyra):
            result = runner.invoke(app, ["liquidity-history", "-m", "sDOGE"])
        assert result.exit_code == 1
        assert "Market does not exist" in result.output


def _staking(in_window: bool):
    from lyra.account import AccountLyraBalance, AccountLyraStaking, AccountStakedLyraBalance
    from lyra.lyra_staking import LyraStaking

    return AccountLyraStaking(
        staking=LyraStaking(cooldown_period=864000, unstake_window=172800, total_supply=1_000 * UNIT),
        lyra_balance=AccountLyraBalance(balance=5 * UNIT, staking_allowance=0),
        staked_lyra_balance=AccountStakedLyraBalance(balance=2 * UNIT),
        is_in_unstake_window=in_window,
        is_in_cooldown=False,
        unstake_window_start_timestamp=1_000 if in_window else None,
        unstake_window_end_timestamp=2_000 if in_window else None,
    )


class TestAccountCommands:
    def test_account_staking_table(self):
        from lyra.cli import app

        lyra = MagicMock()
        lyra.account.return_value.lyra_staking.return_value = _staking(in_window=True)
        with patch("lyra.cli_commands.get_lyra", return_value=lyra):
            result = runner.invoke(app, ["account-staking", "-a", OWNER])
        assert result.exit_code == 0
        assert "In unstake window" in result.output
        assert "yes" in result.output
        assert "5.0000" in result.output
        lyra.account.assert_called_once_with(OWNER)

    def test_account_staking_json_keeps_big_numbers(self):
        from lyra.cli import app

        lyra = MagicMock()
        lyra.account.return_value.lyra_staking.return_value = _staking(in_window=False)
        with patch("lyra.cli_commands.get_lyra", return_value=lyra):
            result = runner.invoke(app, ["account-staking", "-a", OWNER, "--json"])
        assert result.exit_code == 0
        assert "account_staking" in result.output
        assert '"1000000000000000000000"' in result.output
        assert "is_in_unstake_window" in result.output

    def test_portfolio_history_json(self):
        from lyra.account import AccountPortfolioHistorySnapshot
        from lyra.cli import app

        lyra = MagicMock()
        lyra.account.return_value.portfolio_history.return_value = [
            AccountPortfolioHistorySnapshot(
                timestamp=100,
                long_option_value=1.0,
                short_option_value=0.0,
                collateral_value=0.0,
                balance=9.0,
                total=10.0,
            )
        ]
        with patch("lyra.cli_commands.get_lyra", return_value=lyra):
            result = runner.invoke(app, ["portfolio-history", "-a", OWNER, "-t", "50", "--json"])
        assert result.exit_code == 0
        assert "portfolio_history" in result.output
        assert "long_option_value" in result.output
        assert result.output.strip().endswith("1")
        lyra.account.return_value.portfolio_history.assert_called_once_with(50)

    def test_connection_error_exits_nonzero(self):
        from lyra.cli import app

        lyra = MagicMock()
        lyra.account.return_value.lyra_staking.side_effect = requests.ConnectionError("node unreachable")
        with patch("lyra.cli_commands.get_lyra", return_value=lyra):
            result = runner.invoke(app, ["account-staking", "-a", OWNER])
        assert result.exit_code == 1
        assert "node unreachable" in result.output


def test_rpc_error_exits_nonzero():
    from web3.exceptions import Web3Exception

    from lyra.cli import app

    lyra = MagicMock()
    lyra.option.side_effect = Web3Exception("rpc unavailable")
    with patch("lyra.cli_commands.get_lyra", return_value=lyra):
        result = runner.invoke(app, ["option-trading-volume", "-m", "sETH", "-s", "1"])
    assert result.exit_code == 1
    assert "rpc unavailable" in result.output
