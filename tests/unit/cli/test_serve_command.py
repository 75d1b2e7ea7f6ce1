"""Tests for the serve command."""

from unittest.mock import patch

from click.testing import CliRunner

from atem.cli import main


def _close_coroutine(coro):
    coro.close()
    return 0


class TestServeCommand:
    def test_uses_config_defaults(self):
        with (
            patch("atem.cli.serve.run_server") as mock_run_server,
            patch("atem.cli.serve.asyncio.run", side_effect=_close_coroutine),
        ):
            result = CliRunner().invoke(main, ["serve"])

        assert result.exit_code == 0
        config = mock_run_server.call_args[0][0]
        assert config.server.bind == "127.0.0.1"
        assert config.server.port == 8731

    def test_cli_overrides(self):
        with (
            patch("atem.cli.serve.run_server") as mock_run_server,
            patch("atem.cli.serve.asyncio.run", side_effect=_close_coroutine),
        ):
            result = CliRunner().invoke(
                main, ["serve", "--bind", "0.0.0.0", "--port", "9000"]
            )

        assert result.exit_code == 0
        config = mock_run_server.call_args[0][0]
        assert config.server.bind == "0.0.0.0"
        assert config.server.port == 9000

    def test_invalid_port(self):
        result = CliRunner().invoke(main, ["serve", "--port", "70000"])
        assert result.exit_code == 2

    def test_exit_code_propagates(self):
        with (
            patch("atem.cli.serve.run_server"),
            patch("atem.cli.serve.asyncio.run", return_value=1),
        ):
            result = CliRunner().invoke(main, ["serve"])

        assert result.exit_code == 1
