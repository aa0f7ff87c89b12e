"""Tests for the root CLI group."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from svcclient import __version__
from svcclient.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestCli:
    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("call", "resolve"):
            assert command in result.output
        for flag in ("--json", "--page-url", "--app-path", "--config"):
            assert flag in result.output

    def test_no_subcommand_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage:" in result.output

    def test_invalid_config_reported(self, cli_runner: CliRunner) -> None:
        with open("svcclient.toml", "w") as fh:
            fh.write("[client\n")
        result = cli_runner.invoke(cli, ["resolve", "A"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.output
