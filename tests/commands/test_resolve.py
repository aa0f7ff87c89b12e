"""Tests for the ``resolve`` command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from svcclient.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestResolveCommand:
    def test_service_name(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["resolve", "Northwind/Order/List"])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "http://localhost/Services/Northwind/Order/List",
            "same-origin: yes",
        ]

    def test_application_path(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--page-url", "https://app.example.com/x/", "--app-path", "/x/", "resolve", "A/B"],
        )
        assert result.output.splitlines()[0] == "https://app.example.com/x/Services/A/B"

    def test_cross_origin_url(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["resolve", "https://cdn.example.com/lib", "--url"])
        assert "same-origin: no" in result.output

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "resolve", "~/Account/Login", "--url"])
        assert json.loads(result.output) == {
            "target": "~/Account/Login",
            "resolved": "/Account/Login",
            "url": "http://localhost/Account/Login",
            "same_origin": True,
        }
