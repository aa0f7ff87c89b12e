"""Tests for config file discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from svcclient.config.discovery import find_config, load_config, read_config_data


@pytest.fixture(autouse=True)
def _no_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SVCCLIENT_CONFIG", raising=False)


class TestFindConfig:
    def test_none_when_absent(self, tmp_path: Path) -> None:
        assert find_config(tmp_path) is None

    def test_walks_up(self, tmp_path: Path) -> None:
        config = tmp_path / "svcclient.toml"
        config.write_text("")
        nested = tmp_path / "x" / "y"
        nested.mkdir(parents=True)
        assert find_config(nested) == config.resolve()

    def test_dedicated_file_wins(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.svcclient]\n")
        (tmp_path / "svcclient.toml").write_text("")
        assert find_config(tmp_path) == (tmp_path / "svcclient.toml").resolve()

    def test_pyproject_without_table_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        assert find_config(tmp_path) is None

    def test_broken_pyproject_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.svcclient\n")
        assert find_config(tmp_path) is None

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config = tmp_path / "other.toml"
        config.write_text("")
        monkeypatch.setenv("SVCCLIENT_CONFIG", str(config))
        assert find_config(tmp_path / "anywhere") == config

    def test_env_override_missing_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SVCCLIENT_CONFIG", str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None


class TestLoadConfig:
    def test_defaults(self, tmp_path: Path) -> None:
        config = load_config(cwd=tmp_path)
        assert config.client.page_url == "http://localhost/"

    def test_pyproject_section(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool.svcclient.transport]\nblock_ui = false\n')
        assert read_config_data(pyproject) == {"transport": {"block_ui": False}}
        assert load_config(cwd=tmp_path).transport.block_ui is False

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "conf.toml"
        path.write_text('[client]\ncsrf_cookie = "XSRF"\n')
        assert load_config(path).client.csrf_cookie == "XSRF"
