"""Tests for virtual path resolution and origin checks."""

from __future__ import annotations

import pytest

from svcclient.domain.urls import (
    absolute_url,
    is_development_mode,
    is_same_origin,
    resolve_service_url,
    resolve_url,
)


class TestResolveUrl:
    def test_expands_virtual_root(self) -> None:
        assert resolve_url("~/Account/Login", "/app/") == "/app/Account/Login"

    def test_default_application_path(self) -> None:
        assert resolve_url("~/x") == "/x"

    @pytest.mark.parametrize("path", ["/abs/path", "relative/path", "https://h/x", ""])
    def test_passthrough(self, path: str) -> None:
        assert resolve_url(path, "/app/") == path

    def test_none_passthrough(self) -> None:
        assert resolve_url(None) is None

    def test_tilde_without_slash_is_not_virtual(self) -> None:
        assert resolve_url("~x", "/app/") == "~x"


class TestResolveServiceUrl:
    def test_bare_name_goes_under_services(self) -> None:
        assert resolve_service_url("Northwind/Order/List") == "/Services/Northwind/Order/List"

    def test_bare_name_with_application_path(self) -> None:
        assert resolve_service_url("Order/List", "/app/") == "/app/Services/Order/List"

    def test_virtual_path_resolves_normally(self) -> None:
        assert resolve_service_url("~/Custom/Endpoint", "/app/") == "/app/Custom/Endpoint"

    def test_absolute_path_untouched(self) -> None:
        assert resolve_service_url("/api/x", "/app/") == "/api/x"

    def test_full_url_untouched(self) -> None:
        assert resolve_service_url("https://api.example.com/x") == "https://api.example.com/x"

    def test_empty_and_none(self) -> None:
        assert resolve_service_url("") == ""
        assert resolve_service_url(None) is None


class TestAbsoluteUrl:
    def test_joins_relative_path(self) -> None:
        assert absolute_url("/Services/A", "http://localhost/") == "http://localhost/Services/A"

    def test_keeps_absolute_url(self) -> None:
        assert absolute_url("https://b.example.com/x", "http://a/") == "https://b.example.com/x"


class TestIsSameOrigin:
    def test_relative_url_is_same_origin(self) -> None:
        assert is_same_origin("/Services/X", "https://app.example.com/page")

    def test_identical_origin(self) -> None:
        assert is_same_origin("https://app.example.com/a", "https://app.example.com/b")

    def test_default_port_normalized(self) -> None:
        assert is_same_origin("http://app.example.com:80/a", "http://app.example.com/")

    @pytest.mark.parametrize(
        "url",
        [
            "http://app.example.com/x",
            "https://other.example.com/x",
            "https://app.example.com:8443/x",
        ],
    )
    def test_mismatch(self, url: str) -> None:
        assert not is_same_origin(url, "https://app.example.com/")


class TestIsDevelopmentMode:
    @pytest.mark.parametrize(
        "host", ["localhost", "127.0.0.1", "::1", "LOCALHOST", "box.local", "app.localhost"]
    )
    def test_development_hosts(self, host: str) -> None:
        assert is_development_mode(host)

    @pytest.mark.parametrize("host", ["example.com", "local.example.com", "", None])
    def test_production_hosts(self, host: str | None) -> None:
        assert not is_development_mode(host)
