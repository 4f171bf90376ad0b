"""Tests for proxy argument parsing."""

from __future__ import annotations

from localdev.services.proxy_arg import expand_port_target, parse_proxy_arg


class TestParseProxyArg:
    def test_equals_port_with_protocol(self):
        assert parse_proxy_arg("api=8080", True) == ("/api", "http://localhost:8080")

    def test_colon_port_without_protocol(self):
        assert parse_proxy_arg("api:8080", False) == ("/api", "localhost:8080")

    def test_rooted_location_kept(self):
        assert parse_proxy_arg("/api=8080", True) == ("/api", "http://localhost:8080")

    def test_full_url_target_untouched(self):
        assert parse_proxy_arg("api=http://localhost:8080", True) == ("/api", "http://localhost:8080")

    def test_colon_split_keeps_url_scheme(self):
        # The first ":" separates location from target
        assert parse_proxy_arg("api:http://127.0.0.1:9000", True) == ("/api", "http://127.0.0.1:9000")

    def test_port_with_leading_colon(self):
        assert parse_proxy_arg("api=:9000", True) == ("/api", "http://localhost:9000")

    def test_port_with_path(self):
        assert parse_proxy_arg("api=8080/v1", True) == ("/api", "http://localhost:8080/v1")

    def test_whitespace_trimmed(self):
        assert parse_proxy_arg(" api = 8080 ", False) == ("/api", "localhost:8080")

    def test_default_websocket_arg(self):
        assert parse_proxy_arg("/ws:localhost:3000", False) == ("/ws", "localhost:3000")

    def test_empty_location_is_root(self):
        assert parse_proxy_arg("=3000", True) == ("/", "http://localhost:3000")

    def test_host_target_not_expanded(self):
        assert parse_proxy_arg("db=backend:5432", False) == ("/db", "backend:5432")

    def test_missing_delimiter(self, capsys):
        assert parse_proxy_arg("api8080", True) is None
        assert "Invalid proxy: api8080" in capsys.readouterr().out


class TestExpandPortTarget:
    def test_bare_port(self):
        assert expand_port_target("3001", True) == "http://localhost:3001"
        assert expand_port_target(":3001", False) == "localhost:3001"

    def test_url_untouched(self):
        assert expand_port_target(" http://localhost:5000 ", True) == "http://localhost:5000"
