"""Tests for shared Pydantic models."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from localdev_common import HistoryEntry, SiteDefinition, SiteIndex, WebsocketBinding


class TestHistoryEntry:
    def test_defaults(self):
        entry = HistoryEntry(command="add", site="foo")
        assert entry.outcome == "applied"
        assert entry.error is None
        assert isinstance(entry.timestamp, datetime)

    def test_to_jsonl_drops_empty_fields(self):
        entry = HistoryEntry(command="add", site="foo", options={"force": True})
        data = json.loads(entry.to_jsonl())
        assert data["options"]["force"] is True
        assert "path" not in data
        assert "error" not in data
        assert "duration_ms" not in data

    def test_rejects_unknown_outcome(self):
        with pytest.raises(ValidationError):
            HistoryEntry(command="add", outcome="success")


class TestSiteDefinition:
    def test_derived_names(self):
        site = SiteDefinition(server_name="foo.localdev", proxies={"/": "http://localhost:3000"})
        assert site.certificate_file == "foo.localdev.pem"
        assert site.certificate_key_file == "foo.localdev-key.pem"
        assert site.upstream_name == "ws-backend-foo.localdev"
        assert site.websocket_location is None

    def test_root_location_required(self):
        with pytest.raises(ValidationError):
            SiteDefinition(server_name="foo.localdev", proxies={"/api": "http://localhost:8080"})

    def test_proxy_locations_sorted_and_slashed(self):
        site = SiteDefinition(
            server_name="foo.localdev",
            proxies={"/web": "http://localhost:3000", "/": "http://localhost:3000/", "api": "http://localhost:8080"},
        )
        assert site.proxy_locations() == [
            ("/", "http://localhost:3000/"),
            ("/api/", "http://localhost:8080/"),
            ("/web/", "http://localhost:3000/"),
        ]

    def test_websocket_location_rooted(self):
        site = SiteDefinition(
            server_name="foo.localdev",
            proxies={"/": "http://localhost:3000", "/ws/": "http://localhost:3000"},
            websocket=WebsocketBinding(location="ws", target="localhost:3000"),
        )
        assert site.websocket_location == "/ws"
        assert site.proxy_locations() == [("/", "http://localhost:3000/")]


class TestSiteIndex:
    def test_find(self, tmp_path: Path):
        index = SiteIndex(include_dir=tmp_path, server_names=["foo.localdev"])
        assert index.find("foo", ".localdev") == "foo.localdev"
        assert index.find("foo.localdev", ".localdev") == "foo.localdev"
        assert index.find("bar", ".localdev") is None

    def test_register_and_forget(self, tmp_path: Path):
        index = SiteIndex(include_dir=tmp_path, server_names=["b.localdev"])
        index.register("a.localdev", tmp_path / "a.conf", {"/": "http://localhost:1"})
        index.register("a.localdev", tmp_path / "a.conf", {"/": "http://localhost:2"})
        assert index.server_names == ["a.localdev", "b.localdev"]
        assert index.proxies["a.localdev"] == {"/": "http://localhost:2"}

        index.forget("a.localdev")
        assert index.server_names == ["b.localdev"]
        assert "a.localdev" not in index.paths
