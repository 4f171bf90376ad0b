"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from localdev_common import LocaldevConfig

NGINX_CONF = """\
worker_processes  1;

http {
    include       mime.types;
    default_type  application/octet-stream;
    # include disabled/*;
    include servers/*;
}
"""


class FakeIssuer:
    def __init__(self, error: Exception | None = None):
        self.issued: list[str] = []
        self.error = error

    def issue(self, name: str) -> None:
        self.issued.append(name)
        if self.error is not None:
            raise self.error


class FakeReloader:
    def __init__(self, error: Exception | None = None):
        self.calls = 0
        self.error = error

    def reload(self) -> None:
        self.calls += 1
        if self.error is not None:
            raise self.error


class FakeOpener:
    def __init__(self):
        self.opened: list[str] = []

    def open(self, url: str) -> None:
        self.opened.append(url)


@pytest.fixture
def nginx_conf(tmp_path: Path) -> Path:
    """A root nginx.conf including an empty servers/ directory."""
    root = tmp_path / "nginx"
    (root / "servers").mkdir(parents=True)
    conf = root / "nginx.conf"
    conf.write_text(NGINX_CONF)
    return conf


@pytest.fixture
def servers_dir(nginx_conf: Path) -> Path:
    return nginx_conf.parent / "servers"


@pytest.fixture
def tmp_config(tmp_path: Path, nginx_conf: Path) -> LocaldevConfig:
    """Return a LocaldevConfig pointing at temp directories."""
    return LocaldevConfig(
        nginx_conf_candidates=[nginx_conf],
        local_domain=".localdev",
        state_dir=tmp_path / "state",
        history_enabled=True,
    )


@pytest.fixture
def issuer() -> FakeIssuer:
    return FakeIssuer()


@pytest.fixture
def reloader() -> FakeReloader:
    return FakeReloader()


@pytest.fixture
def opener() -> FakeOpener:
    return FakeOpener()


@pytest.fixture
def make_site_file():
    """Write a hand-made site config the way a user might have."""

    def _make(directory: Path, file_name: str, server_name: str, proxies: dict[str, str]) -> Path:
        lines = ["server {", "    listen 80;", f"    server_name {server_name};"]
        for location, target in proxies.items():
            lines += [f"    location {location} {{", f"        proxy_pass {target};", "    }"]
        lines.append("}")
        path = directory / file_name
        path.write_text("\n".join(lines) + "\n")
        return path

    return _make
