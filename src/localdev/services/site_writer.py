"""Jinja2-based nginx site config renderer."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from localdev_common import (
    HTTP_PORT,
    HTTPS_PORT,
    SSL_CIPHERS,
    SSL_SESSION_CACHE,
    SSL_SESSION_TIMEOUT,
    SiteDefinition,
)

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape([]),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_site(site: SiteDefinition) -> str:
    """Render the HTTP block, the HTTPS block and, with a websocket, its upstream."""
    env = _get_env()
    template = env.get_template("site.conf.j2")
    return template.render(
        site=site,
        http_port=HTTP_PORT,
        https_port=HTTPS_PORT,
        ssl_session_cache=SSL_SESSION_CACHE,
        ssl_session_timeout=SSL_SESSION_TIMEOUT,
        ssl_ciphers=SSL_CIPHERS,
    )


def site_file_name(server_name: str) -> str:
    return f"{server_name}.conf"


def write_site(path: Path, content: str) -> None:
    """Write site config to disk, replacing any existing file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
