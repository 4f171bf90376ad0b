"""Shared constants for the localdev tooling."""

from pathlib import Path

# Root nginx config candidates, checked in order
NGINX_CONF_CANDIDATES = (
    Path("/etc/nginx/nginx.conf"),
    Path("/usr/local/etc/nginx/nginx.conf"),
    Path("/opt/homebrew/etc/nginx/nginx.conf"),
)

# Hostname suffix appended to bare site names
LOCAL_DOMAIN = ".localdev"

# `add` defaults
DEFAULT_TARGET = "http://localhost:3000"
DEFAULT_WS = "/ws:localhost:3000"

# External binaries
MKCERT_BIN = "mkcert"
NGINX_BIN = "nginx"

# Command history
STATE_DIR = Path.home() / ".local" / "state" / "localdev"
HISTORY_FILE_NAME = "history.jsonl"

# Generated config
HTTP_PORT = 80
HTTPS_PORT = 443
WS_UPSTREAM_PREFIX = "ws-backend-"
SSL_SESSION_CACHE = "shared:SSL:1m"
SSL_SESSION_TIMEOUT = "5m"
SSL_CIPHERS = "HIGH:!aNULL:!MD5"
