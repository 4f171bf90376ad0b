"""localdev common — shared models and constants for the localdev CLI."""

from localdev_common.constants import (
    DEFAULT_TARGET,
    DEFAULT_WS,
    HTTP_PORT,
    HTTPS_PORT,
    LOCAL_DOMAIN,
    NGINX_CONF_CANDIDATES,
    SSL_CIPHERS,
    SSL_SESSION_CACHE,
    SSL_SESSION_TIMEOUT,
)
from localdev_common.config import LocaldevConfig, get_config
from localdev_common.models.history_entry import HistoryEntry
from localdev_common.models.site import SiteDefinition, SiteIndex, WebsocketBinding

__all__ = [
    "DEFAULT_TARGET",
    "DEFAULT_WS",
    "HTTP_PORT",
    "HTTPS_PORT",
    "HistoryEntry",
    "LOCAL_DOMAIN",
    "LocaldevConfig",
    "NGINX_CONF_CANDIDATES",
    "SSL_CIPHERS",
    "SSL_SESSION_CACHE",
    "SSL_SESSION_TIMEOUT",
    "SiteDefinition",
    "SiteIndex",
    "WebsocketBinding",
    "get_config",
]
