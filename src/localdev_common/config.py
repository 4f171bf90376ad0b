"""Central configuration for localdev."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field

from localdev_common.constants import (
    DEFAULT_TARGET,
    DEFAULT_WS,
    HISTORY_FILE_NAME,
    LOCAL_DOMAIN,
    MKCERT_BIN,
    NGINX_BIN,
    NGINX_CONF_CANDIDATES,
    STATE_DIR,
)

_FALSE_VALUES = ("0", "false", "no", "off")


def _default_state_dir() -> Path:
    env = os.environ.get("LOCALDEV_STATE_DIR")
    return Path(env) if env else STATE_DIR


def _history_enabled() -> bool:
    return os.environ.get("LOCALDEV_HISTORY", "1").lower() not in _FALSE_VALUES


class LocaldevConfig(BaseModel):
    """Where to look for nginx, which binaries to call, and where history goes."""

    nginx_conf_candidates: list[Path] = Field(default_factory=lambda: list(NGINX_CONF_CANDIDATES))
    local_domain: str = Field(default_factory=lambda: os.environ.get("LOCALDEV_DOMAIN", LOCAL_DOMAIN))
    default_target: str = DEFAULT_TARGET
    default_ws: str = DEFAULT_WS
    mkcert_bin: str = Field(default_factory=lambda: os.environ.get("LOCALDEV_MKCERT", MKCERT_BIN))
    nginx_bin: str = Field(default_factory=lambda: os.environ.get("LOCALDEV_NGINX", NGINX_BIN))
    state_dir: Path = Field(default_factory=_default_state_dir)
    history_enabled: bool = Field(default_factory=_history_enabled)

    @property
    def history_path(self) -> Path:
        return self.state_dir / HISTORY_FILE_NAME

    def conf_candidates(self, override: Path | None = None) -> list[Path]:
        """Candidate root config paths, or just the override when one is given."""
        if override is not None:
            return [override]
        return list(self.nginx_conf_candidates)


@lru_cache(maxsize=1)
def get_config() -> LocaldevConfig:
    """Resolve the environment once per process."""
    return LocaldevConfig()
