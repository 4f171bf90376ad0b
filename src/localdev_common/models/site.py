"""Site models: the definition used to render a config, and the discovered index."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from localdev_common.constants import WS_UPSTREAM_PREFIX


def rooted(location: str) -> str:
    """Prefix a location with ``/`` unless it already has one."""
    return location if location.startswith("/") else f"/{location}"


def with_trailing_slash(value: str) -> str:
    return value if value.endswith("/") else f"{value}/"


class WebsocketBinding(BaseModel):
    """A websocket location served through a sticky upstream group."""

    location: str
    target: str


class SiteDefinition(BaseModel):
    """Everything needed to render one site's config file."""

    server_name: str
    proxies: dict[str, str]
    websocket: WebsocketBinding | None = None

    @model_validator(mode="after")
    def _require_root_location(self) -> SiteDefinition:
        if not any(rooted(loc) == "/" for loc in self.proxies):
            raise ValueError("proxies must include the root '/' location")
        return self

    @property
    def certificate_file(self) -> str:
        return f"{self.server_name}.pem"

    @property
    def certificate_key_file(self) -> str:
        return f"{self.server_name}-key.pem"

    @property
    def upstream_name(self) -> str:
        return f"{WS_UPSTREAM_PREFIX}{self.server_name}"

    @property
    def websocket_location(self) -> str | None:
        if self.websocket is None:
            return None
        return rooted(self.websocket.location)

    def proxy_locations(self) -> list[tuple[str, str]]:
        """Plain proxy blocks as (location, target), sorted, slashes enforced.

        A location claimed by the websocket binding is left out; it is
        rendered as the websocket block instead.
        """
        ws_location = self.websocket_location
        blocks: dict[str, str] = {}
        for location, target in self.proxies.items():
            location = rooted(location)
            if ws_location is not None and location.rstrip("/") == ws_location.rstrip("/"):
                continue
            blocks[with_trailing_slash(location)] = with_trailing_slash(target)
        return sorted(blocks.items())


class SiteIndex(BaseModel):
    """Sites discovered in an include directory."""

    include_dir: Path
    server_names: list[str] = Field(default_factory=list)
    paths: dict[str, Path] = Field(default_factory=dict)
    proxies: dict[str, dict[str, str]] = Field(default_factory=dict)

    def find(self, name: str, local_domain: str) -> str | None:
        """Match ``name`` literally, then with the local-domain suffix appended."""
        for candidate in (name, f"{name}{local_domain}"):
            if candidate in self.server_names:
                return candidate
        return None

    def register(self, name: str, path: Path, proxies: dict[str, str]) -> None:
        if name not in self.server_names:
            self.server_names = sorted([*self.server_names, name])
        self.paths[name] = path
        self.proxies[name] = dict(proxies)

    def forget(self, name: str) -> None:
        self.server_names = [n for n in self.server_names if n != name]
        self.paths.pop(name, None)
        self.proxies.pop(name, None)
