"""Site commands: list, find, open, add, remove and reload.

The dispatcher works on an explicit SiteIndex and talks to the outside world
only through the three collaborators it is given, so tests can pass fakes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Protocol

from rich.console import Console
from rich.markup import escape

from localdev_common import DEFAULT_TARGET, DEFAULT_WS, LOCAL_DOMAIN, SiteDefinition, SiteIndex, WebsocketBinding

from localdev.errors import LocaldevError
from localdev.services.proxy_arg import expand_port_target, parse_proxy_arg
from localdev.services.site_writer import render_site, site_file_name, write_site

console = Console()


class CertificateIssuer(Protocol):
    def issue(self, name: str) -> None: ...


class ProxyReloader(Protocol):
    def reload(self) -> None: ...


class UrlOpener(Protocol):
    def open(self, url: str) -> None: ...


def print_site(name: str, proxies: dict[str, str]) -> None:
    """Print a site URL followed by its locations, aligned on the longest one."""
    console.print()
    console.print(f" 🚦 [bold]https://{escape(name)}[/bold]")
    if not proxies:
        return
    width = max(len(location) for location in proxies)
    for location in sorted(proxies):
        target = proxies[location].strip().strip("/")
        shown = "/" + f"{location.strip().strip('/'):<{width}}"
        console.print(f"     🚀 [green]{escape(shown)}[/green]=> [blue]{escape(target)}[/blue]")


class Dispatcher:
    def __init__(
        self,
        index: SiteIndex,
        *,
        issuer: CertificateIssuer,
        reloader: ProxyReloader,
        opener: UrlOpener,
        local_domain: str = LOCAL_DOMAIN,
        verbose: bool = False,
    ):
        self.index = index
        self.issuer = issuer
        self.reloader = reloader
        self.opener = opener
        self.local_domain = local_domain
        self.verbose = verbose

    def _debug(self, message: str) -> None:
        if self.verbose:
            console.print(f"[dim]{escape(message)}[/dim]")

    def _not_found(self, name: str) -> None:
        console.print(f"[yellow]❗ Server name not found: {escape(name)}[/yellow]")
        console.print("[yellow]❗  Use the add command to create it.[/yellow]")

    def list_sites(self) -> None:
        """Print every discovered site and its locations."""
        if not self.index.server_names:
            console.print("No local server found.")
            return
        for name in self.index.server_names:
            print_site(name, self.index.proxies.get(name, {}))

    def open_site(self, name: str) -> None:
        url = f"https://{name}"
        console.print()
        console.print(f" ⚡ Opening {escape(url)}")
        self.opener.open(url)

    def find(self, name: str, *, open_: bool = False) -> str | None:
        """Print the matching site and optionally open it; None when unknown."""
        found = self.index.find(name, self.local_domain)
        if found is None:
            self._not_found(name)
            return None
        print_site(found, self.index.proxies.get(found, {}))
        if open_:
            self.open_site(found)
        return found

    def open(self, name: str) -> str | None:
        found = self.index.find(name, self.local_domain)
        if found is None:
            self._not_found(name)
            return None
        self.open_site(found)
        return found

    def add(
        self,
        name: str,
        default_target: str = DEFAULT_TARGET,
        *,
        ws: str = DEFAULT_WS,
        proxies: Iterable[str] = (),
        force: bool = False,
        open_: bool = False,
    ) -> Path | None:
        """Issue a certificate, write the site config and reload nginx.

        Returns the written path, or None when the site exists and ``force``
        is not set (nothing is written or reloaded then).
        """
        found = self.index.find(name, self.local_domain)
        if found is not None and not force:
            console.print(f"[yellow]❗ This server already exists: {escape(found)}[/yellow]")
            console.print("[yellow]❗  use --force to reconfigure[/yellow]")
            return None

        websocket = None
        if ws:
            parsed = parse_proxy_arg(ws, with_protocol=False)
            if parsed is not None:
                websocket = WebsocketBinding(location=parsed[0], target=parsed[1])

        server_name = found or name
        if not server_name.endswith(self.local_domain):
            server_name += self.local_domain
        if found is None:
            self._debug(f"No current configuration for server: {server_name}")

        self.issuer.issue(server_name)

        mapping = {"/": expand_port_target(default_target, with_protocol=True)}
        for arg in proxies:
            parsed = parse_proxy_arg(arg, with_protocol=True)
            if parsed is not None:
                mapping[parsed[0]] = parsed[1]
        for location, target in mapping.items():
            self._debug(f"Location: {location}")
            self._debug(f"Target: {target}")

        site = SiteDefinition(server_name=server_name, proxies=mapping, websocket=websocket)
        path = self.index.paths.get(server_name) or self.index.include_dir / site_file_name(server_name)
        try:
            write_site(path, render_site(site))
        except OSError as exc:
            raise LocaldevError(f"Cannot write {path}: {exc}") from exc
        self._debug(f">> Wrote new configuration for server: {server_name}")

        if site.websocket_location is not None:
            mapping[site.websocket_location] = site.upstream_name
        self.index.register(server_name, path, mapping)

        self.reloader.reload()
        print_site(server_name, mapping)
        if open_:
            self.open_site(server_name)
        return path

    def remove(self, name: str) -> Path | None:
        """Delete the site's config file and reload; None when unknown."""
        found = self.index.find(name, self.local_domain)
        if found is None:
            console.print(f"Server name not found: {escape(name)}")
            return None
        console.print(f"Removing current configuration for: {escape(found)}")
        path = self.index.paths[found]
        try:
            path.unlink()
        except OSError as exc:
            raise LocaldevError(f"Cannot remove {path}: {exc}") from exc
        self.index.forget(found)
        self.reloader.reload()
        return path

    def reload(self) -> None:
        self._debug("Running nginx reload ...")
        self.reloader.reload()
