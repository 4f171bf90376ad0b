"""Root Typer application for the localdev CLI."""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Generator, Optional

import typer
from click.shell_completion import get_completion_class
from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape

from localdev_common import HistoryEntry, get_config

from localdev import history
from localdev.dispatcher import Dispatcher
from localdev.errors import IncludeDirError, LocaldevError
from localdev.services.browser import BrowserOpener
from localdev.services.mkcert import Mkcert
from localdev.services.nginx import NginxReloader
from localdev.services.resolver import resolve_include_dir, resolve_nginx_conf
from localdev.services.site_reader import read_sites

app = typer.Typer(
    name="localdev",
    help="Manage configuration of reverse proxies for local development domains using nginx.",
    add_completion=False,
)
console = Console()


class Shell(str, Enum):
    bash = "bash"
    zsh = "zsh"
    fish = "fish"


class _Options(BaseModel):
    nginx_path: Optional[Path] = None
    verbose: int = 0


@contextmanager
def _handle_errors() -> Generator[None, None, None]:
    """Print LocaldevError for the user and exit with its code."""
    try:
        yield
    except LocaldevError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        if isinstance(exc, IncludeDirError):
            for candidate in exc.candidates:
                console.print(escape(candidate))
        raise typer.Exit(exc.exit_code)


def _note_result(entry: HistoryEntry, path: Path | None) -> None:
    if path is None:
        entry.outcome = "unchanged"
    else:
        entry.path = str(path)


def _dispatcher(ctx: typer.Context) -> Dispatcher:
    """Discover nginx.conf and the site files, then wire up the collaborators."""
    opts: _Options = ctx.obj
    cfg = get_config()
    verbose = opts.verbose > 0

    conf_path = resolve_nginx_conf(cfg.conf_candidates(opts.nginx_path))
    if verbose:
        console.print(f"[dim]Found nginx.conf at {escape(str(conf_path))}[/dim]")
    include_dir = resolve_include_dir(conf_path)
    if verbose:
        console.print(f"[dim]Found directory: {escape(str(include_dir))}[/dim]")

    index = read_sites(include_dir, cfg.local_domain, verbose=verbose)
    return Dispatcher(
        index,
        issuer=Mkcert(conf_path.parent, binary=cfg.mkcert_bin, verbose=verbose),
        reloader=NginxReloader(conf_path, binary=cfg.nginx_bin, verbose=verbose),
        opener=BrowserOpener(),
        local_domain=cfg.local_domain,
        verbose=verbose,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    nginx_path: Optional[Path] = typer.Option(None, "--nginx-path", "-n", help="Specific path of the nginx config file"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Turn verbose information on"),
) -> None:
    """List all the servers and their proxies when no command is given."""
    ctx.obj = _Options(nginx_path=nginx_path, verbose=verbose)
    if ctx.invoked_subcommand is None:
        with _handle_errors():
            _dispatcher(ctx).list_sites()


@app.command(name="list")
def list_sites(ctx: typer.Context) -> None:
    """List all the servers and their proxies."""
    with _handle_errors():
        _dispatcher(ctx).list_sites()


@app.command()
def find(
    ctx: typer.Context,
    server_name: str = typer.Argument(help="Name of the server to find, also tried with the local domain added"),
    open_: bool = typer.Option(False, "--open", "-o", help="Open it in the browser if found"),
) -> None:
    """Find a specific server and its proxies."""
    with _handle_errors():
        _dispatcher(ctx).find(server_name, open_=open_)


@app.command(name="open")
def open_site(
    ctx: typer.Context,
    server_name: str = typer.Argument(help="Name of the server to open, also tried with the local domain added"),
) -> None:
    """Open a specific server in the browser, like find --open."""
    with _handle_errors():
        _dispatcher(ctx).open(server_name)


@app.command()
def add(
    ctx: typer.Context,
    server_name: str = typer.Argument(help="Name of the server to configure; the local domain is added if missing"),
    default_target: Optional[str] = typer.Argument(
        None, help="The default (/) proxy target, eg: http://localhost:3000"
    ),
    ws: Optional[str] = typer.Option(
        None, "--ws", "-w", help='The websocket proxy, eg: /ws:localhost:3000 (default); "" disables it'
    ),
    proxy: Optional[list[str]] = typer.Option(
        None, "--proxy", "-p", help="Other proxies, eg: api=http://localhost:8080 or api:8080"
    ),
    force: bool = typer.Option(False, "--force", help="Reconfigure even if the server is already configured"),
    open_: bool = typer.Option(False, "--open", "-o", help="Open it in the browser right after adding it"),
) -> None:
    """Add a server and its proxies, with a local certificate."""
    cfg = get_config()
    target = default_target or cfg.default_target
    ws_arg = cfg.default_ws if ws is None else ws

    with _handle_errors():
        dispatcher = _dispatcher(ctx)
        with history.record(
            "add", server_name, default_target=target, ws=ws_arg, proxies=proxy or [], force=force
        ) as entry:
            path = dispatcher.add(server_name, target, ws=ws_arg, proxies=proxy or [], force=force, open_=open_)
            _note_result(entry, path)


@app.command()
def remove(
    ctx: typer.Context,
    server_name: str = typer.Argument(help="Name of the server to remove"),
) -> None:
    """Remove a server and reload nginx."""
    with _handle_errors():
        dispatcher = _dispatcher(ctx)
        with history.record("remove", server_name) as entry:
            _note_result(entry, dispatcher.remove(server_name))


@app.command()
def reload(ctx: typer.Context) -> None:
    """Reload nginx config."""
    with _handle_errors():
        dispatcher = _dispatcher(ctx)
        with history.record("reload"):
            dispatcher.reload()


@app.command()
def completion(shell: Shell = typer.Argument(help="Shell to generate the completion script for")) -> None:
    """Generate a shell completion script."""
    command = typer.main.get_command(app)
    comp_cls = get_completion_class(shell.value)
    if comp_cls is None:
        raise typer.BadParameter(f"Unsupported shell: {shell.value}")
    typer.echo(comp_cls(command, {}, "localdev", "_LOCALDEV_COMPLETE").source())


if __name__ == "__main__":
    app()
