"""Parsing of ``location=target`` proxy arguments."""

from __future__ import annotations

import re

from rich.console import Console
from rich.markup import escape

console = Console()

# A bare port, optionally written as ":8080"; anything after the digits is kept
_PORT_TARGET_RE = re.compile(r"^:?([0-9]+.*)$")


def expand_port_target(target: str, with_protocol: bool) -> str:
    """Rewrite a bare port (``8080``, ``:8080``) to a localhost target; leave anything else."""
    target = target.strip()
    match = _PORT_TARGET_RE.match(target)
    if not match:
        return target
    port = match.group(1)
    return f"http://localhost:{port}" if with_protocol else f"localhost:{port}"


def parse_proxy_arg(arg: str, with_protocol: bool) -> tuple[str, str] | None:
    """Split ``arg`` into a (location, target) pair.

    The split happens on the first ``=``, or on the first ``:`` when there is
    no ``=``, so ``api=http://localhost:8080`` and ``api:8080`` both work.
    The location is rooted at ``/``. A bare port target is expanded to
    ``http://localhost:<port>`` when ``with_protocol`` is set (plain proxies)
    and to ``localhost:<port>`` otherwise (websocket upstream servers).

    Returns None, after printing a warning, when neither delimiter is present.
    """
    for delimiter in ("=", ":"):
        if delimiter in arg:
            location, target = arg.split(delimiter, 1)
            break
    else:
        console.print(f"[yellow]❗ Invalid proxy: {escape(arg)}[/yellow]")
        return None

    location = location.strip()
    if not location.startswith("/"):
        location = f"/{location}"

    return location, expand_port_target(target, with_protocol)
