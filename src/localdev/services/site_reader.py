"""Discover sites by parsing the config files in the include directory."""

from __future__ import annotations

import re
from enum import Enum, auto
from pathlib import Path
from typing import Iterator

from pydantic import BaseModel, Field
from rich.console import Console
from rich.markup import escape

from localdev_common import SiteIndex

from localdev.errors import SiteConfigReadError

console = Console()

_SERVER_NAME_RE = re.compile(r"^server_name\s+(.*?)\s*;")
_LOCATION_RE = re.compile(r"^location\s+(.*?)\s*\{")


class _State(Enum):
    OUTSIDE_LOCATION = auto()
    IN_LOCATION = auto()


class ParsedSiteFile(BaseModel):
    """What a single site config declares."""

    server_names: list[str] = Field(default_factory=list)
    proxies: dict[str, str] = Field(default_factory=dict)
    orphan_proxy_passes: list[str] = Field(default_factory=list)
    irregular_nesting: bool = False
    unmatched_braces: int = 0

    @property
    def server_name(self) -> str | None:
        """The last ``server_name`` read wins."""
        return self.server_names[-1] if self.server_names else None

    @property
    def has_conflicting_names(self) -> bool:
        return len(set(self.server_names)) > 1


def _trimmed_lines(text: str) -> Iterator[str]:
    for line in text.splitlines():
        yield line.lstrip()


def _proxy_target(line: str) -> str | None:
    parts = line.split()
    if len(parts) < 2:
        return None
    return parts[1].strip().rstrip(";").strip()


def parse_site_config(text: str) -> ParsedSiteFile:
    """Extract server names and location -> proxy_pass targets from config text.

    Only ``proxy_pass`` lines inside an open ``location`` block are recorded.
    A line starting with ``}`` closes the open location, so a block nested in
    a location (``if (...) {``) closes it early; such files are flagged with
    ``irregular_nesting`` rather than repaired, as are locations opened
    inside an open location. Braces are balanced separately: a closer with
    no opener, or an opener never closed, counts in ``unmatched_braces``.
    """
    parsed = ParsedSiteFile()
    state = _State.OUTSIDE_LOCATION
    location = ""
    depth = 0

    for line in _trimmed_lines(text):
        if not line.startswith("#"):
            depth += line.count("{")
            closes = line.count("}")
            if closes > depth:
                parsed.unmatched_braces += closes - depth
                depth = 0
            else:
                depth -= closes

        if line.startswith("server_name"):
            match = _SERVER_NAME_RE.match(line)
            if match:
                parsed.server_names.append(match.group(1))
            continue

        if line.startswith("location"):
            match = _LOCATION_RE.match(line)
            if match:
                if state is _State.IN_LOCATION:
                    parsed.irregular_nesting = True
                location = match.group(1)
                state = _State.IN_LOCATION
            continue

        if line.startswith("proxy_pass"):
            target = _proxy_target(line)
            if state is _State.IN_LOCATION and target is not None:
                parsed.proxies[location] = target
            else:
                parsed.orphan_proxy_passes.append(line)
            continue

        if line.startswith("}"):
            state = _State.OUTSIDE_LOCATION
            location = ""
            continue

        if state is _State.IN_LOCATION and line.rstrip().endswith("{"):
            parsed.irregular_nesting = True

    parsed.unmatched_braces += depth
    return parsed


def read_sites(include_dir: Path, local_domain: str, *, verbose: bool = False) -> SiteIndex:
    """Parse every file directly inside ``include_dir`` into a SiteIndex.

    Only server names ending in ``local_domain`` are listed; the path and
    proxies of every named file are kept so lookups stay exact.
    """
    index = SiteIndex(include_dir=include_dir)
    names: set[str] = set()

    try:
        entries = sorted(include_dir.iterdir())
    except OSError as exc:
        raise SiteConfigReadError(f"Cannot read directory {include_dir}: {exc}") from exc

    for path in entries:
        if not path.is_file():
            continue
        if verbose:
            console.print(f"[dim]Processing FILE: {escape(str(path))}[/dim]")
        try:
            text = path.read_text()
        except (OSError, UnicodeDecodeError) as exc:
            raise SiteConfigReadError(f"Cannot read {path}: {exc}") from exc

        parsed = parse_site_config(text)
        if verbose:
            _report(path, parsed)
        name = parsed.server_name
        if name is None:
            continue
        names.add(name)
        index.paths[name] = path
        index.proxies[name] = parsed.proxies

    index.server_names = sorted(n for n in names if n.endswith(local_domain))
    return index


def _report(path: Path, parsed: ParsedSiteFile) -> None:
    for line in parsed.orphan_proxy_passes:
        console.print(f"[dim]No current location for proxy_pass: {escape(line)}[/dim]")
    if parsed.has_conflicting_names:
        console.print(
            f"[yellow]Several server_name values in {escape(str(path))}, "
            f"using {escape(parsed.server_name or '')}[/yellow]"
        )
    if parsed.irregular_nesting:
        console.print(f"[yellow]Nested block inside a location in {escape(str(path))}[/yellow]")
    if parsed.unmatched_braces:
        console.print(
            f"[yellow]{parsed.unmatched_braces} unmatched brace(s) in {escape(str(path))}[/yellow]"
        )
