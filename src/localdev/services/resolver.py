"""Locate the root nginx.conf and the include directory holding site files."""

from __future__ import annotations

import re
from pathlib import Path

from localdev.errors import IncludeDirError, LocaldevError, NginxConfNotFoundError

# Matches "include servers/*" and "include /etc/nginx/sites-enabled/*"
_INCLUDE_DIR_RE = re.compile(r"^include\s+([^\s;*]+)/\*")


def resolve_nginx_conf(candidates: list[Path]) -> Path:
    """Return the first candidate that exists and is a regular file."""
    for path in candidates:
        if path.is_file():
            return path
    raise NginxConfNotFoundError()


def find_include_dirs(text: str) -> list[str]:
    """Return the directories wildcard-included by a root config, in order."""
    found: list[str] = []
    for line in text.splitlines():
        line = line.lstrip()
        if not line.startswith("include"):
            continue
        match = _INCLUDE_DIR_RE.match(line)
        if match and match.group(1) not in found:
            found.append(match.group(1))
    return found


def resolve_include_dir(conf_path: Path) -> Path:
    """Return the single include directory, relative to the config's directory.

    Raises IncludeDirError when the config wildcard-includes no directory or
    more than one; the tool does not guess between candidates.
    """
    try:
        text = conf_path.read_text()
    except OSError as exc:
        raise LocaldevError(f"Cannot read {conf_path}: {exc}") from exc

    candidates = find_include_dirs(text)
    if not candidates:
        raise IncludeDirError(f"No include directory found in {conf_path}", candidates)
    if len(candidates) > 1:
        raise IncludeDirError("Found more than one potential directory!", candidates)
    return conf_path.parent / candidates[0]
