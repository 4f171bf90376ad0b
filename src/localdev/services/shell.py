"""Subprocess wrapper shared by the external collaborators."""

from __future__ import annotations

import subprocess

from rich.console import Console
from rich.markup import escape

from localdev.errors import LocaldevError

console = Console()


def run(
    cmd: list[str],
    *,
    error_cls: type[LocaldevError] = LocaldevError,
    verbose: bool = False,
) -> subprocess.CompletedProcess[str]:
    """Run ``cmd`` to completion; raise ``error_cls`` on a missing binary or non-zero exit."""
    if verbose:
        console.print(f"[dim]Running {escape(' '.join(cmd))} ...[/dim]")
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise error_cls(f"Command failed: {' '.join(cmd)}\n{exc}") from exc

    if verbose:
        console.print(f"[dim]{escape(cmd[0])} status ? {result.returncode}[/dim]")
        if result.stdout:
            console.print(escape(result.stdout.rstrip()), highlight=False)
    if result.returncode != 0:
        raise error_cls(f"Command failed: {' '.join(cmd)}\nstderr: {result.stderr.strip()}")
    return result
