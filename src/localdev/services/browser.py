"""Open a site in the default browser."""

from __future__ import annotations

import typer

from localdev.errors import BrowserOpenError


class BrowserOpener:
    def open(self, url: str) -> None:
        if typer.launch(url) != 0:
            raise BrowserOpenError(f"Failed to open {url}")
