"""nginx config validation and reload."""

from __future__ import annotations

from pathlib import Path

from localdev.errors import NginxReloadError
from localdev.services import shell


class NginxReloader:
    """Validates the root config with ``nginx -t`` and signals a reload."""

    def __init__(
        self,
        conf_path: Path | None = None,
        *,
        binary: str = "nginx",
        validate: bool = True,
        verbose: bool = False,
    ):
        self.conf_path = conf_path
        self.binary = binary
        self.validate = validate
        self.verbose = verbose

    def validate_config(self) -> None:
        """Run nginx -t. Raises NginxReloadError on failure."""
        cmd = [self.binary, "-t"]
        if self.conf_path is not None:
            cmd.extend(["-c", str(self.conf_path)])
        shell.run(cmd, error_cls=NginxReloadError, verbose=self.verbose)

    def reload(self) -> None:
        """Validate config (unless disabled), then reload nginx."""
        if self.validate:
            self.validate_config()
        shell.run([self.binary, "-s", "reload"], error_cls=NginxReloadError, verbose=self.verbose)
