"""mkcert certificate issuance for local domains."""

from __future__ import annotations

from pathlib import Path

from localdev.errors import CertificateError
from localdev.services import shell


class Mkcert:
    """Issues ``<name>.pem`` / ``<name>-key.pem`` into ``cert_dir``."""

    def __init__(self, cert_dir: Path, *, binary: str = "mkcert", verbose: bool = False):
        self.cert_dir = cert_dir
        self.binary = binary
        self.verbose = verbose

    def command(self, name: str) -> list[str]:
        return [
            self.binary,
            "-cert-file", str(self.cert_dir / f"{name}.pem"),
            "-key-file", str(self.cert_dir / f"{name}-key.pem"),
            name,
        ]

    def issue(self, name: str) -> None:
        """Generate a locally trusted certificate. Raises CertificateError on failure."""
        shell.run(self.command(name), error_cls=CertificateError, verbose=self.verbose)
