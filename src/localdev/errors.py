"""Custom exceptions for the localdev CLI."""

from __future__ import annotations


class LocaldevError(Exception):
    """Base exception for all localdev operations."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class NginxConfNotFoundError(LocaldevError):
    """No root nginx.conf exists at any candidate path."""

    def __init__(self, message: str = "Could not find nginx.conf", *, exit_code: int = 0):
        super().__init__(message, exit_code=exit_code)


class IncludeDirError(LocaldevError):
    """The root config does not reference exactly one include directory."""

    def __init__(self, message: str, candidates: list[str]):
        super().__init__(message)
        self.candidates = candidates


class SiteConfigReadError(LocaldevError):
    """A site config file or the include directory could not be read."""


class CertificateError(LocaldevError):
    """mkcert failed to issue a certificate."""


class NginxReloadError(LocaldevError):
    """nginx config validation or reload failed."""


class BrowserOpenError(LocaldevError):
    """The site could not be opened in a browser."""
