"""Errors raised by fetch operations."""

from typing import Optional

RESOLUTION = "resolution"
REFUSED = "refused"
TIMEOUT = "timeout"
TRANSPORT = "transport"


class FetchError(Exception):
    """Base class for failures of a single fetch."""

    def __init__(self, message: str, *, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class NetworkError(FetchError):
    """Name resolution, connection or transport failure."""

    def __init__(self, message: str, *, url: Optional[str] = None, reason: str = TRANSPORT):
        super().__init__(message, url=url)
        self.reason = reason


class TlsError(FetchError):
    """TLS handshake or certificate verification failure."""


class InvalidUrlError(FetchError, ValueError):
    """The target URI cannot be fetched (not absolute, not https, no host)."""
