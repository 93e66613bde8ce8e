"""Translation of HTTP library exceptions into FetchError types.

Both requests (via urllib3) and httpx (via httpcore) wrap the underlying socket and ssl
errors several layers deep, so classification walks the whole exception chain.
"""

import socket
import ssl
from typing import Iterator, Optional

import httpx
import requests

from hello.fetch.errors import (
    REFUSED,
    RESOLUTION,
    TIMEOUT,
    TRANSPORT,
    FetchError,
    InvalidUrlError,
    NetworkError,
    TlsError,
)
from hello.fetch.models import FetchRequest

_TIMEOUT_TYPES = (requests.exceptions.Timeout, httpx.TimeoutException, TimeoutError)


def _iter_chain(exc: BaseException) -> Iterator[BaseException]:
    seen = set()
    pending = [exc]
    while pending:
        current = pending.pop(0)
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        pending.append(current.__cause__)
        pending.append(current.__context__)
        # urllib3 MaxRetryError keeps the real failure in .reason
        reason = getattr(current, "reason", None)
        if isinstance(reason, BaseException):
            pending.append(reason)
        pending.extend(arg for arg in current.args if isinstance(arg, BaseException))


def _find(exc: BaseException, types) -> Optional[BaseException]:
    for link in _iter_chain(exc):
        if isinstance(link, types):
            return link
    return None


def translate_transport_error(exc: Exception, request: FetchRequest) -> FetchError:
    """Map a requests/httpx transport exception to a TlsError, NetworkError or InvalidUrlError."""
    host = request.host
    url = request.uri

    if isinstance(exc, requests.exceptions.InvalidURL):
        return InvalidUrlError(f"Invalid URL '{url}': {exc}", url=url)

    ssl_error = _find(exc, ssl.SSLError) or _find(exc, requests.exceptions.SSLError)
    if ssl_error is not None:
        return TlsError(f"TLS handshake with {host} failed: {ssl_error}", url=url)

    if _find(exc, _TIMEOUT_TYPES) is not None:
        return NetworkError(f"Request to {host} timed out", url=url, reason=TIMEOUT)

    gai_error = _find(exc, socket.gaierror)
    if gai_error is not None:
        return NetworkError(f"Could not resolve host {host}: {gai_error}", url=url, reason=RESOLUTION)

    if _find(exc, ConnectionRefusedError) is not None:
        return NetworkError(f"Connection to {host} refused", url=url, reason=REFUSED)

    return NetworkError(f"Request to {url} failed: {exc}", url=url, reason=TRANSPORT)
