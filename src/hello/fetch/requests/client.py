"""Synchronous fetch using a requests Session."""

from __future__ import annotations

import logging
from typing import Optional

import requests
from requests import Session
from requests.adapters import HTTPAdapter, Retry

from hello.fetch import USER_AGENT
from hello.fetch._transport_errors import translate_transport_error
from hello.fetch.models import FetchRequest, FetchResponse

logger = logging.getLogger(__name__)

# One request produces one response or one failure
NO_RETRY = Retry(total=0, read=False, redirect=False)


def create_session() -> Session:
    """Create a requests session that never retries and never follows redirects on its own."""
    session = requests.Session()
    session.headers["User-Agent"] = f"{USER_AGENT} requests/{requests.__version__}"
    session.mount("https://", HTTPAdapter(max_retries=NO_RETRY))
    return session


def _to_fetch_response(resp: requests.Response) -> FetchResponse:
    return FetchResponse(
        status_code=resp.status_code,
        body=resp.content,
        headers=dict(resp.headers),
        url=resp.url or "",
        reason=resp.reason or "",
    )


def fetch(request: FetchRequest, *, session: Optional[Session] = None, timeout: Optional[float] = None) -> FetchResponse:
    """Send a single request and read the whole response body.

    Redirects are returned as-is, not followed. Any HTTP status counts as a response;
    only transport failures raise.

    Args:
        request: The request to send
        session: Session to send with. A fresh one is created (and closed) when omitted.
        timeout: Passed to requests, None waits indefinitely

    Raises:
        TlsError: the TLS handshake failed
        NetworkError: resolution, connection, timeout or other transport failure
    """
    owns_session = session is None
    if session is None:
        session = create_session()

    logger.debug(f"Sending {request.method} {request.uri}")
    try:
        resp = session.request(
            method=request.method,
            url=request.uri,
            headers=dict(request.headers) or None,
            timeout=timeout,
            allow_redirects=False,
        )
    except requests.RequestException as e:
        raise translate_transport_error(e, request) from e
    finally:
        if owns_session:
            session.close()

    response = _to_fetch_response(resp)
    logger.debug(f"Got status={response.status_code} with {len(response.body)} bytes from {request.uri}")
    return response
