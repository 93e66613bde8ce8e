"""Asynchronous fetch using an httpx AsyncClient."""

import logging
from typing import Optional

import httpx

from hello.fetch import USER_AGENT
from hello.fetch._transport_errors import translate_transport_error
from hello.fetch.errors import InvalidUrlError
from hello.fetch.models import FetchRequest, FetchResponse

logger = logging.getLogger(__name__)


def create_async_client(**kwargs) -> httpx.AsyncClient:
    """Create an AsyncClient with no connection retries and redirect following disabled.

    Args:
        **kwargs: Additional arguments passed to httpx.AsyncClient (e.g. transport, verify).
    """
    kwargs.setdefault("transport", httpx.AsyncHTTPTransport(retries=0))
    headers = {"User-Agent": f"{USER_AGENT} python-httpx/{httpx.__version__}"}
    return httpx.AsyncClient(headers=headers, follow_redirects=False, **kwargs)


def _to_fetch_response(resp: httpx.Response) -> FetchResponse:
    return FetchResponse(
        status_code=resp.status_code,
        body=resp.content,
        headers=dict(resp.headers),
        url=str(resp.url),
        reason=resp.reason_phrase,
    )


async def fetch_async(
    request: FetchRequest,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
) -> FetchResponse:
    """Async counterpart of hello.fetch.requests.client.fetch.

    When timeout is None the client's own timeout applies (httpx default unless the
    client was configured otherwise).
    """
    owns_client = client is None
    if client is None:
        client = create_async_client()

    logger.debug(f"Sending {request.method} {request.uri}")
    try:
        resp = await client.request(
            request.method,
            request.uri,
            headers=dict(request.headers) or None,
            timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            follow_redirects=False,
        )
    except httpx.InvalidURL as e:
        raise InvalidUrlError(f"Invalid URL '{request.uri}': {e}", url=request.uri) from e
    except httpx.HTTPError as e:
        raise translate_transport_error(e, request) from e
    finally:
        if owns_client:
            await client.aclose()

    response = _to_fetch_response(resp)
    logger.debug(f"Got status={response.status_code} with {len(response.body)} bytes from {request.uri}")
    return response
