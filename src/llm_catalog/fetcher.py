"""
fetcher.py — Bounded GET of a provider's /models endpoint.

One request per call, on a client that is opened and closed inside the call.
The whole network step runs under a single timeout; every way it can go wrong
surfaces as a ``FetchError`` subclass rather than an httpx exception.

Dependencies: httpx (async HTTP)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from llm_catalog.config import settings
from llm_catalog.errors import (
    FetchConnectionError,
    FetchParseError,
    FetchStatusError,
    FetchTimeoutError,
)

logger = logging.getLogger(__name__)


async def _get_json(
    url: str,
    headers: Dict[str, str],
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport],
) -> Any:
    async with httpx.AsyncClient(
        timeout=timeout, transport=transport, follow_redirects=True
    ) as client:
        r = await client.get(url, headers=headers)
        if not r.is_success:
            # Error bodies can echo the credential back; keep them out of the message.
            raise FetchStatusError(
                f"HTTP {r.status_code} from {r.url}", status_code=r.status_code
            )
        try:
            return r.json()
        except ValueError as exc:
            raise FetchParseError(f"Response from {url} is not JSON: {exc}") from exc


async def fetch_json(
    url: str,
    headers: Dict[str, str],
    *,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """GET ``url`` and return the decoded JSON body.

    ``timeout`` defaults to ``settings.request_timeout`` (``REQUEST_TIMEOUT``
    unless overridden by CATALOG_REQUEST_TIMEOUT) and bounds the entire
    request, including connect and body read; on expiry the in-flight request
    is cancelled.  ``transport`` is passed straight to ``httpx.AsyncClient``
    (tests use ``httpx.MockTransport``).  Redirects are followed; only the
    final response's status is checked.

    Raises FetchTimeoutError, FetchConnectionError, FetchStatusError or
    FetchParseError.
    """
    limit = settings.request_timeout if timeout is None else timeout
    try:
        data = await asyncio.wait_for(_get_json(url, headers, limit, transport), timeout=limit)
    except asyncio.TimeoutError as exc:
        raise FetchTimeoutError(f"GET {url} timed out after {limit}s") from exc
    except httpx.TimeoutException as exc:
        raise FetchTimeoutError(f"GET {url} timed out: {exc}") from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchConnectionError(f"GET {url} failed: {type(exc).__name__}: {exc}") from exc

    logger.debug("Fetched %s", url)
    return data
