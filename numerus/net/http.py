# file: numerus/net/http.py
"""
Async HTTP fetching (httpx) with retries and exponential backoff.

Used to pull reference datasets published at a URL. Local files and the
packaged datasets never go through here.
"""

from __future__ import annotations

import asyncio
import random
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator

import httpx

RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})


@dataclass(frozen=True, slots=True)
class HttpClientConfig:
    timeout_seconds: float = 30.0
    max_retries: int = 2
    backoff_base_seconds: float = 0.5
    backoff_max_seconds: float = 8.0
    user_agent: str = "numerus/0.3 (reference data refresh)"


@asynccontextmanager
async def build_async_client(
    config: HttpClientConfig, *, transport: httpx.AsyncBaseTransport | None = None
) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout_seconds),
        headers={"User-Agent": config.user_agent},
        follow_redirects=True,
        transport=transport,
    ) as client:
        yield client


def backoff_delay(attempt: int, config: HttpClientConfig) -> float:
    # Exponential growth capped at backoff_max_seconds, +/-20% jitter.
    raw = min(config.backoff_max_seconds, config.backoff_base_seconds * (2**attempt))
    return float(raw * random.uniform(0.8, 1.2))


def _retry_after(resp: httpx.Response, attempt: int, config: HttpClientConfig) -> float:
    header = resp.headers.get("Retry-After")
    if header is not None:
        try:
            return max(0.0, float(header))
        except ValueError:
            pass
    return backoff_delay(attempt, config)


async def request_with_retries(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    config: HttpClientConfig,
    **kwargs: Any,
) -> httpx.Response:
    """
    Make an HTTP request, retrying transport errors, HTTP 429 and 5xx.

    Raises:
        httpx.TransportError: the last transport error once retries run out.
        httpx.HTTPStatusError: a non-success status once retries run out.
    """

    if config.max_retries < 0:
        raise ValueError("max_retries must be >= 0")

    attempts = config.max_retries + 1
    for attempt in range(attempts):
        last_attempt = attempt == attempts - 1
        try:
            resp = await client.request(method, url, **kwargs)
        except httpx.TransportError:
            if last_attempt:
                raise
            await asyncio.sleep(backoff_delay(attempt, config))
            continue

        if resp.status_code in RETRY_STATUSES and not last_attempt:
            delay = _retry_after(resp, attempt, config)
            await resp.aclose()
            await asyncio.sleep(delay)
            continue

        resp.raise_for_status()
        return resp

    raise RuntimeError("request_with_retries: no attempts made")


async def fetch_text(
    url: str,
    *,
    config: HttpClientConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """GET `url` and return the decoded body."""

    async with build_async_client(config, transport=transport) as client:
        resp = await request_with_retries(client, "GET", url, config=config)
        return resp.text
