import asyncio
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

import httpx

from .config import settings
from .logger import get_logger

logger = get_logger("http")

SUBGRAPH = "subgraph"
GAME_API = "game_api"

# The Graph answers overload with 429/5xx; everything else is final.
RETRY_STATUSES = frozenset({429, 500, 502, 503, 504})

_clients: dict[str, httpx.AsyncClient] = {}


def _new_client() -> httpx.AsyncClient:
    # No base_url: GraphQL endpoints are posted to by full URL so subgraph paths keep no trailing slash.
    return httpx.AsyncClient(
        headers={"Content-Type": "application/json", "Accept": "application/json"},
        timeout=httpx.Timeout(float(settings.http_timeout_seconds or 20.0)),
        limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
    )


def _client(name: str) -> httpx.AsyncClient:
    client = _clients.get(name)
    if client is None or client.is_closed:
        client = _clients[name] = _new_client()
    return client


def subgraph_client() -> httpx.AsyncClient:
    """Client for the bulk games subgraph of the configured chain."""
    return _client(SUBGRAPH)


def game_api_client() -> httpx.AsyncClient:
    """Client for the single-game lookup endpoint."""
    return _client(GAME_API)


async def init_http_clients() -> None:
    for name in (SUBGRAPH, GAME_API):
        _client(name)


async def close_http_clients() -> None:
    clients = list(_clients.values())
    _clients.clear()
    for client in clients:
        if not client.is_closed:
            await client.aclose()


def _parse_retry_after(value: str | None) -> float | None:
    """Seconds to wait from a Retry-After header (delta-seconds or HTTP date)."""
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())


def _backoff_delay(attempt: int, base: float, cap: float, retry_after: float | None) -> float:
    delay = min(cap, base * (2 ** attempt))
    return delay if retry_after is None else max(delay, retry_after)


async def request_with_retries(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    retries: int = 3,
    backoff_base: float = 0.5,
    backoff_max: float = 8.0,
    _sleep=asyncio.sleep,
    **kwargs,
) -> httpx.Response:
    """Send a request, retrying transport errors and overload statuses.

    The last response is returned as is once retries run out, so callers see
    the real status code; the last transport error is re-raised.
    """
    attempt = 0
    while True:
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            if attempt >= retries:
                raise
            delay = _backoff_delay(attempt, backoff_base, backoff_max, None)
            logger.warning("http_retry url=%s attempt=%s err=%s delay_s=%.2f", url, attempt + 1, exc, delay)
        else:
            if response.status_code not in RETRY_STATUSES or attempt >= retries:
                return response
            retry_after = _parse_retry_after(response.headers.get("Retry-After"))
            delay = _backoff_delay(attempt, backoff_base, backoff_max, retry_after)
            await response.aclose()
            logger.warning(
                "http_retry url=%s attempt=%s status=%s delay_s=%.2f",
                url,
                attempt + 1,
                response.status_code,
                delay,
            )
        await _sleep(delay)
        attempt += 1
