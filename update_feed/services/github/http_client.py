"""
Shared HTTP client for the GitHub REST API.

Every commit history request goes through one AsyncClient bound to
api.github.com, so concurrent per-source retrievals share pooled (HTTP/2)
connections. The client carries the media type and API version headers;
the bearer token, which differs per caller, is added per request.
"""

import logging

import httpx

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"

GITHUB_DEFAULT_HEADERS = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": GITHUB_API_VERSION,
}

_POOL_LIMITS = httpx.Limits(max_connections=20, max_keepalive_connections=10)
_TIMEOUT = httpx.Timeout(30.0, connect=5.0)

_client: httpx.AsyncClient | None = None


def auth_headers(token: str | None) -> dict[str, str]:
    """Per-request headers for a token; empty for anonymous access."""
    return {"Authorization": f"Bearer {token}"} if token else {}


def get_github_client() -> httpx.AsyncClient:
    """Get the shared GitHub client, creating it on first use or after close."""
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            base_url=GITHUB_API_URL,
            headers=GITHUB_DEFAULT_HEADERS,
            timeout=_TIMEOUT,
            limits=_POOL_LIMITS,
            http2=True,
        )
        logger.debug(f"Opened GitHub client for {GITHUB_API_URL}")
    return _client


async def close_github_client() -> None:
    """Close the shared client on application shutdown."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
        logger.debug("Closed GitHub client")
    _client = None
