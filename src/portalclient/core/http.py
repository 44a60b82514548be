"""HTTP client with connection pooling for portalclient."""

from contextlib import asynccontextmanager

import httpx

from portalclient.config.settings import ApiConfig, get_config

# Global HTTP client
_client: httpx.AsyncClient | None = None


def get_timeout_config(api: ApiConfig | None = None) -> httpx.Timeout:
    """Get the fixed per-request timeout from settings."""
    api = api or get_config().api
    return httpx.Timeout(api.timeout)


def create_http_client(api: ApiConfig | None = None, **kwargs) -> httpx.AsyncClient:
    """Create a client bound to the configured base URL and default headers."""
    api = api or get_config().api
    limits = httpx.Limits(
        max_connections=20,
        max_keepalive_connections=5,
    )
    kwargs.setdefault("limits", limits)
    kwargs.setdefault("follow_redirects", True)
    return httpx.AsyncClient(
        base_url=api.resolved_base_url(),
        headers=api.headers,
        timeout=get_timeout_config(api),
        **kwargs,
    )


@asynccontextmanager
async def get_http_client():
    """Get or create the shared HTTP client.

    Usage:
        async with get_http_client() as client:
            response = await client.get(...)
    """
    global _client

    if _client is None or _client.is_closed:
        _client = create_http_client()

    try:
        yield _client
    finally:
        # Don't close - keep for reuse
        pass


async def cleanup() -> None:
    """Close the HTTP client.

    Should be called on application shutdown.
    """
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
