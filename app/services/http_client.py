"""
Shared outbound HTTP client.

The roster API, Mixcloud and SoundCloud are all reached through one pooled
httpx.AsyncClient owned by HTTPClientManager. The app lifespan opens it on
startup and closes it on shutdown; tests install a client built on
httpx.MockTransport with set_client().
"""
import logging
from typing import Optional

import httpx

from app.config import get_settings

logger = logging.getLogger(__name__)

# Mixcloud, SoundCloud and the roster API: a handful of hosts at most
POOL_LIMITS = httpx.Limits(
    max_keepalive_connections=10,
    max_connections=20,
    keepalive_expiry=30.0,
)


def build_timeout(read_seconds: float) -> httpx.Timeout:
    return httpx.Timeout(connect=5.0, read=read_seconds, write=10.0, pool=5.0)


class HTTPClientManager:
    """Owns the process-wide httpx.AsyncClient."""

    _client: Optional[httpx.AsyncClient] = None

    @classmethod
    def get_client(cls) -> httpx.AsyncClient:
        """Return the shared client, creating it on first use."""
        if cls._client is None:
            settings = get_settings()
            logger.info(f"[HTTPClient] Opening pooled client (read timeout {settings.roster_api_timeout}s)")
            cls._client = httpx.AsyncClient(
                limits=POOL_LIMITS,
                timeout=build_timeout(settings.roster_api_timeout),
                http2=True,
                follow_redirects=True,
            )
        return cls._client

    @classmethod
    def set_client(cls, client: Optional[httpx.AsyncClient]) -> None:
        """Install a preconfigured client, or None to go back to lazy creation."""
        cls._client = client

    @classmethod
    async def close(cls) -> None:
        if cls._client is None:
            return
        logger.info("[HTTPClient] Closing pooled client")
        await cls._client.aclose()
        cls._client = None

    @classmethod
    async def warmup(cls) -> None:
        """Open the client during startup so the first request doesn't pay for it."""
        cls.get_client()


def get_http_client() -> httpx.AsyncClient:
    return HTTPClientManager.get_client()
