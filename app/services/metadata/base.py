from abc import ABC, abstractmethod
from typing import Optional

import httpx

from app.schemas.show import Platform, ResolvedShow
from app.services.http_client import get_http_client


class ShowResolver(ABC):
    """Turns a platform URL into canonical show metadata."""

    platform: Platform

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_http_client()

    @abstractmethod
    async def resolve(self, url: str) -> ResolvedShow:
        """
        Look up one URL.

        Raises:
            PlatformError: the URL is invalid or the platform lookup failed
        """
