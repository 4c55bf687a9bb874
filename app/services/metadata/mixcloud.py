"""Mixcloud show lookups through the public (unauthenticated) API."""

import logging
import re
from datetime import datetime
from typing import Optional

import httpx

from app.config import get_settings
from app.core.exceptions import PlatformError
from app.schemas.show import Platform, ResolvedShow
from app.services.metadata.base import ShowResolver
from app.utils.dates import today_string

logger = logging.getLogger(__name__)

HOST_FRAGMENT = "mixcloud.com"
KEY_PATTERN = re.compile(r"mixcloud\.com(/[^/?#]+/[^/?#]+)", re.IGNORECASE)

# Largest first
PICTURE_SIZES = ("extra_large", "large", "medium")


def extract_mixcloud_key(url: str) -> Optional[str]:
    """
    Path key of a Mixcloud upload, e.g. "/owner/show-name".

    Returns None when the URL isn't shaped like mixcloud.com/<owner>/<item>.
    """
    if not url:
        return None
    clean = url.strip().rstrip("/")
    match = KEY_PATTERN.search(clean)
    return match.group(1) if match else None


def parse_created_time(value: Optional[str]) -> str:
    """ISO-8601 creation time -> YYYY-MM-DD, today when missing or unparseable."""
    if not value or not isinstance(value, str):
        return today_string()
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        logger.warning(f"[Mixcloud] Unparseable created_time {value!r}, using today")
        return today_string()


def pick_picture(pictures: Optional[dict]) -> str:
    for size in PICTURE_SIZES:
        if isinstance(pictures, dict) and pictures.get(size):
            return pictures[size]
    return ""


class MixcloudResolver(ShowResolver):
    """Resolves mixcloud.com upload URLs."""

    platform = Platform.MIXCLOUD

    def __init__(self, client: Optional[httpx.AsyncClient] = None, api_url: Optional[str] = None):
        super().__init__(client)
        self.api_url = (api_url or get_settings().mixcloud_api_url).rstrip("/")

    async def resolve(self, url: str) -> ResolvedShow:
        key = extract_mixcloud_key(url)
        if not key:
            raise PlatformError(url, "Invalid Mixcloud URL", self.platform.value)

        try:
            response = await self.client.get(f"{self.api_url}{key}/")
        except httpx.HTTPError as e:
            logger.error(f"[Mixcloud] Request for {key} failed: {type(e).__name__}: {e}")
            raise PlatformError(url, f"Mixcloud request failed: {e}", self.platform.value) from e

        if response.is_error:
            logger.warning(f"[Mixcloud] Lookup of {key} returned {response.status_code}")
            raise PlatformError(
                url, f"Mixcloud API error: {response.status_code}", self.platform.value
            )

        try:
            data = response.json()
        except ValueError as e:
            raise PlatformError(url, "Mixcloud returned an invalid response", self.platform.value) from e
        if not isinstance(data, dict):
            logger.warning(f"[Mixcloud] Lookup of {key} returned {type(data).__name__}, expected an object")
            raise PlatformError(url, "Mixcloud returned an invalid response", self.platform.value)

        # audio_length is already in seconds
        try:
            return ResolvedShow(
                title=data.get("name") or "",
                description=data.get("description") or "",
                date=parse_created_time(data.get("created_time")),
                duration=int(data.get("audio_length") or 0),
                image_url=pick_picture(data.get("pictures")),
                mixcloud_url=url,
                mixcloud_key=key,
            )
        except (TypeError, ValueError) as e:
            logger.warning(f"[Mixcloud] Unusable metadata for {key}: {e}")
            raise PlatformError(url, "Mixcloud returned an invalid response", self.platform.value) from e
