"""SoundCloud lookups using the client credentials flow."""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

import httpx

from app.config import get_settings
from app.core.exceptions import PlatformError
from app.schemas.artist import SoundCloudProfile
from app.schemas.show import Platform, ResolvedShow
from app.services.metadata.base import ShowResolver
from app.utils.dates import today_string

logger = logging.getLogger(__name__)

HOST_FRAGMENT = "soundcloud.com"
PROFILE_BASE_URL = "https://soundcloud.com/"

# "2024/03/01 18:30:00 +0000"
CREATED_AT_PATTERN = re.compile(r"(\d{4})/(\d{2})/(\d{2})")
# Tag lists separate tags with spaces; multi-word tags are quoted
TAG_PATTERN = re.compile(r'"([^"]+)"|(\S+)')

MAX_PROFILE_GENRES = 3
PROFILE_TRACK_LIMIT = 5


def parse_created_at(value: Optional[str]) -> str:
    """SoundCloud created_at -> YYYY-MM-DD, today when it doesn't match."""
    if value:
        match = CREATED_AT_PATTERN.search(value)
        if match:
            year, month, day = match.groups()
            return f"{year}-{month}-{day}"
        logger.warning(f"[SoundCloud] Unexpected created_at {value!r}, using today")
    return today_string()


def high_res_artwork(url: Optional[str]) -> str:
    """Swap the default 100x100 variant for the 500x500 one."""
    return url.replace("-large", "-t500x500") if url else ""


def split_tags(tag_list: Optional[str]) -> list[str]:
    if not tag_list:
        return []
    return [quoted or bare for quoted, bare in TAG_PATTERN.findall(tag_list)]


def infer_genres(tracks: list[dict], limit: int = MAX_PROFILE_GENRES) -> list[str]:
    """Unique genres from track genres first, then tag words."""
    candidates = [t.get("genre") for t in tracks]
    for track in tracks:
        candidates.extend(split_tags(track.get("tag_list")))

    genres: list[str] = []
    for candidate in candidates:
        candidate = (candidate or "").strip()
        if candidate and candidate not in genres:
            genres.append(candidate)
    return genres[:limit]


def username_from_url(url: str) -> str:
    return url.rstrip("/").split("/")[-1]


class SoundCloudService(ShowResolver):
    """Resolves soundcloud.com track and profile URLs."""

    platform = Platform.SOUNDCLOUD

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
    ):
        super().__init__(client)
        settings = get_settings()
        self.api_url = settings.soundcloud_api_url.rstrip("/")
        self.token_url = settings.soundcloud_token_url
        self.client_id = client_id or settings.soundcloud_client_id
        self.client_secret = client_secret or settings.soundcloud_client_secret
        self._access_token: Optional[str] = None
        self._token_expires_at: Optional[datetime] = None

    def _fail(self, url: str, message: str) -> PlatformError:
        return PlatformError(url, message, self.platform.value)

    async def _get_access_token(self, url: str) -> str:
        """Get or refresh the access token using the Client Credentials flow."""
        if self._access_token and self._token_expires_at:
            if datetime.now(timezone.utc) < self._token_expires_at:
                return self._access_token

        if not self.client_id or not self.client_secret:
            raise self._fail(url, "SoundCloud credentials not configured")

        try:
            response = await self.client.post(
                self.token_url,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                data={
                    "grant_type": "client_credentials",
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                },
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"[SoundCloud] Token request failed: {type(e).__name__}: {e}")
            raise self._fail(url, "Failed to get SoundCloud access token") from e

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            logger.error(f"[SoundCloud] Token endpoint returned {response.status_code} without a token")
            raise self._fail(url, "Failed to get SoundCloud access token")

        # Refresh a minute before actual expiry
        expires_in = data.get("expires_in") or 3600
        self._access_token = token
        self._token_expires_at = datetime.now(timezone.utc) + timedelta(seconds=max(expires_in - 60, 0))
        return token

    async def _get(self, url: str, path: str, params: dict) -> httpx.Response:
        token = await self._get_access_token(url)
        try:
            return await self.client.get(
                f"{self.api_url}{path}",
                headers={"Authorization": f"OAuth {token}"},
                params=params,
            )
        except httpx.HTTPError as e:
            logger.error(f"[SoundCloud] GET {path} failed: {type(e).__name__}: {e}")
            raise self._fail(url, f"SoundCloud request failed: {e}") from e

    async def _resolve_url(self, url: str) -> dict:
        """Map a public soundcloud.com URL to its API resource."""
        response = await self._get(url, "/resolve", {"url": url})
        if not response.is_success:
            logger.warning(f"[SoundCloud] Resolve of {url} returned {response.status_code}: {response.text[:200]}")
            raise self._fail(url, f"SoundCloud API error: {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise self._fail(url, "SoundCloud returned an invalid response") from e
        if not isinstance(data, dict):
            logger.warning(f"[SoundCloud] Resolve of {url} returned {type(data).__name__}, expected an object")
            raise self._fail(url, "SoundCloud returned an invalid response")
        return data

    async def resolve(self, url: str) -> ResolvedShow:
        track = await self._resolve_url(url)

        user = track.get("user")
        artwork = track.get("artwork_url") or (user.get("avatar_url") if isinstance(user, dict) else None)
        track_id = track.get("id")

        try:
            return ResolvedShow(
                title=track.get("title") or "",
                description=track.get("description") or "",
                date=parse_created_at(track.get("created_at")),
                duration=int(track.get("duration") or 0) // 1000,
                image_url=high_res_artwork(artwork),
                soundcloud_url=url,
                soundcloud_id=str(track_id) if track_id else "",
            )
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(f"[SoundCloud] Unusable metadata for {url}: {e}")
            raise self._fail(url, "SoundCloud returned an invalid response") from e

    async def fetch_artist_profile(self, url: str) -> SoundCloudProfile:
        """
        Read an artist profile, inferring genres from their latest tracks.

        Args:
            url: Profile URL, or a bare username

        Returns:
            Profile details used to prefill the artist form
        """
        url = url.strip()
        if not url.startswith("http"):
            url = f"{PROFILE_BASE_URL}{url}"

        user = await self._resolve_url(url)

        genres: list[str] = []
        if user.get("id"):
            try:
                response = await self._get(
                    url, f"/users/{user['id']}/tracks", {"limit": PROFILE_TRACK_LIMIT}
                )
                if response.is_success:
                    tracks = response.json()
                    if isinstance(tracks, dict):
                        tracks = tracks.get("collection", [])
                    if isinstance(tracks, list):
                        genres = infer_genres([t for t in tracks if isinstance(t, dict)])
                else:
                    logger.warning(f"[SoundCloud] Track listing returned {response.status_code}")
            except (PlatformError, ValueError) as e:
                logger.warning(f"[SoundCloud] Could not read tracks for genres: {e}")

        return SoundCloudProfile(
            name=user.get("username") or "",
            bio=user.get("description") or "",
            image_url=high_res_artwork(user.get("avatar_url")),
            soundcloud_username=username_from_url(url),
            genres=genres,
        )
