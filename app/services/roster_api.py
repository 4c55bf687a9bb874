"""Client for the external roster REST API (auth, artists, shows)."""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from app.core.exceptions import RosterApiError
from app.schemas.artist import Artist, ArtistPayload
from app.schemas.show import ShowPayload

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Request timed out. Please try again."
NETWORK_ERROR_MESSAGE = (
    "Network error: Could not connect to the server. "
    "Please check your internet connection and try again."
)
INVALID_RESPONSE_MESSAGE = "Invalid response from server"


def clean_url(base: str, path: str) -> str:
    """Join base and path with exactly one slash between them."""
    clean_base = base[:-1] if base.endswith("/") else base
    clean_path = path if path.startswith("/") else f"/{path}"
    return f"{clean_base}{clean_path}"


class RosterApiClient:
    """
    Async client for the roster API.

    The bearer token is passed in explicitly (usually from the admin
    session); requests made without one are sent unauthenticated.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._client = client
        self._base_url = base_url
        self._token = token
        self._timeout = timeout

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    @staticmethod
    def _server_message(response: httpx.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            return body["message"]
        return None

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Any] = None,
        error_prefix: str = "Server error",
    ) -> Any:
        """
        Send a request and translate failures into RosterApiError.

        Returns the decoded JSON body, or None for an empty or non-JSON body.
        """
        url = clean_url(self._base_url, path)
        logger.debug(f"[RosterApi] {method} {url}")

        kwargs: dict = {"headers": self._headers(), "json": json}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(f"[RosterApi] {method} {path} timed out")
            raise RosterApiError(TIMEOUT_MESSAGE, timed_out=True) from e
        except httpx.TransportError as e:
            logger.warning(f"[RosterApi] {method} {path} failed: {type(e).__name__}: {e}")
            raise RosterApiError(NETWORK_ERROR_MESSAGE) from e
        except httpx.HTTPError as e:
            # Redirect loops, undecodable content and the like
            logger.warning(f"[RosterApi] {method} {path} failed: {type(e).__name__}: {e}")
            raise RosterApiError(INVALID_RESPONSE_MESSAGE) from e

        if response.is_error:
            server_message = self._server_message(response)
            logger.warning(
                f"[RosterApi] {method} {path} returned {response.status_code}: {server_message}"
            )
            raise RosterApiError(
                server_message or f"{error_prefix}: {response.status_code}",
                status_code=response.status_code,
                server_message=server_message,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            # The request succeeded; callers needing a body reject None
            logger.warning(f"[RosterApi] {method} {path} returned a non-JSON body")
            return None

    # ============= Auth =============

    async def login(self, email: str, password: str) -> dict:
        """Exchange credentials for a token and user object."""
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        return data if isinstance(data, dict) else {}

    # ============= Artists =============

    async def list_artists(self) -> list[Artist]:
        data = await self._request("GET", "/artists")
        if isinstance(data, dict):
            data = data.get("artists", [])
        if not isinstance(data, list):
            raise RosterApiError(INVALID_RESPONSE_MESSAGE)
        return [_parse_artist(item) for item in data]

    async def get_artist(self, artist_id: str) -> Artist:
        data = await self._request("GET", f"/artists/{artist_id}")
        return _parse_artist(_unwrap_artist(data))

    async def create_artist(self, payload: ArtistPayload) -> Artist:
        """
        Create an artist.

        Duplicate names are reported as 'Artist with name "X" already exists.'
        """
        logger.info(f"[RosterApi] Creating artist {payload.name!r}")
        try:
            data = await self._request("POST", "/artists/", json=payload.to_api())
        except RosterApiError as e:
            if e.status_code == 400 and e.server_message and "already exists" in e.server_message:
                raise RosterApiError(
                    f'Artist with name "{payload.name}" already exists.',
                    status_code=400,
                    server_message=e.server_message,
                ) from e
            if e.server_message:
                raise
            raise RosterApiError(
                "Failed to create artist. Please try again.",
                status_code=e.status_code,
                timed_out=e.timed_out,
            ) from e
        return _parse_artist(_unwrap_artist(data))

    async def update_artist(self, artist_id: str, payload: ArtistPayload) -> Optional[Artist]:
        logger.info(f"[RosterApi] Updating artist {artist_id}")
        data = await self._request("PUT", f"/artists/{artist_id}", json=payload.to_api())
        data = _unwrap_artist(data)
        if isinstance(data, dict) and "name" in data:
            return _parse_artist(data)
        return None

    async def delete_artist(self, artist_id: str) -> None:
        logger.info(f"[RosterApi] Deleting artist {artist_id}")
        await self._request("DELETE", f"/artists/{artist_id}")

    # ============= Shows =============

    async def add_show(self, artist_id: str, payload: ShowPayload) -> Any:
        logger.info(f"[RosterApi] Adding show {payload.title!r} to artist {artist_id}")
        return await self._request("POST", f"/artists/{artist_id}/shows", json=payload.to_api())

    async def update_show(self, artist_id: str, show_id: str, payload: ShowPayload) -> Any:
        logger.info(f"[RosterApi] Updating show {show_id} of artist {artist_id}")
        return await self._request(
            "PUT", f"/artists/{artist_id}/shows/{show_id}", json=payload.to_api()
        )

    async def delete_show(self, artist_id: str, show_id: str) -> Any:
        logger.info(f"[RosterApi] Deleting show {show_id} of artist {artist_id}")
        return await self._request(
            "DELETE",
            f"/artists/{artist_id}/shows/{show_id}",
            error_prefix="Failed to delete show",
        )


def _unwrap_artist(data: Any) -> Any:
    """Some endpoints wrap the artist as {"artist": {...}}."""
    if isinstance(data, dict) and isinstance(data.get("artist"), dict):
        return data["artist"]
    return data


def _parse_artist(data: Any) -> Artist:
    if not isinstance(data, dict):
        raise RosterApiError(INVALID_RESPONSE_MESSAGE)
    try:
        return Artist.model_validate(data)
    except ValidationError as e:
        logger.warning(f"[RosterApi] Unreadable artist in response: {e.error_count()} errors")
        raise RosterApiError(INVALID_RESPONSE_MESSAGE) from e
