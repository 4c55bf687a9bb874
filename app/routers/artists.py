"""Artist router: list/search, create, edit, delete and profile import."""

from typing import Optional

from fastapi import APIRouter, Query, status

from app.core.exceptions import BadRequestException, FormValidationException
from app.dependencies import AdminOnly, PlatformResolvers, RosterApi
from app.forms.artist_form import ArtistFormState
from app.schemas.artist import Artist, ArtistFormData, ArtistProfileImportRequest
from app.schemas.auth import MessageResponse
from app.schemas.show import Platform
from app.services.artist_filters import StatusFilter, filter_artists

router = APIRouter()

DELETE_CONFIRMATION = "DELETE"


def validated_form(data: ArtistFormData, artist_id: Optional[str] = None) -> ArtistFormState:
    """Build the form state or raise 422 with field errors."""
    form = ArtistFormState.from_data(data, artist_id=artist_id)
    errors = form.validate()
    if errors:
        raise FormValidationException(errors)
    return form


@router.get(
    "",
    response_model=list[Artist],
    summary="List artists",
)
async def list_artists(
    api: RosterApi,
    search: Optional[str] = Query(None, description="Matches name or bio"),
    status_filter: StatusFilter = Query(StatusFilter.ALL, alias="status"),
):
    """
    List the roster.

    - **search**: case-insensitive match on name or bio
    - **status**: all, active, inactive or featured
    """
    artists = await api.list_artists()
    return filter_artists(artists, search=search, status=status_filter)


@router.post(
    "",
    response_model=Artist,
    status_code=status.HTTP_201_CREATED,
    summary="Create an artist",
)
async def create_artist(data: ArtistFormData, api: RosterApi):
    """Create an artist, including any shows added on the form."""
    form = validated_form(data)
    return await api.create_artist(form.to_payload())


@router.post(
    "/import-profile",
    response_model=ArtistFormData,
    summary="Prefill the artist form from SoundCloud",
)
async def import_profile(
    request: ArtistProfileImportRequest,
    resolvers: PlatformResolvers,
    session: AdminOnly,
):
    """
    Read a SoundCloud profile (URL or username) and return a prefilled
    artist form: name, bio, avatar, username and up to three genres.
    """
    soundcloud = resolvers[Platform.SOUNDCLOUD]
    profile = await soundcloud.fetch_artist_profile(request.url)

    form = ArtistFormState()
    form.apply_profile_import(profile)
    return form.to_data()


@router.get(
    "/{artist_id}",
    response_model=Artist,
    summary="Get an artist",
)
async def get_artist(artist_id: str, api: RosterApi):
    return await api.get_artist(artist_id)


@router.get(
    "/{artist_id}/form",
    response_model=ArtistFormData,
    summary="Get the edit form for an artist",
)
async def get_artist_form(artist_id: str, api: RosterApi):
    """Current artist values in form shape."""
    artist = await api.get_artist(artist_id)
    return ArtistFormState.from_artist(artist).to_data()


@router.put(
    "/{artist_id}",
    response_model=Artist,
    summary="Update an artist",
)
async def update_artist(artist_id: str, data: ArtistFormData, api: RosterApi):
    form = validated_form(data, artist_id=artist_id)
    updated = await api.update_artist(artist_id, form.to_payload())
    if updated is None:
        updated = await api.get_artist(artist_id)
    return updated


@router.delete(
    "/{artist_id}",
    response_model=MessageResponse,
    summary="Delete an artist",
)
async def delete_artist(
    artist_id: str,
    api: RosterApi,
    confirmation: str = Query("", description="Must be DELETE"),
):
    """
    Delete an artist and all of their shows.

    - **confirmation**: must be exactly `DELETE`
    """
    if confirmation != DELETE_CONFIRMATION:
        raise BadRequestException("Please type DELETE in capital letters to confirm")

    await api.delete_artist(artist_id)
    return MessageResponse(message="Artist deleted successfully")
