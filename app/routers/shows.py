"""Show router: per-artist show CRUD and single URL lookups."""

from fastapi import APIRouter, status

from app.core.exceptions import FormValidationException, NotFoundException
from app.dependencies import AdminOnly, PlatformResolvers, RosterApi
from app.forms.show_form import ShowFormState
from app.schemas.artist import Artist
from app.schemas.show import ShowFormData, ShowResolveRequest

router = APIRouter()


def validated_form(data: ShowFormData) -> ShowFormState:
    """Build the form state or raise 422 with field errors."""
    form = ShowFormState.from_data(data)
    errors = form.validate()
    if errors:
        raise FormValidationException(errors)
    return form


# ============= Artist shows =============

@router.post(
    "/artists/{artist_id}/shows",
    response_model=Artist,
    status_code=status.HTTP_201_CREATED,
    summary="Add a show to an artist",
)
async def add_show(artist_id: str, data: ShowFormData, api: RosterApi):
    """Add a show and return the refreshed artist."""
    form = validated_form(data)
    await api.add_show(artist_id, form.to_payload())
    return await api.get_artist(artist_id)


@router.get(
    "/artists/{artist_id}/shows/{show_id}/form",
    response_model=ShowFormData,
    summary="Get the edit form for a show",
)
async def get_show_form(artist_id: str, show_id: str, api: RosterApi):
    artist = await api.get_artist(artist_id)
    show = next((s for s in artist.shows if s.id == show_id), None)
    if show is None:
        raise NotFoundException("Show not found")
    return ShowFormState.from_show(show).to_data()


@router.put(
    "/artists/{artist_id}/shows/{show_id}",
    response_model=Artist,
    summary="Update a show",
)
async def update_show(artist_id: str, show_id: str, data: ShowFormData, api: RosterApi):
    form = validated_form(data)
    await api.update_show(artist_id, show_id, form.to_payload())
    return await api.get_artist(artist_id)


@router.delete(
    "/artists/{artist_id}/shows/{show_id}",
    response_model=Artist,
    summary="Delete a show",
)
async def delete_show(artist_id: str, show_id: str, api: RosterApi):
    """Delete a show and return the refreshed artist."""
    await api.delete_show(artist_id, show_id)
    return await api.get_artist(artist_id)


# ============= Lookup =============

@router.post(
    "/shows/resolve",
    response_model=ShowFormData,
    summary="Prefill the show form from a Mixcloud or SoundCloud URL",
)
async def resolve_show(
    request: ShowResolveRequest,
    resolvers: PlatformResolvers,
    session: AdminOnly,
):
    """
    Fetch show details for one URL.

    The form is cleared except for the URL, then filled from the platform.
    The key field of the other platform is reported as disabled.
    """
    form = ShowFormState()
    form.select_source(request.platform, request.url)
    resolved = await resolvers[request.platform].resolve(request.url)
    form.apply_resolved(resolved)
    return form.to_data()
