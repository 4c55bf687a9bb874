"""In-memory search/filter over the artist list and dashboard totals."""

from enum import Enum
from typing import Optional

from app.schemas.artist import Artist, ArtistSummary
from app.schemas.dashboard import DashboardStats

RECENT_ARTIST_COUNT = 5


class StatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"
    FEATURED = "featured"


def matches_search(artist: Artist, term: str) -> bool:
    """Case-insensitive substring match on name or bio."""
    term = term.lower()
    return term in artist.name.lower() or term in (artist.bio or "").lower()


def filter_artists(
    artists: list[Artist],
    search: Optional[str] = None,
    status: StatusFilter = StatusFilter.ALL,
) -> list[Artist]:
    """Apply the search term and status filter, keeping API order."""
    result = list(artists)

    if search:
        result = [a for a in result if matches_search(a, search)]

    if status == StatusFilter.ACTIVE:
        result = [a for a in result if a.is_active]
    elif status == StatusFilter.INACTIVE:
        result = [a for a in result if not a.is_active]
    elif status == StatusFilter.FEATURED:
        result = [a for a in result if a.featured]

    return result


def dashboard_stats(artists: list[Artist]) -> DashboardStats:
    return DashboardStats(
        total_artists=len(artists),
        total_shows=sum(len(a.shows) for a in artists),
        total_residents=sum(1 for a in artists if a.is_resident),
        total_featured=sum(1 for a in artists if a.featured),
        recent_artists=[ArtistSummary.from_artist(a) for a in artists[:RECENT_ARTIST_COUNT]],
    )
