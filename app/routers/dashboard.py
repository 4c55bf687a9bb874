from fastapi import APIRouter

from app.dependencies import RosterApi
from app.schemas.dashboard import DashboardStats
from app.services.artist_filters import dashboard_stats

router = APIRouter()


@router.get(
    "",
    response_model=DashboardStats,
    summary="Get roster totals",
)
async def get_dashboard(api: RosterApi):
    """
    Totals for artists, shows, residents and featured artists, plus the
    five most recent artists.
    """
    artists = await api.list_artists()
    return dashboard_stats(artists)
