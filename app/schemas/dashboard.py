from app.schemas.artist import ArtistSummary
from app.schemas.base import CamelModel


class DashboardStats(CamelModel):
    """Roster totals plus the most recent artists."""
    total_artists: int = 0
    total_shows: int = 0
    total_residents: int = 0
    total_featured: int = 0
    recent_artists: list[ArtistSummary] = []
