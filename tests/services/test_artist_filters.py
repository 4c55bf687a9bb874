"""Tests for artist search, status filters and dashboard totals."""

import unittest

from app.schemas.artist import Artist
from app.services.artist_filters import StatusFilter, dashboard_stats, filter_artists
from tests.helpers.fake_backend import make_artist


def roster() -> list[Artist]:
    rows = [
        make_artist("1", "Alpha", bio="Deep HOUSE all night", isResident=True),
        make_artist("2", "Beta", isActive=False, featured=True, shows=[{"_id": "s1", "title": "One"}]),
        make_artist("3", "Gamma House", featured=True),
        make_artist("4", "Delta", bio=None),
        make_artist("5", "Epsilon"),
        make_artist("6", "Zeta", isActive=False),
    ]
    return [Artist.model_validate(row) for row in rows]


class TestFilterArtists(unittest.TestCase):

    def setUp(self):
        self.artists = roster()

    def names(self, artists):
        return [a.name for a in artists]

    def test_no_filters(self):
        self.assertEqual(self.names(filter_artists(self.artists)), [a.name for a in self.artists])

    def test_search_matches_name_or_bio(self):
        self.assertEqual(self.names(filter_artists(self.artists, search="house")), ["Alpha", "Gamma House"])

    def test_search_tolerates_missing_bio(self):
        self.assertEqual(self.names(filter_artists(self.artists, search="delt")), ["Delta"])

    def test_status_filters(self):
        self.assertEqual(
            self.names(filter_artists(self.artists, status=StatusFilter.ACTIVE)),
            ["Alpha", "Gamma House", "Delta", "Epsilon"],
        )
        self.assertEqual(self.names(filter_artists(self.artists, status=StatusFilter.INACTIVE)), ["Beta", "Zeta"])
        self.assertEqual(self.names(filter_artists(self.artists, status=StatusFilter.FEATURED)), ["Beta", "Gamma House"])

    def test_search_and_status_combine(self):
        result = filter_artists(self.artists, search="house", status=StatusFilter.FEATURED)

        self.assertEqual(self.names(result), ["Gamma House"])


class TestDashboardStats(unittest.TestCase):

    def test_totals(self):
        stats = dashboard_stats(roster())

        self.assertEqual(stats.total_artists, 6)
        self.assertEqual(stats.total_shows, 1)
        self.assertEqual(stats.total_residents, 1)
        self.assertEqual(stats.total_featured, 2)
        self.assertEqual([a.name for a in stats.recent_artists], ["Alpha", "Beta", "Gamma House", "Delta", "Epsilon"])
        self.assertEqual(stats.recent_artists[1].status, "Inactive")
        self.assertEqual(stats.recent_artists[1].show_count, 1)

    def test_empty(self):
        stats = dashboard_stats([])

        self.assertEqual(stats.total_artists, 0)
        self.assertEqual(stats.recent_artists, [])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
