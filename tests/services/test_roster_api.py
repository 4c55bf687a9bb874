"""Tests for the roster API client's request handling and error mapping."""

import json
import unittest

import httpx

from app.core.exceptions import RosterApiError
from app.schemas.artist import ArtistPayload
from app.schemas.show import ShowPayload
from app.services.roster_api import (
    INVALID_RESPONSE_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    TIMEOUT_MESSAGE,
    RosterApiClient,
    clean_url,
)
from tests.helpers.fake_backend import ADMIN_TOKEN, ROSTER_URL, FakeBackend, make_artist


def client_for(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestCleanUrl(unittest.TestCase):

    def test_single_slash(self):
        self.assertEqual(clean_url("https://api.test/", "/artists"), "https://api.test/artists")
        self.assertEqual(clean_url("https://api.test", "artists"), "https://api.test/artists")
        self.assertEqual(clean_url("https://api.test", "/artists/"), "https://api.test/artists/")


class TestRosterApiClient(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.backend = FakeBackend()
        self.backend.add_artist(make_artist("a1", "DJ Test", genres=["House"]))
        self.client = self.backend.client()
        self.api = RosterApiClient(self.client, ROSTER_URL, token=ADMIN_TOKEN)

    async def asyncTearDown(self):
        await self.client.aclose()

    async def test_sends_bearer_token(self):
        await self.api.list_artists()

        request = self.backend.requests[-1]
        self.assertEqual(request.headers["Authorization"], f"Bearer {ADMIN_TOKEN}")
        self.assertEqual(request.headers["Content-Type"], "application/json")

    async def test_no_token_no_header(self):
        api = RosterApiClient(self.client, ROSTER_URL)

        with self.assertRaises(RosterApiError) as ctx:
            await api.list_artists()

        self.assertNotIn("Authorization", self.backend.requests[-1].headers)
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.message, "Unauthorized")

    async def test_login(self):
        data = await RosterApiClient(self.client, ROSTER_URL).login("admin@station.test", "secret")

        self.assertEqual(data["token"], ADMIN_TOKEN)
        self.assertTrue(data["user"]["isAdmin"])

    async def test_list_and_get(self):
        artists = await self.api.list_artists()
        artist = await self.api.get_artist("a1")

        self.assertEqual([a.name for a in artists], ["DJ Test"])
        self.assertEqual(artist.id, "a1")
        self.assertEqual(artist.genres, ["House"])

    async def test_list_accepts_wrapped_body(self):
        def handler(request):
            return httpx.Response(200, json={"artists": [make_artist("x", "Wrapped")]})

        async with client_for(handler) as client:
            artists = await RosterApiClient(client, ROSTER_URL).list_artists()

        self.assertEqual(artists[0].name, "Wrapped")

    async def test_server_message_is_passed_through(self):
        with self.assertRaises(RosterApiError) as ctx:
            await self.api.get_artist("missing")

        self.assertEqual(ctx.exception.message, "Artist not found")
        self.assertEqual(ctx.exception.status_code, 404)

    async def test_error_without_message(self):
        def handler(request):
            return httpx.Response(503, text="upstream down")

        async with client_for(handler) as client:
            with self.assertRaises(RosterApiError) as ctx:
                await RosterApiClient(client, ROSTER_URL).get_artist("a1")

        self.assertEqual(ctx.exception.message, "Server error: 503")
        self.assertIsNone(ctx.exception.server_message)

    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with client_for(handler) as client:
            with self.assertRaises(RosterApiError) as ctx:
                await RosterApiClient(client, ROSTER_URL).list_artists()

        self.assertEqual(ctx.exception.message, TIMEOUT_MESSAGE)
        self.assertTrue(ctx.exception.timed_out)
        self.assertIsNone(ctx.exception.status_code)

    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with client_for(handler) as client:
            with self.assertRaises(RosterApiError) as ctx:
                await RosterApiClient(client, ROSTER_URL).list_artists()

        self.assertEqual(ctx.exception.message, NETWORK_ERROR_MESSAGE)
        self.assertFalse(ctx.exception.timed_out)

    async def test_other_http_errors_are_wrapped(self):
        def handler(request):
            raise httpx.TooManyRedirects("redirect loop", request=request)

        async with client_for(handler) as client:
            with self.assertRaises(RosterApiError) as ctx:
                await RosterApiClient(client, ROSTER_URL).list_artists()

        self.assertEqual(ctx.exception.message, INVALID_RESPONSE_MESSAGE)
        self.assertIsNone(ctx.exception.status_code)

    async def test_non_json_success_body_on_show_write(self):
        def handler(request):
            return httpx.Response(201, text="Created")

        async with client_for(handler) as client:
            result = await RosterApiClient(client, ROSTER_URL).add_show("a1", ShowPayload(title="Set"))

        self.assertIsNone(result)

    async def test_non_json_artist_body(self):
        def handler(request):
            return httpx.Response(200, text="<html>maintenance</html>")

        async with client_for(handler) as client:
            with self.assertRaises(RosterApiError) as ctx:
                await RosterApiClient(client, ROSTER_URL).get_artist("a1")

        self.assertEqual(ctx.exception.message, INVALID_RESPONSE_MESSAGE)

    async def test_artist_body_of_wrong_shape(self):
        bodies = [[make_artist("a1", "Listed")], None, {"name": ["not", "a", "string"]}]

        for body in bodies:
            with self.subTest(body=body):
                def handler(request, body=body):
                    return httpx.Response(200, json=body)

                async with client_for(handler) as client:
                    with self.assertRaises(RosterApiError) as ctx:
                        await RosterApiClient(client, ROSTER_URL).get_artist("a1")

                self.assertEqual(ctx.exception.message, INVALID_RESPONSE_MESSAGE)

    async def test_artist_list_of_wrong_shape(self):
        def handler(request):
            return httpx.Response(200, json={"artists": "none"})

        async with client_for(handler) as client:
            with self.assertRaises(RosterApiError) as ctx:
                await RosterApiClient(client, ROSTER_URL).list_artists()

        self.assertEqual(ctx.exception.message, INVALID_RESPONSE_MESSAGE)

    async def test_create_artist(self):
        artist = await self.api.create_artist(ArtistPayload(name="New Name", genres=["Dub"]))

        self.assertEqual(artist.name, "New Name")
        sent = json.loads(self.backend.requests[-1].content)
        self.assertEqual(sent["name"], "New Name")
        self.assertTrue(sent["isActive"])
        self.assertNotIn("is_active", sent)

    async def test_create_duplicate_artist(self):
        with self.assertRaises(RosterApiError) as ctx:
            await self.api.create_artist(ArtistPayload(name="DJ Test"))

        self.assertEqual(ctx.exception.message, 'Artist with name "DJ Test" already exists.')
        self.assertEqual(ctx.exception.status_code, 400)

    async def test_create_failure_without_message(self):
        def handler(request):
            return httpx.Response(500)

        async with client_for(handler) as client:
            with self.assertRaises(RosterApiError) as ctx:
                await RosterApiClient(client, ROSTER_URL).create_artist(ArtistPayload(name="X"))

        self.assertEqual(ctx.exception.message, "Failed to create artist. Please try again.")

    async def test_update_artist_without_body(self):
        def handler(request):
            return httpx.Response(204)

        async with client_for(handler) as client:
            result = await RosterApiClient(client, ROSTER_URL).update_artist("a1", ArtistPayload(name="X"))

        self.assertIsNone(result)

    async def test_show_lifecycle(self):
        await self.api.add_show("a1", ShowPayload(title="First", date="2024-01-01", duration=3600))
        show_id = self.backend.artists["a1"]["shows"][0]["_id"]

        await self.api.update_show("a1", show_id, ShowPayload(title="Renamed", duration=1800))
        self.assertEqual(self.backend.artists["a1"]["shows"][0]["title"], "Renamed")

        await self.api.delete_show("a1", show_id)
        self.assertEqual(self.backend.artists["a1"]["shows"], [])

    async def test_delete_show_error_prefix(self):
        def handler(request):
            return httpx.Response(500)

        async with client_for(handler) as client:
            with self.assertRaises(RosterApiError) as ctx:
                await RosterApiClient(client, ROSTER_URL).delete_show("a1", "s1")

        self.assertEqual(ctx.exception.message, "Failed to delete show: 500")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
