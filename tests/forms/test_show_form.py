"""Tests for show form state: sources, unit conversion and validation."""

import unittest
from datetime import date

from app.forms.show_form import ShowFormState, seconds_to_minutes
from app.schemas.show import Platform, ResolvedShow, Show, ShowFormData


class TestSecondsToMinutes(unittest.TestCase):

    def test_conversion(self):
        self.assertEqual(seconds_to_minutes(3600), 60)
        self.assertEqual(seconds_to_minutes(5430), 90)
        self.assertEqual(seconds_to_minutes(20), 1)
        self.assertEqual(seconds_to_minutes(None), 60)
        self.assertEqual(seconds_to_minutes(0), 60)


class TestShowFormState(unittest.TestCase):

    def test_new_form_defaults(self):
        form = ShowFormState()

        self.assertEqual(form.date, date.today().isoformat())
        self.assertEqual(form.duration_minutes, 60)
        self.assertIsNone(form.active_source)
        self.assertEqual(form.disabled_fields, [])

    def test_from_show(self):
        show = Show.model_validate({
            "_id": "s1",
            "title": "Breakfast",
            "date": "2024-03-01T00:00:00.000Z",
            "duration": 7200,
            "soundcloudUrl": "https://soundcloud.com/a/b",
            "soundcloudId": "99",
        })

        form = ShowFormState.from_show(show)

        self.assertEqual(form.show_id, "s1")
        self.assertEqual(form.date, "2024-03-01")
        self.assertEqual(form.duration_minutes, 120)
        self.assertEqual(form.active_source, Platform.SOUNDCLOUD)
        self.assertEqual(form.disabled_fields, ["mixcloudKey"])

    def test_select_source_clears_other_fields(self):
        form = ShowFormState(
            title="Old",
            description="Old description",
            duration_minutes=15,
            mixcloud_url="https://www.mixcloud.com/a/b/",
            mixcloud_key="/a/b",
            image_url="https://img.test/x.jpg",
        )

        form.select_source(Platform.SOUNDCLOUD, "  https://soundcloud.com/c/d ")

        self.assertEqual(form.soundcloud_url, "https://soundcloud.com/c/d")
        self.assertEqual(form.mixcloud_url, "")
        self.assertEqual(form.mixcloud_key, "")
        self.assertEqual(form.title, "")
        self.assertEqual(form.description, "")
        self.assertEqual(form.image_url, "")
        self.assertEqual(form.duration_minutes, 60)
        self.assertEqual(form.disabled_fields, ["mixcloudKey"])

    def test_apply_resolved_converts_to_minutes(self):
        form = ShowFormState()
        form.select_source(Platform.MIXCLOUD, "https://www.mixcloud.com/a/b/")

        form.apply_resolved(ResolvedShow(
            title="Fetched",
            description="Desc",
            date="2024-05-05",
            duration=3600,
            image_url="https://img.test/xl.jpg",
            mixcloud_url="https://www.mixcloud.com/a/b/",
            mixcloud_key="/a/b",
        ))

        self.assertEqual(form.title, "Fetched")
        self.assertEqual(form.date, "2024-05-05")
        self.assertEqual(form.duration_minutes, 60)
        self.assertEqual(form.mixcloud_key, "/a/b")
        self.assertEqual(form.soundcloud_id, "")

    def test_payload_converts_to_seconds(self):
        form = ShowFormState(title="  Late Night  ", date="2024-01-02", duration_minutes=90)

        payload = form.to_payload()

        self.assertEqual(payload.title, "Late Night")
        self.assertEqual(payload.duration, 5400)
        self.assertEqual(payload.date, "2024-01-02")

    def test_payload_omits_disabled_key(self):
        form = ShowFormState(
            title="Show",
            mixcloud_url="https://www.mixcloud.com/a/b/",
            mixcloud_key="/a/b",
            soundcloud_id="stale",
        )

        payload = form.to_payload()

        self.assertEqual(payload.mixcloud_key, "/a/b")
        self.assertIsNone(payload.soundcloud_id)
        self.assertNotIn("soundcloudId", payload.to_api())

    def test_validate(self):
        self.assertEqual(ShowFormState(title="Ok", date="2024-01-01").validate(), {})

        errors = ShowFormState(title="  ", date="01/02/2024", duration_minutes=-5).validate()

        self.assertEqual(errors, {
            "title": "Title is required",
            "date": "Date must be in YYYY-MM-DD format",
            "durationMinutes": "Duration can't be negative",
        })

    def test_validate_blank_date(self):
        form = ShowFormState(title="Ok")
        form.date = " "

        self.assertEqual(form.validate(), {"date": "Date is required"})

    def test_data_round_trip_keeps_source(self):
        data = ShowFormData(
            title="T",
            date="2024-01-01",
            duration_minutes=45,
            soundcloud_url="https://soundcloud.com/a/b",
            soundcloud_id="5",
        )

        form = ShowFormState.from_data(data)
        out = form.to_data()

        self.assertEqual(out.active_source, Platform.SOUNDCLOUD)
        self.assertEqual(out.disabled_fields, ["mixcloudKey"])
        self.assertEqual(out.duration_minutes, 45)


class TestDurationRoundTrip(unittest.TestCase):
    """Saving a show whose duration was not edited keeps the stored seconds."""

    def saved_duration(self, stored: dict):
        show = Show.model_validate({"_id": "s1", "title": "Set", "date": "2024-01-01", **stored})
        data = ShowFormState.from_show(show).to_data()
        return ShowFormState.from_data(data).to_payload().to_api().get("duration")

    def test_odd_durations_are_kept(self):
        for seconds in (30, 3630, 5399, 0):
            with self.subTest(seconds=seconds):
                self.assertEqual(self.saved_duration({"duration": seconds}), seconds)

    def test_missing_duration_stays_missing(self):
        self.assertIsNone(self.saved_duration({}))

    def test_edited_minutes_are_sent(self):
        show = Show.model_validate({"_id": "s1", "title": "Set", "duration": 3630})
        data = ShowFormState.from_show(show).to_data()
        data.duration_minutes = 90

        payload = ShowFormState.from_data(data).to_payload()

        self.assertEqual(payload.duration, 5400)

    def test_form_data_echoes_seconds(self):
        show = Show.model_validate({"_id": "s1", "title": "Set", "duration": 3660})

        body = ShowFormState.from_show(show).to_data().to_api()

        self.assertEqual(body["showId"], "s1")
        self.assertEqual(body["durationMinutes"], 61)
        self.assertEqual(body["durationSeconds"], 3660)

    def test_resolved_seconds_are_kept(self):
        form = ShowFormState()
        form.select_source(Platform.MIXCLOUD, "https://www.mixcloud.com/a/b/")
        form.apply_resolved(ResolvedShow(title="Fetched", date="2024-01-01", duration=3630))

        self.assertEqual(form.to_payload().duration, 3630)

    def test_new_show_without_seconds_uses_minutes(self):
        form = ShowFormState(title="New", date="2024-01-01")

        self.assertEqual(form.to_payload().duration, 3600)

    def test_unknown_resolved_duration_uses_shown_minutes(self):
        form = ShowFormState()
        form.select_source(Platform.SOUNDCLOUD, "https://soundcloud.com/a/b")
        form.apply_resolved(ResolvedShow(title="Fetched", date="2024-01-01", duration=0))

        self.assertEqual(form.duration_minutes, 60)
        self.assertEqual(form.to_payload().duration, 3600)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
