"""
Editable state of the show form.

The editor works in minutes; the roster API and the resolvers work in
seconds. Conversion happens only here, on the way in and out of the form.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from app.schemas.show import Platform, ResolvedShow, Show, ShowFormData, ShowPayload
from app.utils.dates import today_string

DEFAULT_DURATION_MINUTES = 60

# Key field that belongs to each platform
PLATFORM_KEY_FIELDS = {
    Platform.MIXCLOUD: "mixcloudKey",
    Platform.SOUNDCLOUD: "soundcloudId",
}


def seconds_to_minutes(seconds: Optional[int]) -> int:
    if not seconds:
        return DEFAULT_DURATION_MINUTES
    return max(1, round(seconds / 60))


@dataclass
class ShowFormState:
    show_id: Optional[str] = None
    title: str = ""
    description: str = ""
    date: str = ""
    duration_minutes: int = DEFAULT_DURATION_MINUTES
    # Exact duration the minutes were derived from, None when unknown
    duration_seconds: Optional[int] = None
    mixcloud_url: str = ""
    soundcloud_url: str = ""
    mixcloud_key: str = ""
    soundcloud_id: str = ""
    image_url: str = ""
    active_source: Optional[Platform] = None

    def __post_init__(self):
        if not self.date:
            self.date = today_string()
        if self.active_source is None:
            self.active_source = self._source_from_urls()

    def _source_from_urls(self) -> Optional[Platform]:
        if self.mixcloud_url:
            return Platform.MIXCLOUD
        if self.soundcloud_url:
            return Platform.SOUNDCLOUD
        return None

    @classmethod
    def from_show(cls, show: Show) -> "ShowFormState":
        """Prefill from a stored show (editing)."""
        return cls(
            show_id=show.id,
            title=show.title,
            description=show.description or "",
            date=show.date_only or "",
            duration_minutes=seconds_to_minutes(show.duration),
            duration_seconds=show.duration,
            mixcloud_url=show.mixcloud_url or "",
            soundcloud_url=show.soundcloud_url or "",
            mixcloud_key=show.mixcloud_key or "",
            soundcloud_id=show.soundcloud_id or "",
            image_url=show.image_url or "",
        )

    @classmethod
    def from_data(cls, data: ShowFormData) -> "ShowFormState":
        """Rebuild from submitted form contents."""
        return cls(
            show_id=data.show_id,
            title=data.title,
            description=data.description,
            date=data.date,
            duration_minutes=data.duration_minutes,
            duration_seconds=data.duration_seconds,
            mixcloud_url=data.mixcloud_url,
            soundcloud_url=data.soundcloud_url,
            mixcloud_key=data.mixcloud_key,
            soundcloud_id=data.soundcloud_id,
            image_url=data.image_url,
            active_source=data.active_source,
        )

    @property
    def disabled_fields(self) -> list[str]:
        """The key field of whichever platform is not the active source."""
        if self.active_source is None:
            return []
        return [
            key_field for platform, key_field in PLATFORM_KEY_FIELDS.items()
            if platform != self.active_source
        ]

    def select_source(self, platform: Platform, url: str) -> None:
        """
        Start a fetch from one platform: clear the form, keeping only that
        platform's URL.
        """
        url = url.strip()
        self.title = ""
        self.description = ""
        self.date = today_string()
        self.duration_minutes = DEFAULT_DURATION_MINUTES
        self.duration_seconds = None
        self.image_url = ""
        self.mixcloud_key = ""
        self.soundcloud_id = ""
        self.mixcloud_url = url if platform == Platform.MIXCLOUD else ""
        self.soundcloud_url = url if platform == Platform.SOUNDCLOUD else ""
        self.active_source = platform

    def apply_resolved(self, resolved: ResolvedShow) -> None:
        """Fill fields from fetched metadata."""
        self.title = resolved.title
        self.description = resolved.description
        self.date = resolved.date or today_string()
        self.duration_minutes = seconds_to_minutes(resolved.duration)
        self.duration_seconds = resolved.duration or None
        self.image_url = resolved.image_url
        if self.active_source == Platform.MIXCLOUD:
            self.mixcloud_key = resolved.mixcloud_key or ""
        elif self.active_source == Platform.SOUNDCLOUD:
            self.soundcloud_id = resolved.soundcloud_id or ""

    def validate(self) -> dict[str, str]:
        """Field name -> error message. Empty when the form can be submitted."""
        errors = {}
        if not self.title.strip():
            errors["title"] = "Title is required"
        if not self.date.strip():
            errors["date"] = "Date is required"
        else:
            try:
                date.fromisoformat(self.date.strip())
            except ValueError:
                errors["date"] = "Date must be in YYYY-MM-DD format"
        if self.duration_minutes < 0:
            errors["durationMinutes"] = "Duration can't be negative"
        return errors

    def payload_duration(self) -> Optional[int]:
        """
        Duration in seconds to send.

        Minutes that still match the loaded duration send the loaded seconds
        unchanged, so 30 s stays 30 s and a stored show without a duration
        stays without one. Edited minutes are sent as minutes * 60.
        """
        untouched = self.duration_minutes == seconds_to_minutes(self.duration_seconds)
        if untouched and (self.duration_seconds is not None or self.show_id):
            return self.duration_seconds
        return self.duration_minutes * 60

    def to_payload(self) -> ShowPayload:
        """Show body for the roster API, duration in seconds."""
        disabled = self.disabled_fields
        return ShowPayload(
            title=self.title.strip(),
            description=self.description,
            date=self.date.strip(),
            duration=self.payload_duration(),
            mixcloud_url=self.mixcloud_url or None,
            soundcloud_url=self.soundcloud_url or None,
            mixcloud_key=None if "mixcloudKey" in disabled else (self.mixcloud_key or None),
            soundcloud_id=None if "soundcloudId" in disabled else (self.soundcloud_id or None),
            image_url=self.image_url or None,
        )

    def to_data(self) -> ShowFormData:
        return ShowFormData(
            show_id=self.show_id,
            title=self.title,
            description=self.description,
            date=self.date,
            duration_minutes=self.duration_minutes,
            duration_seconds=self.duration_seconds,
            mixcloud_url=self.mixcloud_url,
            soundcloud_url=self.soundcloud_url,
            mixcloud_key=self.mixcloud_key,
            soundcloud_id=self.soundcloud_id,
            image_url=self.image_url,
            active_source=self.active_source,
            disabled_fields=self.disabled_fields,
        )
