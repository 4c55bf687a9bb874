"""Show schemas shared by the show routes, resolvers and bulk import."""

from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from app.schemas.base import CamelModel
from app.utils.dates import to_date_string


class Platform(str, Enum):
    """External audio platforms a show can be sourced from."""
    MIXCLOUD = "mixcloud"
    SOUNDCLOUD = "soundcloud"


class ShowBase(CamelModel):
    """Fields common to stored and outgoing shows. Duration is in seconds."""
    title: str
    description: Optional[str] = None
    date: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0)
    mixcloud_url: Optional[str] = None
    soundcloud_url: Optional[str] = None
    mixcloud_key: Optional[str] = None
    soundcloud_id: Optional[str] = None
    image_url: Optional[str] = None


class ShowPayload(ShowBase):
    """Body sent to the roster API when creating or updating a show."""
    title: str = Field(..., min_length=1)


class Show(ShowBase):
    """A show as stored by the roster API. Unknown stored fields are kept."""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(None, alias="_id")
    title: str = ""
    play_count: Optional[int] = None

    @property
    def date_only(self) -> Optional[str]:
        """Date normalized to YYYY-MM-DD for editing."""
        return to_date_string(self.date) if self.date else None

    @property
    def platform(self) -> Optional[Platform]:
        if self.mixcloud_url:
            return Platform.MIXCLOUD
        if self.soundcloud_url:
            return Platform.SOUNDCLOUD
        return None


class ResolvedShow(CamelModel):
    """Canonical show metadata produced by a platform resolver."""
    title: str = ""
    description: str = ""
    date: str
    duration: int = 0
    image_url: str = ""
    mixcloud_url: Optional[str] = None
    mixcloud_key: Optional[str] = None
    soundcloud_url: Optional[str] = None
    soundcloud_id: Optional[str] = None

    def to_payload(self) -> ShowPayload:
        """Show body ready to be submitted for an artist."""
        return ShowPayload(
            title=self.title,
            description=self.description or None,
            date=self.date,
            duration=self.duration,
            image_url=self.image_url or None,
            mixcloud_url=self.mixcloud_url,
            mixcloud_key=self.mixcloud_key,
            soundcloud_url=self.soundcloud_url,
            soundcloud_id=self.soundcloud_id,
        )


class ShowResolveRequest(CamelModel):
    """Single URL lookup used by the show form's Fetch action."""
    url: str = Field(..., min_length=1)
    platform: Platform

    @field_validator("url")
    @classmethod
    def strip_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter a URL")
        return v


class ShowFormData(CamelModel):
    """
    Show form contents as submitted by or returned to the editor.

    The editor works in durationMinutes. durationSeconds and showId are echoed
    back untouched so a duration that was not edited is saved exactly.
    """
    show_id: Optional[str] = None
    title: str = ""
    description: str = ""
    date: str = ""
    duration_minutes: int = 60
    duration_seconds: Optional[int] = Field(None, ge=0)
    mixcloud_url: str = ""
    soundcloud_url: str = ""
    mixcloud_key: str = ""
    soundcloud_id: str = ""
    image_url: str = ""
    active_source: Optional[Platform] = None
    disabled_fields: list[str] = []
