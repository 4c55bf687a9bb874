"""Artist schemas for roster API payloads and responses."""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from app.schemas.base import CamelModel
from app.schemas.show import Show


class SocialLinks(CamelModel):
    """Named platform -> URL. Extra platforms are kept as-is."""
    model_config = ConfigDict(extra="allow")

    instagram: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    website: Optional[str] = None

    def has_any(self) -> bool:
        return any(self.model_dump().values())


class ArtistBase(CamelModel):
    """Fields common to stored and outgoing artists."""
    name: str
    bio: Optional[str] = None
    image_url: Optional[str] = None
    banner_url: Optional[str] = None
    genres: list[str] = []
    mixcloud_username: Optional[str] = None
    soundcloud_username: Optional[str] = None
    is_active: bool = True
    is_resident: bool = False
    featured: bool = False
    social_links: SocialLinks = Field(default_factory=SocialLinks)


class ArtistPayload(ArtistBase):
    """Body sent to the roster API when creating or updating an artist."""
    name: str = Field(..., min_length=1)
    # Stored shows go back unchanged, with their _id and playCount
    shows: list[Show] = []

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()


class Artist(ArtistBase):
    """An artist as stored by the roster API."""
    id: Optional[str] = Field(None, alias="_id")
    shows: list[Show] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def status_label(self) -> str:
        return "Active" if self.is_active else "Inactive"


class ArtistSummary(CamelModel):
    """Compact artist row for lists and the dashboard."""
    id: Optional[str] = Field(None, alias="_id")
    name: str
    image_url: Optional[str] = None
    genres: list[str] = []
    status: str
    is_resident: bool = False
    featured: bool = False
    show_count: int = 0

    @classmethod
    def from_artist(cls, artist: Artist) -> "ArtistSummary":
        return cls(
            id=artist.id,
            name=artist.name,
            image_url=artist.image_url,
            genres=artist.genres,
            status=artist.status_label,
            is_resident=artist.is_resident,
            featured=artist.featured,
            show_count=len(artist.shows),
        )


class ArtistProfileImportRequest(CamelModel):
    """SoundCloud profile URL or bare username to prefill the artist form."""
    url: str = Field(..., min_length=1)


class SoundCloudProfile(CamelModel):
    """Artist details read from a SoundCloud user profile."""
    name: str = ""
    bio: str = ""
    image_url: str = ""
    soundcloud_username: str = ""
    genres: list[str] = []


class ArtistFormData(ArtistBase):
    """Artist form contents as submitted by or returned to the editor."""
    name: str = ""
    shows: list[Show] = []
