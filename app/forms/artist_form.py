"""Editable state of the artist form."""

from dataclasses import dataclass, field
from typing import Optional

from app.schemas.artist import (
    Artist,
    ArtistFormData,
    ArtistPayload,
    SocialLinks,
    SoundCloudProfile,
)
from app.schemas.show import Show

SOCIAL_PLATFORMS = ("instagram", "facebook", "twitter", "website")


class DuplicateGenreError(ValueError):
    def __init__(self, genre: str):
        super().__init__("Genre already added.")
        self.genre = genre


def _empty_social_links() -> dict[str, str]:
    return {platform: "" for platform in SOCIAL_PLATFORMS}


@dataclass
class ArtistFormState:
    artist_id: Optional[str] = None
    name: str = ""
    bio: str = ""
    image_url: str = ""
    banner_url: str = ""
    genres: list[str] = field(default_factory=list)
    mixcloud_username: str = ""
    soundcloud_username: str = ""
    is_active: bool = True
    is_resident: bool = False
    featured: bool = False
    social_links: dict[str, str] = field(default_factory=_empty_social_links)
    shows: list[Show] = field(default_factory=list)

    @classmethod
    def from_artist(cls, artist: Artist) -> "ArtistFormState":
        """Prefill from a stored artist (editing)."""
        form = cls(
            artist_id=artist.id,
            name=artist.name,
            bio=artist.bio or "",
            image_url=artist.image_url or "",
            banner_url=artist.banner_url or "",
            mixcloud_username=artist.mixcloud_username or "",
            soundcloud_username=artist.soundcloud_username or "",
            is_active=artist.is_active,
            is_resident=artist.is_resident,
            featured=artist.featured,
            shows=[s.model_copy() for s in artist.shows],
        )
        form.set_social_links(artist.social_links)
        for genre in artist.genres:
            form.add_genre(genre, ignore_duplicates=True)
        return form

    @classmethod
    def from_data(cls, data: ArtistFormData, artist_id: Optional[str] = None) -> "ArtistFormState":
        """Rebuild from submitted form contents."""
        form = cls(
            artist_id=artist_id,
            name=data.name,
            bio=data.bio or "",
            image_url=data.image_url or "",
            banner_url=data.banner_url or "",
            mixcloud_username=data.mixcloud_username or "",
            soundcloud_username=data.soundcloud_username or "",
            is_active=data.is_active,
            is_resident=data.is_resident,
            featured=data.featured,
            shows=list(data.shows),
        )
        form.set_social_links(data.social_links)
        for genre in data.genres:
            form.add_genre(genre, ignore_duplicates=True)
        return form

    def set_social_links(self, links: SocialLinks) -> None:
        for platform, url in links.model_dump().items():
            self.social_links[platform] = url or ""

    # ============= Genres =============

    def add_genre(self, genre: str, ignore_duplicates: bool = False) -> bool:
        """
        Append a genre.

        Returns False for a blank value. A genre that is already present
        (exact, case-sensitive match) leaves the list untouched and raises
        DuplicateGenreError unless ignore_duplicates is set.
        """
        genre = (genre or "").strip()
        if not genre:
            return False
        if genre in self.genres:
            if ignore_duplicates:
                return False
            raise DuplicateGenreError(genre)
        self.genres.append(genre)
        return True

    def remove_genre(self, genre: str) -> None:
        self.genres = [g for g in self.genres if g != genre]

    # ============= Shows =============

    def add_show(self, show: Show) -> None:
        self.shows.append(show)

    def remove_show(self, index: int) -> Show:
        """Drop one show; the others keep their order."""
        return self.shows.pop(index)

    # ============= Import =============

    def apply_profile_import(self, profile: SoundCloudProfile) -> None:
        """Fill fields from a SoundCloud profile lookup."""
        self.name = profile.name
        self.bio = profile.bio
        self.image_url = profile.image_url
        self.soundcloud_username = profile.soundcloud_username
        if profile.genres:
            self.genres = []
            for genre in profile.genres:
                self.add_genre(genre, ignore_duplicates=True)

    # ============= Submit =============

    def validate(self) -> dict[str, str]:
        """Field name -> error message. Empty when the form can be submitted."""
        errors = {}
        if not self.name.strip():
            errors["name"] = "Name is required"
        return errors

    def to_payload(self) -> ArtistPayload:
        return ArtistPayload(
            name=self.name.strip(),
            bio=self.bio,
            image_url=self.image_url,
            banner_url=self.banner_url,
            genres=list(self.genres),
            mixcloud_username=self.mixcloud_username,
            soundcloud_username=self.soundcloud_username,
            is_active=self.is_active,
            is_resident=self.is_resident,
            featured=self.featured,
            social_links=SocialLinks(**self.social_links),
            shows=list(self.shows),
        )

    def to_data(self) -> ArtistFormData:
        return ArtistFormData(
            name=self.name,
            bio=self.bio,
            image_url=self.image_url,
            banner_url=self.banner_url,
            genres=list(self.genres),
            mixcloud_username=self.mixcloud_username,
            soundcloud_username=self.soundcloud_username,
            is_active=self.is_active,
            is_resident=self.is_resident,
            featured=self.featured,
            social_links=SocialLinks(**self.social_links),
            shows=list(self.shows),
        )
