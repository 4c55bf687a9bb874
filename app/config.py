from functools import lru_cache
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Placeholder values that must never sign real cookies
UNSAFE_SECRET_KEYS = {"change-me", "changeme", "secret"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Roster Admin"
    debug: bool = False
    api_v1_prefix: str = "/api/v1"

    # External roster REST API (artists, shows, auth)
    roster_api_url: str = "https://api.voicesradio.co.uk"
    roster_api_timeout: float = 10.0

    # Session cookies
    auth_cookie_name: str = "auth_token"
    profile_cookie_name: str = "user_data"
    cookie_secure: bool = False
    session_expire_minutes: int = 60 * 24

    # Signing key for the profile cookie, no default
    session_secret_key: str
    session_algorithm: str = "HS256"

    # Mixcloud (public, unauthenticated)
    mixcloud_api_url: str = "https://api.mixcloud.com"

    # SoundCloud (client credentials flow)
    soundcloud_api_url: str = "https://api.soundcloud.com"
    soundcloud_token_url: str = "https://api.soundcloud.com/oauth2/token"
    soundcloud_client_id: Optional[str] = None
    soundcloud_client_secret: Optional[str] = None

    # Frontend origin allowed by CORS
    frontend_url: str = "http://localhost:3000"

    @field_validator("session_secret_key")
    @classmethod
    def secret_key_is_private(cls, v: str) -> str:
        if not v.strip() or v.strip().lower() in UNSAFE_SECRET_KEYS:
            raise ValueError("SESSION_SECRET_KEY must be set to a private random value")
        return v

    @property
    def session_max_age(self) -> int:
        return self.session_expire_minutes * 60


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
