"""
Admin session held in browser cookies.

The session is an explicit object: it is built from the request cookies
(init), written back onto a response after login (persist) and removed on
logout or when the stored profile can't be trusted (clear). Routes receive
it through a dependency instead of reading cookies themselves.
"""
import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from fastapi import Response

from app.config import get_settings
from app.core.security import create_profile_token, verify_profile_token

logger = logging.getLogger(__name__)


@dataclass
class AdminSession:
    """Auth token for the roster API plus the profile of the logged-in user."""

    token: Optional[str] = None
    user: dict = field(default_factory=dict)
    # Set when init found unusable cookies that must be removed
    stale: bool = False

    @classmethod
    def from_cookies(cls, cookies: Mapping[str, str]) -> "AdminSession":
        """Read the persisted token and profile."""
        settings = get_settings()
        token = cookies.get(settings.auth_cookie_name)
        profile_token = cookies.get(settings.profile_cookie_name)

        if not token or not profile_token:
            return cls(stale=bool(token or profile_token))

        user = verify_profile_token(profile_token)
        if user is None:
            logger.warning("[AdminSession] Invalid profile cookie, clearing session")
            return cls(stale=True)

        return cls(token=token, user=user)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.user.get("isAdmin") is True

    def persist(self, response: Response) -> None:
        """Write token and signed profile cookies onto a response."""
        settings = get_settings()
        response.set_cookie(
            settings.auth_cookie_name,
            self.token or "",
            max_age=settings.session_max_age,
            httponly=True,
            secure=settings.cookie_secure,
            samesite="lax",
        )
        response.set_cookie(
            settings.profile_cookie_name,
            create_profile_token(self.user),
            max_age=settings.session_max_age,
            httponly=True,
            secure=settings.cookie_secure,
            samesite="lax",
        )

    def clear(self, response: Response) -> None:
        """Forget the session and delete its cookies."""
        settings = get_settings()
        self.token = None
        self.user = {}
        self.stale = False
        response.delete_cookie(settings.auth_cookie_name)
        response.delete_cookie(settings.profile_cookie_name)
