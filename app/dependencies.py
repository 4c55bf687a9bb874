from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from app.config import get_settings
from app.core.exceptions import ForbiddenException, UnauthorizedException
from app.core.session import AdminSession
from app.services.http_client import get_http_client
from app.services.metadata import Resolvers, build_resolvers
from app.services.roster_api import RosterApiClient


async def get_session(request: Request) -> AdminSession:
    """
    Dependency that builds the admin session from the request cookies.

    Usage:
        @app.get("/me")
        async def me(session: Session):
            ...
    """
    return AdminSession.from_cookies(request.cookies)


async def get_admin_session(
    session: Annotated[AdminSession, Depends(get_session)]
) -> AdminSession:
    """
    Dependency that requires a logged-in admin.

    Raises 401 without a session and 403 when the profile lacks the admin flag.
    """
    if not session.is_authenticated:
        raise UnauthorizedException("Please log in to continue")
    if not session.is_admin:
        raise ForbiddenException()
    return session


def build_api_client(session: AdminSession) -> RosterApiClient:
    settings = get_settings()
    return RosterApiClient(
        get_http_client(),
        settings.roster_api_url,
        token=session.token,
        timeout=settings.roster_api_timeout,
    )


async def get_api_client(
    session: Annotated[AdminSession, Depends(get_admin_session)]
) -> RosterApiClient:
    """Roster API client carrying the admin's bearer token."""
    return build_api_client(session)


async def get_public_api_client(
    session: Annotated[AdminSession, Depends(get_session)]
) -> RosterApiClient:
    """Roster API client for routes that don't need a session (login)."""
    return build_api_client(session)


@lru_cache
def _shared_resolvers() -> Resolvers:
    return build_resolvers()


async def get_resolvers() -> Resolvers:
    """Platform resolvers; shared so the SoundCloud token is reused."""
    return _shared_resolvers()


# Type aliases for cleaner dependency injection
Session = Annotated[AdminSession, Depends(get_session)]
AdminOnly = Annotated[AdminSession, Depends(get_admin_session)]
RosterApi = Annotated[RosterApiClient, Depends(get_api_client)]
PublicRosterApi = Annotated[RosterApiClient, Depends(get_public_api_client)]
PlatformResolvers = Annotated[Resolvers, Depends(get_resolvers)]
