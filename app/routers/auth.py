from fastapi import APIRouter, Response

from app.core.exceptions import BadGatewayException, ForbiddenException
from app.core.session import AdminSession
from app.dependencies import PublicRosterApi, Session
from app.schemas.auth import AdminUser, LoginRequest, MessageResponse, SessionResponse

router = APIRouter()


@router.post(
    "/login",
    response_model=SessionResponse,
    summary="Log in as an admin",
)
async def login(request: LoginRequest, response: Response, api: PublicRosterApi):
    """
    Authenticate against the roster API and start a session.

    - **email**: Admin email
    - **password**: Password

    Only users flagged as admin by the roster API are let in. The token and
    profile are stored in cookies.
    """
    data = await api.login(request.email, request.password)

    user = data.get("user")
    token = data.get("token")
    if not isinstance(user, dict) or not token:
        raise BadGatewayException("Invalid response from server")

    if user.get("isAdmin") is not True:
        raise ForbiddenException("You are not an admin")

    session = AdminSession(token=token, user=user)
    session.persist(response)

    return SessionResponse(authenticated=True, is_admin=True, user=AdminUser(**user))


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="End the session",
)
async def logout(response: Response, session: Session):
    """Clear the session cookies."""
    session.clear(response)
    return MessageResponse(message="Logged out")


@router.get(
    "/me",
    response_model=SessionResponse,
    summary="Get current session",
)
async def get_me(response: Response, session: Session):
    """
    Get the current session state.
    Unreadable session cookies are removed.
    """
    if session.stale:
        session.clear(response)

    if not session.is_authenticated:
        return SessionResponse(authenticated=False)

    return SessionResponse(
        authenticated=True,
        is_admin=session.is_admin,
        user=AdminUser(**session.user),
    )
