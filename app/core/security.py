"""Signing of the admin profile stored in the session cookie."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError

from app.config import get_settings

settings = get_settings()

PROFILE_TOKEN_TYPE = "profile"


def create_profile_token(profile: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign the admin profile so it can be stored in a cookie.

    Args:
        profile: User object returned by the roster API login
        expires_delta: Lifetime override; defaults to the session lifetime

    Returns:
        Encoded JWT holding the profile under "user"
    """
    lifetime = expires_delta or timedelta(minutes=settings.session_expire_minutes)
    claims = {
        "sub": str(profile.get("email") or profile.get("id") or ""),
        "exp": datetime.now(timezone.utc) + lifetime,
        "type": PROFILE_TOKEN_TYPE,
        "user": profile,
    }
    return jwt.encode(claims, settings.session_secret_key, algorithm=settings.session_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Claims of a correctly signed, unexpired token; None for anything else."""
    try:
        return jwt.decode(token, settings.session_secret_key, algorithms=[settings.session_algorithm])
    except JWTError:
        return None


def verify_profile_token(token: str) -> Optional[dict]:
    """
    Read the user object back out of a profile token.

    Returns:
        The profile dict, or None when the token is invalid, expired or of
        another type
    """
    claims = decode_token(token)
    if claims is None or claims.get("type") != PROFILE_TOKEN_TYPE:
        return None

    user = claims.get("user")
    return user if isinstance(user, dict) else None
