from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.base import CamelModel


class LoginRequest(BaseModel):
    """Schema for admin login."""
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AdminUser(BaseModel):
    """User object returned by the roster API. Unknown fields are kept."""
    model_config = ConfigDict(extra="allow")

    id: Optional[Union[str, int]] = None
    email: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    isAdmin: bool = False


class SessionResponse(CamelModel):
    """Current session state."""
    authenticated: bool
    is_admin: bool = False
    user: Optional[AdminUser] = None


class MessageResponse(BaseModel):
    """Generic message response."""
    message: str
