"""Authentication schemas."""

from pydantic import BaseModel, Field


class Token(BaseModel):
    """JWT token response schema."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenRefresh(BaseModel):
    """Token refresh request schema."""

    refresh_token: str


class FirebaseAuthRequest(BaseModel):
    """Firebase ID token authentication request."""

    id_token: str = Field(..., description="Firebase ID token from Google sign-in")


class StaffUser(BaseModel):
    """The signed-in staff member."""

    id: int
    email: str
    name: str
    is_admin: bool = False
    picture: str | None = None


class LoginResponse(BaseModel):
    """Login response with tokens and user info."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: StaffUser
