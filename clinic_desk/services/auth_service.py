"""Authentication service: Google sign-in gated by the allowlist."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_desk.core.exceptions import ForbiddenException, UnauthorizedException
from clinic_desk.core.firebase import verify_firebase_token
from clinic_desk.core.security import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from clinic_desk.schemas.auth import StaffUser, Token
from clinic_desk.services.allowed_user_service import AllowedUserService

logger = structlog.get_logger(__name__)


class AuthService:
    """Authentication service for Firebase sign-in and JWT sessions."""

    def __init__(self, db: AsyncSession):
        """Initialize auth service with database session."""
        self.db = db
        self.allowlist = AllowedUserService(db)

    async def login_with_firebase(self, id_token: str) -> tuple[StaffUser, Token]:
        """
        Verify a Firebase ID token and open a session for an allowlisted user.

        Args:
            id_token: Firebase ID token from the browser

        Returns:
            Tuple of (signed-in user, token pair)

        Raises:
            UnauthorizedException: If the token cannot be verified
            ForbiddenException: If the email is not on the allowlist
        """
        try:
            claims = await verify_firebase_token(id_token)
        except ValueError as e:
            raise UnauthorizedException(str(e)) from e

        email = claims.get("email")
        if not email:
            raise UnauthorizedException("Email is required from Firebase token")

        entry = await self.allowlist.get_user_by_email(email)
        if entry is None:
            logger.warning("login_denied_not_allowlisted", email=email)
            raise ForbiddenException("Access denied: user is not on the allowlist")

        user = StaffUser(
            id=entry["id"],
            email=entry["email"],
            name=claims.get("name") or entry.get("name") or entry["email"],
            is_admin=bool(entry["is_admin"]),
            picture=claims.get("picture"),
        )
        logger.info("staff_login", user_id=user.id, is_admin=user.is_admin)
        return user, self.create_tokens(user)

    def create_tokens(self, user: StaffUser) -> Token:
        """Create access and refresh tokens for a user."""
        claims = {"sub": str(user.id), "email": user.email, "name": user.name}
        return Token(
            access_token=create_access_token(claims),
            refresh_token=create_refresh_token(claims),
        )

    async def refresh(self, refresh_token: str) -> Token:
        """
        Issue a new token pair if the user is still on the allowlist.

        Raises:
            UnauthorizedException: If the refresh token is invalid or the user was removed
        """
        payload = decode_token(refresh_token, REFRESH_TOKEN_TYPE)
        if payload is None or not str(payload.get("sub", "")).isdigit():
            raise UnauthorizedException("Invalid refresh token")

        entry = await self.allowlist.get_user(int(payload["sub"]))
        if entry is None:
            raise UnauthorizedException("User is no longer on the allowlist")

        user = StaffUser(
            id=entry["id"],
            email=entry["email"],
            name=payload.get("name") or entry.get("name") or entry["email"],
            is_admin=bool(entry["is_admin"]),
        )
        return self.create_tokens(user)
