"""JWT helpers for staff sessions."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from clinic_desk.config import settings

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def _create_token(data: dict[str, Any], token_type: str, expires_delta: timedelta) -> str:
    issued_at = datetime.now(UTC)
    to_encode = {
        **data,
        "exp": issued_at + expires_delta,
        "iat": issued_at,
        "type": token_type,
    }
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode
        expires_delta: Optional expiration time delta

    Returns:
        Encoded JWT token
    """
    return _create_token(
        data,
        ACCESS_TOKEN_TYPE,
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes),
    )


def create_refresh_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT refresh token."""
    return _create_token(
        data,
        REFRESH_TOKEN_TYPE,
        expires_delta or timedelta(days=settings.refresh_token_expire_days),
    )


def decode_token(token: str, token_type: str = ACCESS_TOKEN_TYPE) -> dict[str, Any] | None:
    """
    Decode and validate a JWT of the given type.

    Returns:
        Decoded payload, or None if the token is invalid, expired or of another type
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None

    if payload.get("type") != token_type:
        return None

    return payload
