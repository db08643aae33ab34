"""Authentication endpoints."""

from fastapi import APIRouter, status

from clinic_desk.dependencies import CurrentUser, DatabaseSession
from clinic_desk.schemas.auth import (
    FirebaseAuthRequest,
    LoginResponse,
    StaffUser,
    Token,
    TokenRefresh,
)
from clinic_desk.services.auth_service import AuthService

router = APIRouter()


@router.post(
    "/firebase/verify",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in with a Firebase ID token",
)
async def firebase_verify(request: FirebaseAuthRequest, db: DatabaseSession) -> LoginResponse:
    """
    Exchange a Firebase ID token for API tokens.

    The browser signs in with Google through Firebase and sends the ID
    token here. Only emails on the allowlist receive tokens; everyone else
    gets 403.
    """
    user, tokens = await AuthService(db).login_with_firebase(request.id_token)
    return LoginResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
        user=user,
    )


@router.post(
    "/refresh",
    response_model=Token,
    status_code=status.HTTP_200_OK,
    summary="Refresh access token",
)
async def refresh_token(request: TokenRefresh, db: DatabaseSession) -> Token:
    """Issue a new token pair from a refresh token."""
    return await AuthService(db).refresh(request.refresh_token)


@router.get("/me", response_model=StaffUser, summary="Current user")
async def me(current_user: CurrentUser) -> StaffUser:
    """Return the signed-in staff member, including whether they are an admin."""
    return current_user
