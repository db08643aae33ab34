"""Allowlist management endpoints (admins only)."""

from fastapi import APIRouter, Query, status
from pydantic import EmailStr

from clinic_desk.core.exceptions import NotFoundException
from clinic_desk.dependencies import AdminUser, DatabaseSession
from clinic_desk.schemas.allowed_users import (
    AllowedUserCreate,
    AllowedUserListResponse,
    AllowedUserResponse,
    AllowedUserUpdate,
)
from clinic_desk.services.allowed_user_service import AllowedUserService

router = APIRouter()


@router.get("/", response_model=AllowedUserListResponse, summary="List allowed users")
async def list_allowed_users(admin: AdminUser, db: DatabaseSession) -> AllowedUserListResponse:
    """List every allowlist entry, newest first."""
    users = await AllowedUserService(db).list_users()
    return AllowedUserListResponse(total=len(users), users=users)


@router.get(
    "/by-email",
    response_model=AllowedUserResponse,
    summary="Look up allowed user by email",
)
async def get_allowed_user_by_email(
    admin: AdminUser,
    db: DatabaseSession,
    email: EmailStr = Query(...),
) -> AllowedUserResponse:
    """Find an allowlist entry by email."""
    user = await AllowedUserService(db).get_user_by_email(email)
    if user is None:
        raise NotFoundException("User not found")
    return AllowedUserResponse.model_validate(user)


@router.post(
    "/",
    response_model=AllowedUserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add user to allowlist",
)
async def add_allowed_user(
    data: AllowedUserCreate,
    admin: AdminUser,
    db: DatabaseSession,
) -> AllowedUserResponse:
    """Allow an email to sign in."""
    return AllowedUserResponse.model_validate(await AllowedUserService(db).add_user(data))


@router.put("/{user_id}", response_model=AllowedUserResponse, summary="Update allowed user")
async def update_allowed_user(
    user_id: int,
    data: AllowedUserUpdate,
    admin: AdminUser,
    db: DatabaseSession,
) -> AllowedUserResponse:
    """Replace an allowlist entry."""
    return AllowedUserResponse.model_validate(
        await AllowedUserService(db).update_user(user_id, data)
    )


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove user from allowlist",
)
async def delete_allowed_user(user_id: int, admin: AdminUser, db: DatabaseSession) -> None:
    """Remove an allowlist entry."""
    await AllowedUserService(db).delete_user(user_id)
