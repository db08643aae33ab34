"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_desk.core.security import decode_token
from clinic_desk.database import get_db
from clinic_desk.schemas.auth import StaffUser
from clinic_desk.services.allowed_user_service import AllowedUserService
from clinic_desk.services.appointment_persistence import SqlAppointmentPersistence
from clinic_desk.services.appointment_service import AppointmentService
from clinic_desk.services.dashboard_service import DashboardService

security = HTTPBearer(auto_error=False)

DatabaseSession = Annotated[AsyncSession, Depends(get_db)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: DatabaseSession,
) -> StaffUser:
    """
    Resolve the signed-in staff member from the bearer token.

    The allowlist is consulted on every request so that removing an email
    takes effect before the token expires.

    Raises:
        HTTPException: 401 for a missing or invalid token, 403 when the user
            is no longer allowlisted
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise _unauthorized("Could not validate credentials")

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id.isdigit():
        raise _unauthorized("Invalid user ID format")

    entry = await AllowedUserService(db).get_user(int(user_id))
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is not on the allowlist",
        )

    return StaffUser(
        id=entry["id"],
        email=entry["email"],
        name=payload.get("name") or entry.get("name") or entry["email"],
        is_admin=bool(entry["is_admin"]),
    )


CurrentUser = Annotated[StaffUser, Depends(get_current_user)]


async def require_admin(current_user: CurrentUser) -> StaffUser:
    """
    Dependency to ensure current user is an allowlist admin.

    Raises:
        HTTPException: If user is not admin
    """
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


def get_appointment_service(db: DatabaseSession) -> AppointmentService:
    """Build the appointment scheduler over the request's session."""
    return AppointmentService(SqlAppointmentPersistence(db))


def get_dashboard_service(
    appointment_service: Annotated[AppointmentService, Depends(get_appointment_service)],
) -> DashboardService:
    """Build the dashboard service."""
    return DashboardService(appointment_service)


AdminUser = Annotated[StaffUser, Depends(require_admin)]
AppointmentServiceDep = Annotated[AppointmentService, Depends(get_appointment_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
