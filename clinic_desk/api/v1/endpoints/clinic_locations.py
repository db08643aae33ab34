"""Clinic location endpoints."""

from fastapi import APIRouter

from clinic_desk.dependencies import CurrentUser, DatabaseSession
from clinic_desk.schemas.clinic_locations import ClinicLocationResponse
from clinic_desk.services.clinic_location_service import ClinicLocationService

router = APIRouter()


@router.get("/", response_model=list[ClinicLocationResponse], summary="List clinic locations")
async def list_clinic_locations(
    current_user: CurrentUser,
    db: DatabaseSession,
) -> list[ClinicLocationResponse]:
    """List all clinic locations."""
    locations = await ClinicLocationService(db).list_locations()
    return [ClinicLocationResponse.model_validate(location) for location in locations]


@router.get(
    "/{location_id}",
    response_model=ClinicLocationResponse,
    summary="Get clinic location by ID",
)
async def get_clinic_location(
    location_id: int,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> ClinicLocationResponse:
    """Get a specific clinic location."""
    return ClinicLocationResponse.model_validate(
        await ClinicLocationService(db).get_location(location_id)
    )
