"""Appointment endpoints."""

from datetime import date

from fastapi import APIRouter, Query, status

from clinic_desk.config import settings
from clinic_desk.dependencies import AppointmentServiceDep, CurrentUser
from clinic_desk.schemas.appointments import (
    AppointmentCreate,
    AppointmentCreateRequest,
    AppointmentListResponse,
    AppointmentRecord,
    AppointmentUpdate,
    AppointmentUpdateRequest,
)

router = APIRouter()


@router.post(
    "/",
    response_model=AppointmentRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Book appointment",
)
async def create_appointment(
    data: AppointmentCreateRequest,
    current_user: CurrentUser,
    service: AppointmentServiceDep,
) -> AppointmentRecord:
    """
    Book an appointment from a local date-time.

    Zone and clinic location default to the configured front desk values
    when the client leaves them out.
    """
    return await service.create(
        AppointmentCreate(
            patient_name=data.patient_name,
            local_datetime=data.local_datetime,
            time_zone=data.time_zone or settings.default_time_zone,
            clinic_location_id=data.clinic_location_id or settings.default_clinic_location_id,
            actor_name=current_user.name,
            patient_phone=data.patient_phone,
            notes=data.notes,
            patient_id=data.patient_id,
        )
    )


@router.get(
    "/",
    response_model=AppointmentListResponse,
    status_code=status.HTTP_200_OK,
    summary="List appointments for a day",
)
async def list_appointments(
    current_user: CurrentUser,
    service: AppointmentServiceDep,
    day: date = Query(..., alias="date", description="Calendar day in the given zone"),
    time_zone: str | None = Query(None, description="IANA zone of the calendar day"),
    clinic_location_id: int | None = Query(None, ge=1),
) -> AppointmentListResponse:
    """List the appointments falling on one local calendar day."""
    zone = time_zone or settings.default_time_zone
    items = await service.list_by_day(day, zone, clinic_location_id)
    return AppointmentListResponse(
        day=day,
        time_zone=zone,
        clinic_location_id=clinic_location_id,
        total=len(items),
        items=items,
    )


@router.get(
    "/{appointment_id}",
    response_model=AppointmentRecord,
    status_code=status.HTTP_200_OK,
    summary="Get appointment by ID",
)
async def get_appointment(
    appointment_id: int,
    current_user: CurrentUser,
    service: AppointmentServiceDep,
) -> AppointmentRecord:
    """Get a specific appointment by ID."""
    return await service.get(appointment_id)


@router.put(
    "/{appointment_id}",
    response_model=AppointmentRecord,
    status_code=status.HTTP_200_OK,
    summary="Update appointment",
)
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdateRequest,
    current_user: CurrentUser,
    service: AppointmentServiceDep,
) -> AppointmentRecord:
    """Replace an appointment's mutable fields, recording the signed-in user."""
    return await service.update(
        appointment_id,
        AppointmentUpdate(
            patient_name=data.patient_name,
            clinic_location_id=data.clinic_location_id or settings.default_clinic_location_id,
            actor_name=current_user.name,
            patient_phone=data.patient_phone,
            status=data.status,
            diagnosis=data.diagnosis,
            notes=data.notes,
            amount=data.amount,
        ),
    )


@router.delete(
    "/{appointment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete appointment",
)
async def delete_appointment(
    appointment_id: int,
    current_user: CurrentUser,
    service: AppointmentServiceDep,
) -> None:
    """Permanently delete an appointment."""
    await service.delete(appointment_id)
