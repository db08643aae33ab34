"""Patient roster endpoints."""

from fastapi import APIRouter, Query, status

from clinic_desk.dependencies import CurrentUser, DatabaseSession
from clinic_desk.schemas.patients import (
    PatientCreate,
    PatientListResponse,
    PatientResponse,
    PatientUpdate,
)
from clinic_desk.services.patient_service import PatientService

router = APIRouter()


@router.get("/", response_model=PatientListResponse, summary="List patients")
async def list_patients(current_user: CurrentUser, db: DatabaseSession) -> PatientListResponse:
    """List all patients ordered by name."""
    items = await PatientService(db).list_patients()
    return PatientListResponse(total=len(items), items=items)


@router.get(
    "/search",
    response_model=list[PatientResponse],
    summary="Search patients by phone",
)
async def search_patients(
    current_user: CurrentUser,
    db: DatabaseSession,
    phone: str = Query(..., min_length=1, max_length=10),
) -> list[PatientResponse]:
    """Suggest up to five patients whose phone number contains the given digits."""
    patients = await PatientService(db).search_by_phone(phone)
    return [PatientResponse.model_validate(patient) for patient in patients]


@router.get("/{patient_id}", response_model=PatientResponse, summary="Get patient by ID")
async def get_patient(
    patient_id: int,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> PatientResponse:
    """Get a specific patient."""
    return PatientResponse.model_validate(await PatientService(db).get_patient(patient_id))


@router.post(
    "/",
    response_model=PatientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register patient",
)
async def create_patient(
    data: PatientCreate,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> PatientResponse:
    """Register a new patient."""
    return PatientResponse.model_validate(await PatientService(db).create_patient(data))


@router.put("/{patient_id}", response_model=PatientResponse, summary="Update patient")
async def update_patient(
    patient_id: int,
    data: PatientUpdate,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> PatientResponse:
    """Replace a patient's details."""
    return PatientResponse.model_validate(await PatientService(db).update_patient(patient_id, data))


@router.delete(
    "/{patient_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete patient",
)
async def delete_patient(patient_id: int, current_user: CurrentUser, db: DatabaseSession) -> None:
    """Delete a patient."""
    await PatientService(db).delete_patient(patient_id)
