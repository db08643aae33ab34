"""API v1 router configuration."""

from fastapi import APIRouter

from clinic_desk.api.v1.endpoints import (
    appointments,
    auth,
    clinic_locations,
    dashboard,
    health,
    patients,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["Appointments"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(
    clinic_locations.router, prefix="/clinic-locations", tags=["Clinic Locations"]
)
api_router.include_router(patients.router, prefix="/patients", tags=["Patients"])
api_router.include_router(users.router, prefix="/users", tags=["Allowlist"])
