"""Root API router for REST endpoints."""
from fastapi import APIRouter

from clinic.api.endpoints import (
    appointments,
    doctors,
    finance,
    invoices,
    lab,
    organisations,
    patients,
    payments,
    prescriptions,
    radiology,
    services,
    users,
    visits,
)

router = APIRouter()


@router.get("/health", tags=["health"], summary="Health check")
def health_check() -> dict[str, str]:
    """Return basic service health information."""

    return {"status": "ok"}


router.include_router(organisations.router)
router.include_router(users.router)
router.include_router(patients.router)
router.include_router(doctors.router)
router.include_router(appointments.router)
router.include_router(prescriptions.router)
router.include_router(services.router)
router.include_router(invoices.router)
router.include_router(payments.router)
router.include_router(lab.router)
router.include_router(visits.router)
router.include_router(radiology.router)
router.include_router(finance.router)
