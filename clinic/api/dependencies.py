"""FastAPI dependency utilities for tenant-scoped access."""
from __future__ import annotations

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from clinic.core.database import get_db_session
from clinic.core.identity import resolve_identity
from clinic.core.scoping import ScopedClient
from clinic.core.settings import Settings, get_settings
from clinic.core.tenant import TenantContext
from clinic.schemas.appointment import AppointmentFilterParams
from clinic.schemas.invoice import InvoiceFilterParams
from clinic.services.appointment_service import AppointmentService
from clinic.services.catalog_service import CatalogService
from clinic.services.doctor_service import DoctorService
from clinic.services.finance_service import FinanceService
from clinic.services.invoice_service import InvoiceService
from clinic.services.lab_service import LabService
from clinic.services.organisation_service import OrganisationService
from clinic.services.patient_service import PatientService
from clinic.services.payment_service import PaymentService
from clinic.services.prescription_service import PrescriptionService
from clinic.services.radiology_service import RadiologyService
from clinic.services.user_service import UserService
from clinic.services.visit_service import VisitService

bearer_scheme = HTTPBearer(auto_error=False, description="Session token issued by the identity provider")


def get_tenant_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> TenantContext:
    """Resolve the caller's tenant context from the bearer session token."""

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    context = resolve_identity(session, credentials.credentials)
    if context is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if settings.require_organisation and context.organisation_id is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User is not assigned to an organisation")
    return context


def get_scoped_client(
    context: TenantContext = Depends(get_tenant_context),
    session: Session = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> ScopedClient:
    """Bind the request session to the caller's organisation."""

    return ScopedClient(session, context, strict=settings.tenant_scope_strict)


def get_organisation_service(client: ScopedClient = Depends(get_scoped_client)) -> OrganisationService:
    return OrganisationService(client)


def get_user_service(client: ScopedClient = Depends(get_scoped_client)) -> UserService:
    return UserService(client)


def get_patient_service(client: ScopedClient = Depends(get_scoped_client)) -> PatientService:
    return PatientService(client)


def get_doctor_service(client: ScopedClient = Depends(get_scoped_client)) -> DoctorService:
    return DoctorService(client)


def get_appointment_service(
    client: ScopedClient = Depends(get_scoped_client),
    settings: Settings = Depends(get_settings),
) -> AppointmentService:
    return AppointmentService(client, default_page_size=settings.default_page_size)


def get_prescription_service(client: ScopedClient = Depends(get_scoped_client)) -> PrescriptionService:
    return PrescriptionService(client)


def get_catalog_service(client: ScopedClient = Depends(get_scoped_client)) -> CatalogService:
    return CatalogService(client)


def get_invoice_service(client: ScopedClient = Depends(get_scoped_client)) -> InvoiceService:
    return InvoiceService(client)


def get_payment_service(client: ScopedClient = Depends(get_scoped_client)) -> PaymentService:
    return PaymentService(client)


def get_lab_service(client: ScopedClient = Depends(get_scoped_client)) -> LabService:
    return LabService(client)


def get_visit_service(client: ScopedClient = Depends(get_scoped_client)) -> VisitService:
    return VisitService(client)


def get_radiology_service(client: ScopedClient = Depends(get_scoped_client)) -> RadiologyService:
    return RadiologyService(client)


def get_finance_service(client: ScopedClient = Depends(get_scoped_client)) -> FinanceService:
    return FinanceService(client)


def get_invoice_filters(params: InvoiceFilterParams = Depends()) -> InvoiceFilterParams:
    """Expose invoice filters via dependency injection."""

    return params


def get_appointment_filters(params: AppointmentFilterParams = Depends()) -> AppointmentFilterParams:
    return params
