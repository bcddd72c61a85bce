"""Pydantic schemas exposed by the API layer."""
from .organisation import OrganisationCreate, OrganisationRead
from .user import UserCreate, UserRead, UserRoleUpdate
from .patient import PatientCreate, PatientListResponse, PatientRead, PatientUpdate
from .doctor import DoctorCreate, DoctorRead, DoctorUpdate
from .appointment import (
    AppointmentCreate,
    AppointmentDateFilter,
    AppointmentFilterParams,
    AppointmentListResponse,
    AppointmentRead,
)
from .prescription import PrescriptionCreate, PrescriptionItem, PrescriptionRead
from .catalog import ServiceCreate, ServiceRead
from .invoice import (
    InvoiceCreate,
    InvoiceDetail,
    InvoiceFilterParams,
    InvoiceLineCreate,
    InvoiceLineRead,
    InvoiceListResponse,
    InvoiceRead,
    InvoiceUpdate,
)
from .payment import PaymentCreate, PaymentRead, PaymentRecordResponse, WeeklyPaymentsResponse
from .lab import (
    LabCategoryGroup,
    LabOrderCreate,
    LabOrderRead,
    LabResultUpdate,
    LabTestTypeCreate,
    LabTestTypeRead,
    PatientLabOrdersResponse,
)
from .radiology import (
    PatientRadiologyOrdersResponse,
    RadiologyCategoryGroup,
    RadiologyExamTypeCreate,
    RadiologyExamTypeRead,
    RadiologyOrderCreate,
    RadiologyOrderItem,
    RadiologyOrderRead,
    RadiologyOrderUpdate,
)
from .visit import VisitCreate, VisitDayCount, VisitDetail, VisitDoctorUpdate, VisitRead
from .finance import FinanceTotals, InvoiceStatusBreakdown, MonthlyRevenue, MonthlyRevenueResponse

__all__ = [
    "OrganisationCreate",
    "OrganisationRead",
    "UserCreate",
    "UserRead",
    "UserRoleUpdate",
    "PatientCreate",
    "PatientUpdate",
    "PatientRead",
    "PatientListResponse",
    "DoctorCreate",
    "DoctorUpdate",
    "DoctorRead",
    "AppointmentCreate",
    "AppointmentDateFilter",
    "AppointmentFilterParams",
    "AppointmentRead",
    "AppointmentListResponse",
    "PrescriptionCreate",
    "PrescriptionItem",
    "PrescriptionRead",
    "ServiceCreate",
    "ServiceRead",
    "InvoiceCreate",
    "InvoiceUpdate",
    "InvoiceLineCreate",
    "InvoiceLineRead",
    "InvoiceRead",
    "InvoiceDetail",
    "InvoiceFilterParams",
    "InvoiceListResponse",
    "PaymentCreate",
    "PaymentRead",
    "PaymentRecordResponse",
    "WeeklyPaymentsResponse",
    "LabTestTypeCreate",
    "LabTestTypeRead",
    "LabOrderCreate",
    "LabResultUpdate",
    "LabOrderRead",
    "LabCategoryGroup",
    "PatientLabOrdersResponse",
    "RadiologyExamTypeCreate",
    "RadiologyExamTypeRead",
    "RadiologyOrderItem",
    "RadiologyOrderCreate",
    "RadiologyOrderUpdate",
    "RadiologyOrderRead",
    "RadiologyCategoryGroup",
    "PatientRadiologyOrdersResponse",
    "VisitCreate",
    "VisitDoctorUpdate",
    "VisitRead",
    "VisitDetail",
    "VisitDayCount",
    "InvoiceStatusBreakdown",
    "FinanceTotals",
    "MonthlyRevenue",
    "MonthlyRevenueResponse",
]
