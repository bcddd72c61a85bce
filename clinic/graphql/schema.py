"""Strawberry GraphQL schema definition."""
from __future__ import annotations

from collections.abc import Callable
from contextlib import contextmanager
from datetime import date, datetime
from typing import TypeVar

import strawberry
from graphql import GraphQLError
from strawberry.types import Info

from clinic.core.scoping import ScopedClient
from clinic.core.tenant import TenantAccessError
from clinic.db.models import InvoicePaymentStatus
from clinic.graphql.context import GraphQLContext
from clinic.schemas.invoice import InvoiceDetail, InvoiceFilterParams, InvoiceListResponse, InvoiceRead
from clinic.schemas.patient import PatientCreate, PatientListResponse, PatientRead
from clinic.schemas.payment import PaymentCreate, PaymentRecordResponse
from clinic.services.exceptions import ServiceError
from clinic.services.invoice_service import InvoiceService
from clinic.services.patient_service import PatientService
from clinic.services.payment_service import PaymentService

ServiceType = TypeVar("ServiceType")
ResultType = TypeVar("ResultType")


InvoicePaymentStatusEnum = strawberry.enum(InvoicePaymentStatus, name="InvoicePaymentStatus")


@contextmanager
def _session_scope(context: GraphQLContext):
    session = context.get_session()
    try:
        yield session
    finally:
        session.close()


def _execute_with_service(
    info: Info[GraphQLContext, None],
    builder: Callable[[ScopedClient], ServiceType],
    executor: Callable[[ServiceType], ResultType],
) -> ResultType:
    context = info.context
    with _session_scope(context) as session:
        service = builder(context.scoped_client(session))
        try:
            return executor(service)
        except (ServiceError, TenantAccessError) as exc:
            raise GraphQLError(str(exc)) from exc


@strawberry.type
class HealthCheck:
    status: str


@strawberry.type
class PatientType:
    id: strawberry.ID
    organisation_id: strawberry.ID
    name: str
    birthdate: date | None
    gender: str | None
    phone_number: str | None
    email: str | None
    address: str | None
    created_at: datetime


@strawberry.type
class PatientListType:
    items: list[PatientType]
    total: int


@strawberry.type
class InvoiceLineType:
    id: strawberry.ID
    service_name: str
    service_code: str | None
    quantity: int
    unit_price: float
    line_total: float


@strawberry.type
class InvoiceType:
    id: strawberry.ID
    organisation_id: strawberry.ID
    patient_id: strawberry.ID | None
    invoice_number: str
    invoice_date: date
    due_date: date | None
    payment_status: InvoicePaymentStatusEnum
    total_amount: float
    notes: str | None
    created_at: datetime


@strawberry.type
class InvoiceDetailType(InvoiceType):
    lines: list[InvoiceLineType]
    amount_paid: float
    balance_due: float


@strawberry.type
class InvoiceListType:
    items: list[InvoiceType]
    total: int


@strawberry.type
class PaymentResultType:
    payment_id: strawberry.ID
    receipt_number: str
    amount: float
    invoice_id: strawberry.ID
    payment_status: InvoicePaymentStatusEnum
    amount_paid: float
    balance_due: float


@strawberry.type
class SuccessResult:
    success: bool


@strawberry.input
class PatientCreateInput:
    name: str
    birthdate: date | None = None
    gender: str | None = None
    phone_number: str | None = None
    email: str | None = None
    address: str | None = None


@strawberry.input
class InvoiceFilterInput:
    payment_status: InvoicePaymentStatusEnum | None = None
    patient_id: strawberry.ID | None = None


@strawberry.input
class PaymentInput:
    invoice_id: strawberry.ID
    amount: float
    payment_method: str = "cash"
    payment_date: datetime | None = None
    notes: str | None = None


def _to_patient_type(patient: PatientRead) -> PatientType:
    return PatientType(
        id=strawberry.ID(str(patient.id)),
        organisation_id=strawberry.ID(str(patient.organisation_id)),
        name=patient.name,
        birthdate=patient.birthdate,
        gender=patient.gender,
        phone_number=patient.phone_number,
        email=patient.email,
        address=patient.address,
        created_at=patient.created_at,
    )


def _to_patient_list(response: PatientListResponse) -> PatientListType:
    return PatientListType(items=[_to_patient_type(item) for item in response.items], total=response.total)


def _invoice_fields(invoice: InvoiceRead) -> dict:
    return {
        "id": strawberry.ID(str(invoice.id)),
        "organisation_id": strawberry.ID(str(invoice.organisation_id)),
        "patient_id": strawberry.ID(str(invoice.patient_id)) if invoice.patient_id is not None else None,
        "invoice_number": invoice.invoice_number,
        "invoice_date": invoice.invoice_date,
        "due_date": invoice.due_date,
        "payment_status": invoice.payment_status,
        "total_amount": invoice.total_amount,
        "notes": invoice.notes,
        "created_at": invoice.created_at,
    }


def _to_invoice_type(invoice: InvoiceRead) -> InvoiceType:
    return InvoiceType(**_invoice_fields(invoice))


def _to_invoice_detail(invoice: InvoiceDetail) -> InvoiceDetailType:
    return InvoiceDetailType(
        **_invoice_fields(invoice),
        lines=[
            InvoiceLineType(
                id=strawberry.ID(str(line.id)),
                service_name=line.service_name,
                service_code=line.service_code,
                quantity=line.quantity,
                unit_price=line.unit_price,
                line_total=line.line_total,
            )
            for line in invoice.lines
        ],
        amount_paid=invoice.amount_paid,
        balance_due=invoice.balance_due,
    )


def _to_invoice_list(response: InvoiceListResponse) -> InvoiceListType:
    return InvoiceListType(items=[_to_invoice_type(item) for item in response.items], total=response.total)


def _to_payment_result(response: PaymentRecordResponse) -> PaymentResultType:
    return PaymentResultType(
        payment_id=strawberry.ID(str(response.payment.id)),
        receipt_number=response.payment.receipt_number,
        amount=response.payment.amount,
        invoice_id=strawberry.ID(str(response.invoice_id)),
        payment_status=response.payment_status,
        amount_paid=response.amount_paid,
        balance_due=response.balance_due,
    )


def _build_invoice_filters(filters: InvoiceFilterInput | None) -> InvoiceFilterParams:
    if filters is None:
        return InvoiceFilterParams()
    return InvoiceFilterParams(
        payment_status=filters.payment_status,
        patient_id=int(filters.patient_id) if filters.patient_id is not None else None,
    )


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field(description="Basic service liveness check")
    def health(self) -> HealthCheck:
        return HealthCheck(status="ok")

    @strawberry.field(description="Search patients of the current organisation")
    def patients(
        self,
        info: Info[GraphQLContext, None],
        search: str | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> PatientListType:
        response = _execute_with_service(
            info,
            PatientService,
            lambda service: service.list(search, offset=offset, limit=limit),
        )
        return _to_patient_list(response)

    @strawberry.field(description="Fetch one patient by id")
    def patient(self, info: Info[GraphQLContext, None], patient_id: strawberry.ID) -> PatientType:
        patient = _execute_with_service(info, PatientService, lambda service: service.get(int(patient_id)))
        return _to_patient_type(patient)

    @strawberry.field(description="List invoices with optional filters")
    def invoices(
        self,
        info: Info[GraphQLContext, None],
        filters: InvoiceFilterInput | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> InvoiceListType:
        response = _execute_with_service(
            info,
            InvoiceService,
            lambda service: service.list(_build_invoice_filters(filters), offset=offset, limit=limit),
        )
        return _to_invoice_list(response)

    @strawberry.field(description="Fetch one invoice with its lines and balance")
    def invoice(self, info: Info[GraphQLContext, None], invoice_id: strawberry.ID) -> InvoiceDetailType:
        invoice = _execute_with_service(info, InvoiceService, lambda service: service.get(int(invoice_id)))
        return _to_invoice_detail(invoice)


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(description="Register a patient in the current organisation")
    def create_patient(self, info: Info[GraphQLContext, None], payload: PatientCreateInput) -> PatientType:
        patient = _execute_with_service(
            info,
            PatientService,
            lambda service: service.create(
                PatientCreate(
                    name=payload.name,
                    birthdate=payload.birthdate,
                    gender=payload.gender,
                    phone_number=payload.phone_number,
                    email=payload.email,
                    address=payload.address,
                )
            ),
        )
        return _to_patient_type(patient)

    @strawberry.mutation(description="Record a payment against an invoice")
    def record_payment(self, info: Info[GraphQLContext, None], payload: PaymentInput) -> PaymentResultType:
        response = _execute_with_service(
            info,
            PaymentService,
            lambda service: service.record(
                PaymentCreate(
                    invoice_id=int(payload.invoice_id),
                    amount=payload.amount,
                    payment_method=payload.payment_method,
                    payment_date=payload.payment_date,
                    notes=payload.notes,
                )
            ),
        )
        return _to_payment_result(response)

    @strawberry.mutation(description="Delete an invoice of the current organisation")
    def delete_invoice(self, info: Info[GraphQLContext, None], invoice_id: strawberry.ID) -> SuccessResult:
        _execute_with_service(info, InvoiceService, lambda service: service.delete(int(invoice_id)))
        return SuccessResult(success=True)


schema = strawberry.Schema(query=Query, mutation=Mutation)
