"""Tests for the Strawberry GraphQL schema resolvers."""
from __future__ import annotations

from collections.abc import Callable

import pytest
from sqlalchemy.orm import Session, sessionmaker

from clinic.core.tenant import TenantContext
from clinic.db.models import UserRole
from clinic.graphql.context import GraphQLContext
from clinic.graphql.schema import schema
from clinic.schemas.invoice import InvoiceCreate, InvoiceLineCreate
from clinic.services.invoice_service import InvoiceService

INVOICE_QUERY = """
query Invoice($id: ID!) {
  invoice(invoiceId: $id) { id invoiceNumber paymentStatus totalAmount balanceDue lines { serviceName } }
}
"""

RECORD_PAYMENT = """
mutation Pay($id: ID!, $amount: Float!) {
  recordPayment(payload: {invoiceId: $id, amount: $amount, paymentMethod: "card"}) {
    paymentStatus amountPaid balanceDue receiptNumber
  }
}
"""


@pytest.fixture()
def graphql_context(engine) -> Callable[..., GraphQLContext]:
    factory = sessionmaker(bind=engine, class_=Session, autoflush=False, autocommit=False)

    def _build(organisation_id: int | None, role: UserRole = UserRole.ADMIN) -> GraphQLContext:
        return GraphQLContext(
            tenant=TenantContext(organisation_id=organisation_id, role=role),
            session_factory=factory,
        )

    return _build


@pytest.fixture()
def invoice_id(organisation, scoped_client) -> int:
    invoice = InvoiceService(scoped_client(organisation.id)).create(
        InvoiceCreate(lines=[InvoiceLineCreate(service_name="Consultation", unit_price=100)])
    )
    return invoice.id


def test_health_query(graphql_context) -> None:
    result = schema.execute_sync("{ health { status } }", context_value=graphql_context(None))

    assert result.errors is None
    assert result.data == {"health": {"status": "ok"}}


def test_create_and_search_patients(organisation, other_organisation, graphql_context) -> None:
    ours = graphql_context(organisation.id)

    created = schema.execute_sync(
        'mutation { createPatient(payload: {name: "Amina", phoneNumber: "0600"}) { id organisationId name } }',
        context_value=ours,
    )
    assert created.errors is None
    assert created.data["createPatient"]["organisationId"] == str(organisation.id)

    listing = schema.execute_sync('{ patients(search: "ami") { total items { name } } }', context_value=ours)
    assert listing.data == {"patients": {"total": 1, "items": [{"name": "Amina"}]}}

    foreign = schema.execute_sync("{ patients { total } }", context_value=graphql_context(other_organisation.id))
    assert foreign.data == {"patients": {"total": 0}}


def test_foreign_invoice_is_not_found(other_organisation, invoice_id, graphql_context) -> None:
    result = schema.execute_sync(
        INVOICE_QUERY,
        variable_values={"id": str(invoice_id)},
        context_value=graphql_context(other_organisation.id),
    )

    assert result.data is None
    assert result.errors[0].message == "Invoice not found"


def test_record_payment_updates_invoice(organisation, invoice_id, graphql_context) -> None:
    context = graphql_context(organisation.id)

    paid = schema.execute_sync(RECORD_PAYMENT, variable_values={"id": str(invoice_id), "amount": 40}, context_value=context)

    assert paid.errors is None
    assert paid.data["recordPayment"]["paymentStatus"] == "PARTIAL"
    assert paid.data["recordPayment"]["balanceDue"] == 60.0
    assert paid.data["recordPayment"]["receiptNumber"].startswith("RCPT-")

    detail = schema.execute_sync(INVOICE_QUERY, variable_values={"id": str(invoice_id)}, context_value=context)
    assert detail.data["invoice"]["paymentStatus"] == "PARTIAL"
    assert detail.data["invoice"]["lines"] == [{"serviceName": "Consultation"}]


def test_overpayment_is_reported_as_error(organisation, invoice_id, graphql_context) -> None:
    result = schema.execute_sync(
        RECORD_PAYMENT,
        variable_values={"id": str(invoice_id), "amount": 150},
        context_value=graphql_context(organisation.id),
    )

    assert result.data is None
    assert "remaining balance" in result.errors[0].message


def test_delete_invoice_only_within_organisation(organisation, other_organisation, invoice_id, graphql_context) -> None:
    mutation = "mutation Delete($id: ID!) { deleteInvoice(invoiceId: $id) { success } }"

    foreign = schema.execute_sync(
        mutation, variable_values={"id": str(invoice_id)}, context_value=graphql_context(other_organisation.id)
    )
    assert foreign.errors[0].message == "Invoice not found"

    ours = schema.execute_sync(
        mutation, variable_values={"id": str(invoice_id)}, context_value=graphql_context(organisation.id)
    )
    assert ours.data == {"deleteInvoice": {"success": True}}
