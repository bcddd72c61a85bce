"""Unit tests for the invoices endpoint."""
from __future__ import annotations

from collections.abc import Generator
from datetime import date, datetime, timezone
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from clinic.api.dependencies import get_invoice_service
from clinic.api.endpoints.invoices import router
from clinic.db.models import InvoicePaymentStatus
from clinic.schemas.invoice import (
    InvoiceCreate,
    InvoiceDetail,
    InvoiceFilterParams,
    InvoiceListResponse,
    InvoiceRead,
    InvoiceUpdate,
)
from clinic.services.exceptions import NotFoundError, ValidationError


class ServiceStub:
    def __init__(self) -> None:
        self.create_calls: list[InvoiceCreate] = []
        self.create_return: InvoiceDetail | None = None
        self.create_exception: Exception | None = None

        self.list_calls: list[tuple[InvoiceFilterParams, int, int]] = []
        self.list_return = InvoiceListResponse(items=[], total=0)

        self.update_calls: list[tuple[int, InvoiceUpdate]] = []
        self.update_return: InvoiceDetail | None = None

        self.delete_calls: list[int] = []
        self.delete_exception: Exception | None = None

    def create(self, payload: InvoiceCreate) -> InvoiceDetail:
        self.create_calls.append(payload)
        if self.create_exception:
            raise self.create_exception
        assert self.create_return is not None
        return self.create_return

    def list(self, filters: InvoiceFilterParams, *, offset: int, limit: int) -> InvoiceListResponse:
        self.list_calls.append((filters, offset, limit))
        return self.list_return

    def get(self, invoice_id: int) -> InvoiceDetail:
        raise NotFoundError("Invoice")

    def update(self, invoice_id: int, payload: InvoiceUpdate) -> InvoiceDetail:
        self.update_calls.append((invoice_id, payload))
        assert self.update_return is not None
        return self.update_return

    def delete(self, invoice_id: int) -> None:
        self.delete_calls.append(invoice_id)
        if self.delete_exception:
            raise self.delete_exception


@pytest.fixture()
def api_client() -> Generator[tuple[TestClient, FastAPI], None, None]:
    app = FastAPI()
    app.include_router(router)
    with TestClient(app) as client:
        yield client, app
        app.dependency_overrides.clear()


def make_invoice_read(**overrides: Any) -> InvoiceRead:
    base: dict[str, Any] = {
        "id": 1,
        "organisation_id": 7,
        "patient_id": 3,
        "invoice_number": "INV-00001",
        "invoice_date": date(2026, 10, 1),
        "due_date": None,
        "payment_status": InvoicePaymentStatus.PENDING,
        "total_amount": 300.0,
        "notes": None,
        "created_at": datetime(2026, 10, 1, tzinfo=timezone.utc),
    }
    base.update(overrides)
    return InvoiceRead(**base)


def make_invoice_detail(**overrides: Any) -> InvoiceDetail:
    return InvoiceDetail(
        **make_invoice_read(**overrides).model_dump(),
        lines=[],
        amount_paid=0.0,
        balance_due=300.0,
    )


def test_create_invoice_returns_detail(api_client: tuple[TestClient, FastAPI]) -> None:
    client, app = api_client
    service = ServiceStub()
    service.create_return = make_invoice_detail()
    app.dependency_overrides[get_invoice_service] = lambda: service

    response = client.post(
        "/invoices",
        json={"patient_id": 3, "lines": [{"service_name": "Consultation", "unit_price": 300}]},
    )

    assert response.status_code == 201
    (payload,) = service.create_calls
    assert payload.lines[0].service_name == "Consultation"
    body = response.json()
    assert body["invoice_number"] == "INV-00001"
    assert body["payment_status"] == "pending"
    assert body["balance_due"] == 300.0


def test_create_invoice_requires_lines(api_client: tuple[TestClient, FastAPI]) -> None:
    client, app = api_client
    service = ServiceStub()
    app.dependency_overrides[get_invoice_service] = lambda: service

    response = client.post("/invoices", json={"patient_id": 3, "lines": []})

    assert response.status_code == 422
    assert service.create_calls == []


def test_create_invoice_maps_validation_errors(api_client: tuple[TestClient, FastAPI]) -> None:
    client, app = api_client
    service = ServiceStub()
    service.create_exception = ValidationError("Patient 3 does not exist")
    app.dependency_overrides[get_invoice_service] = lambda: service

    response = client.post("/invoices", json={"patient_id": 3, "lines": [{"service_name": "X", "unit_price": 1}]})

    assert response.status_code == 400
    assert response.json() == {"detail": "Patient 3 does not exist"}


def test_list_invoices_passes_filters_and_pagination(api_client: tuple[TestClient, FastAPI]) -> None:
    client, app = api_client
    service = ServiceStub()
    service.list_return = InvoiceListResponse(items=[make_invoice_read(id=2)], total=1)
    app.dependency_overrides[get_invoice_service] = lambda: service

    response = client.get(
        "/invoices",
        params={"payment_status": "partial", "patient_id": 3, "offset": 5, "limit": 10},
    )

    assert response.status_code == 200
    filters, offset, limit = service.list_calls[0]
    assert filters.payment_status is InvoicePaymentStatus.PARTIAL
    assert filters.patient_id == 3
    assert (offset, limit) == (5, 10)
    assert response.json()["items"][0]["id"] == 2


def test_get_invoice_maps_not_found(api_client: tuple[TestClient, FastAPI]) -> None:
    client, app = api_client
    app.dependency_overrides[get_invoice_service] = ServiceStub

    response = client.get("/invoices/99")

    assert response.status_code == 404
    assert response.json() == {"detail": "Invoice not found"}


def test_update_invoice_forwards_payload(api_client: tuple[TestClient, FastAPI]) -> None:
    client, app = api_client
    service = ServiceStub()
    service.update_return = make_invoice_detail(notes="Adjusted")
    app.dependency_overrides[get_invoice_service] = lambda: service

    response = client.patch("/invoices/1", json={"notes": "Adjusted"})

    assert response.status_code == 200
    invoice_id, payload = service.update_calls[0]
    assert invoice_id == 1
    assert payload.model_dump(exclude_unset=True) == {"notes": "Adjusted"}


def test_delete_invoice_returns_no_content(api_client: tuple[TestClient, FastAPI]) -> None:
    client, app = api_client
    service = ServiceStub()
    app.dependency_overrides[get_invoice_service] = lambda: service

    response = client.delete("/invoices/12")

    assert response.status_code == 204
    assert service.delete_calls == [12]


def test_delete_invoice_maps_not_found(api_client: tuple[TestClient, FastAPI]) -> None:
    client, app = api_client
    service = ServiceStub()
    service.delete_exception = NotFoundError("Invoice")
    app.dependency_overrides[get_invoice_service] = lambda: service

    response = client.delete("/invoices/404")

    assert response.status_code == 404
