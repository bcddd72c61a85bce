"""Tests for prescriptions and the service catalogue."""
from __future__ import annotations

import pytest

from clinic.db.models import Patient
from clinic.schemas.catalog import ServiceCreate
from clinic.schemas.prescription import PrescriptionCreate, PrescriptionItem
from clinic.services.catalog_service import CatalogService
from clinic.services.exceptions import ConflictError, NotFoundError, ValidationError
from clinic.services.prescription_service import PrescriptionService


@pytest.fixture()
def patient(session, organisation) -> Patient:
    patient = Patient(organisation_id=organisation.id, name="Amina")
    session.add(patient)
    session.commit()
    return patient


def test_prescription_requires_items(organisation, patient, scoped_client) -> None:
    with pytest.raises(ValidationError):
        PrescriptionService(scoped_client(organisation.id)).create(PrescriptionCreate(patient_id=patient.id, items=[]))


def test_prescriptions_listed_for_visible_patient(organisation, other_organisation, patient, scoped_client) -> None:
    service = PrescriptionService(scoped_client(organisation.id))
    created = service.create(
        PrescriptionCreate(
            patient_id=patient.id,
            items=[PrescriptionItem(drug="Amoxicillin", dosage="500mg", frequency="3/day", duration="7 days")],
        )
    )

    assert created.items[0].drug == "Amoxicillin"
    assert [p.id for p in service.list_for_patient(patient.id)] == [created.id]
    with pytest.raises(NotFoundError):
        PrescriptionService(scoped_client(other_organisation.id)).list_for_patient(patient.id)
    with pytest.raises(NotFoundError):
        PrescriptionService(scoped_client(other_organisation.id)).get(created.id)


def test_service_codes_unique_per_organisation(organisation, other_organisation, scoped_client) -> None:
    payload = ServiceCreate(code="cons", name="Consultation", amount=300)
    ours = CatalogService(scoped_client(organisation.id))

    created = ours.create(payload)
    assert created.code == "CONS"
    with pytest.raises(ConflictError):
        ours.create(payload)

    assert CatalogService(scoped_client(other_organisation.id)).create(payload).code == "CONS"
    assert [s.code for s in ours.list()] == ["CONS"]
