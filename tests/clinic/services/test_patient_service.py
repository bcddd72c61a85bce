"""Tests for :mod:`clinic.services.patient_service`."""
from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from clinic.schemas.patient import PatientCreate, PatientUpdate
from clinic.services.exceptions import NotFoundError
from clinic.services.patient_service import PatientService


def test_patient_lifecycle(organisation, scoped_client) -> None:
    service = PatientService(scoped_client(organisation.id))

    created = service.create(PatientCreate(name="Amina", email="amina@example.test"))
    assert created.organisation_id == organisation.id

    updated = service.update(created.id, PatientUpdate(phone_number="0600000000"))
    assert updated.phone_number == "0600000000"
    assert updated.email == "amina@example.test"

    listing = service.list("amina")
    assert listing.total == 1

    service.delete(created.id)
    with pytest.raises(NotFoundError):
        service.get(created.id)


def test_other_tenant_sees_not_found(organisation, other_organisation, scoped_client) -> None:
    created = PatientService(scoped_client(organisation.id)).create(PatientCreate(name="Amina"))
    foreign = PatientService(scoped_client(other_organisation.id))

    with pytest.raises(NotFoundError):
        foreign.get(created.id)
    with pytest.raises(NotFoundError):
        foreign.update(created.id, PatientUpdate(name="Hijack"))
    with pytest.raises(NotFoundError):
        foreign.delete(created.id)
    assert foreign.list().total == 0


def test_update_rejects_null_name() -> None:
    with pytest.raises(PydanticValidationError, match="name cannot be null"):
        PatientUpdate(name=None)

    assert PatientUpdate(email=None).model_dump(exclude_unset=True) == {"email": None}
