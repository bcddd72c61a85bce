"""Tests for :mod:`clinic.services.doctor_service`."""
from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from clinic.core.tenant import AccessDeniedError
from clinic.db.models import DoctorStatus, UserRole
from clinic.schemas.doctor import DoctorCreate, DoctorUpdate
from clinic.services.doctor_service import DoctorService


def test_list_defaults_to_enabled_doctors_by_name(organisation, scoped_client) -> None:
    service = DoctorService(scoped_client(organisation.id, role=UserRole.CABINET_MANAGER))
    service.create(DoctorCreate(name="Dr Zineb"))
    service.create(DoctorCreate(name="Dr Ali"))
    service.create(DoctorCreate(name="Dr Off", status=DoctorStatus.DISABLED))

    assert [d.name for d in service.list()] == ["Dr Ali", "Dr Zineb"]
    assert [d.name for d in service.list(status=DoctorStatus.DISABLED)] == ["Dr Off"]
    assert len(service.list(include_disabled=True)) == 3


def test_only_managers_can_change_doctors(organisation, scoped_client) -> None:
    manager = DoctorService(scoped_client(organisation.id, role=UserRole.CABINET_MANAGER))
    doctor = manager.create(DoctorCreate(name="Dr Ali"))
    secretary = DoctorService(scoped_client(organisation.id, role=UserRole.SECRETARY))

    with pytest.raises(AccessDeniedError):
        secretary.create(DoctorCreate(name="Dr New"))
    with pytest.raises(AccessDeniedError):
        secretary.update(doctor.id, DoctorUpdate(specialty="Cardiology"))
    with pytest.raises(AccessDeniedError):
        secretary.delete(doctor.id)

    assert secretary.get(doctor.id).name == "Dr Ali"
    assert manager.update(doctor.id, DoctorUpdate(specialty="Cardiology")).specialty == "Cardiology"


@pytest.mark.parametrize("field", ["name", "status"])
def test_update_rejects_null_for_required_fields(field: str) -> None:
    with pytest.raises(PydanticValidationError, match=f"{field} cannot be null"):
        DoctorUpdate(**{field: None})
