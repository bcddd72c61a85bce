"""Tests for :mod:`clinic.services.visit_service`."""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from clinic.db.models import (
    AppointmentStatus,
    Doctor,
    Patient,
    PatientAppointment,
    PatientVisit,
    RadiologyExamType,
    UserRole,
    VisitStatus,
)
from clinic.schemas.radiology import RadiologyOrderCreate, RadiologyOrderItem
from clinic.schemas.visit import VisitCreate, VisitDoctorUpdate
from clinic.services.exceptions import ConflictError, NotFoundError, ValidationError
from clinic.services.radiology_service import RadiologyService
from clinic.services.visit_service import VisitService

MONDAY = datetime(2026, 10, 19, 8, 15, tzinfo=timezone.utc)


@pytest.fixture()
def patient(session, organisation) -> Patient:
    patient = Patient(organisation_id=organisation.id, name="Amina")
    session.add(patient)
    session.commit()
    return patient


@pytest.fixture()
def doctor(session, organisation) -> Doctor:
    doctor = Doctor(organisation_id=organisation.id, name="Dr Ali")
    session.add(doctor)
    session.commit()
    return doctor


@pytest.fixture()
def appointment(session, organisation, patient, doctor) -> PatientAppointment:
    appointment = PatientAppointment(
        organisation_id=organisation.id,
        patient_id=patient.id,
        doctor_id=doctor.id,
        appointment_date=datetime(2026, 10, 15, 9, 0, tzinfo=timezone.utc),
        status=AppointmentStatus.SCHEDULED,
    )
    session.add(appointment)
    session.commit()
    return appointment


def test_visit_from_appointment_inherits_patient_doctor_and_day(
    organisation, patient, doctor, appointment, scoped_client
) -> None:
    service = VisitService(scoped_client(organisation.id, role=UserRole.SECRETARY))

    visit = service.create(VisitCreate(appointment_id=appointment.id))

    assert visit.patient_id == patient.id
    assert visit.doctor_id == doctor.id
    assert visit.visit_date == date(2026, 10, 15)
    assert visit.status is VisitStatus.SCHEDULED
    with pytest.raises(ConflictError):
        service.create(VisitCreate(appointment_id=appointment.id))


def test_visit_rejects_appointment_of_another_patient(session, organisation, appointment, scoped_client) -> None:
    other = Patient(organisation_id=organisation.id, name="Yassine")
    session.add(other)
    session.commit()

    with pytest.raises(ValidationError, match="another patient"):
        VisitService(scoped_client(organisation.id)).create(
            VisitCreate(patient_id=other.id, appointment_id=appointment.id)
        )


def test_foreign_appointment_and_patient_are_invisible(
    other_organisation, patient, appointment, scoped_client
) -> None:
    service = VisitService(scoped_client(other_organisation.id))

    with pytest.raises(ValidationError):
        service.create(VisitCreate(appointment_id=appointment.id))
    with pytest.raises(ValidationError):
        service.create(VisitCreate(patient_id=patient.id))


def test_walk_in_visit_is_dated_on_the_utc_day(organisation, patient, scoped_client) -> None:
    just_after_midnight_local = datetime(2026, 10, 20, 1, 0, tzinfo=timezone(timedelta(hours=2)))

    visit = VisitService(scoped_client(organisation.id)).create(
        VisitCreate(patient_id=patient.id), now=just_after_midnight_local
    )

    assert visit.visit_date == date(2026, 10, 19)
    assert visit.appointment_id is None
    assert visit.doctor_id is None


def test_visit_lifecycle_completes_its_appointment(session, organisation, appointment, scoped_client) -> None:
    service = VisitService(scoped_client(organisation.id, role=UserRole.DOCTOR))
    visit = service.create(VisitCreate(appointment_id=appointment.id))

    started = service.start(visit.id, now=MONDAY)
    assert started.status is VisitStatus.IN_PROGRESS
    assert started.start_time == "08:15"
    with pytest.raises(ValidationError):
        service.start(visit.id, now=MONDAY)

    completed = service.complete(visit.id, now=MONDAY + timedelta(minutes=25))
    assert completed.status is VisitStatus.COMPLETED
    assert completed.end_time == "08:40"
    session.refresh(appointment)
    assert appointment.status is AppointmentStatus.COMPLETED

    with pytest.raises(ValidationError):
        service.cancel(visit.id)


def test_complete_requires_started_visit(organisation, patient, scoped_client) -> None:
    service = VisitService(scoped_client(organisation.id))
    visit = service.create(VisitCreate(patient_id=patient.id))

    with pytest.raises(ValidationError, match="scheduled"):
        service.complete(visit.id)

    assert service.cancel(visit.id).status is VisitStatus.CANCELLED


def test_transitions_on_foreign_visit_not_found(organisation, other_organisation, patient, scoped_client) -> None:
    visit = VisitService(scoped_client(organisation.id)).create(VisitCreate(patient_id=patient.id))
    foreign = VisitService(scoped_client(other_organisation.id))

    with pytest.raises(NotFoundError):
        foreign.get(visit.id)
    with pytest.raises(NotFoundError):
        foreign.start(visit.id)
    with pytest.raises(NotFoundError):
        foreign.cancel(visit.id)


def test_assign_doctor_checks_visibility(
    session, organisation, other_organisation, patient, doctor, scoped_client
) -> None:
    foreign_doctor = Doctor(organisation_id=other_organisation.id, name="Dr Beta")
    session.add(foreign_doctor)
    session.commit()
    service = VisitService(scoped_client(organisation.id))
    visit = service.create(VisitCreate(patient_id=patient.id))

    with pytest.raises(ValidationError):
        service.assign_doctor(visit.id, VisitDoctorUpdate(doctor_id=foreign_doctor.id))

    assert service.assign_doctor(visit.id, VisitDoctorUpdate(doctor_id=doctor.id)).doctor_id == doctor.id


def test_by_appointments_maps_only_visited_appointments(
    session, organisation, other_organisation, patient, appointment, scoped_client
) -> None:
    unvisited = PatientAppointment(
        organisation_id=organisation.id,
        patient_id=patient.id,
        appointment_date=datetime(2026, 10, 16, 9, 0, tzinfo=timezone.utc),
    )
    session.add(unvisited)
    session.commit()
    service = VisitService(scoped_client(organisation.id))
    visit = service.create(VisitCreate(appointment_id=appointment.id))

    mapping = service.by_appointments([appointment.id, unvisited.id])

    assert list(mapping) == [appointment.id]
    assert mapping[appointment.id].id == visit.id
    assert service.by_appointments([]) == {}
    assert VisitService(scoped_client(other_organisation.id)).by_appointments([appointment.id]) == {}


def test_days_distribution_counts_last_thirty_days_sunday_first(
    session, organisation, other_organisation, patient, scoped_client
) -> None:
    foreign_patient = Patient(organisation_id=other_organisation.id, name="Omar")
    session.add(foreign_patient)
    session.flush()
    for owner, patient_id, visit_date in (
        (organisation.id, patient.id, date(2026, 10, 18)),
        (organisation.id, patient.id, date(2026, 10, 18)),
        (organisation.id, patient.id, date(2026, 10, 14)),
        (organisation.id, patient.id, date(2026, 9, 1)),
        (other_organisation.id, foreign_patient.id, date(2026, 10, 18)),
    ):
        session.add(PatientVisit(organisation_id=owner, patient_id=patient_id, visit_date=visit_date))
    session.commit()

    distribution = VisitService(scoped_client(organisation.id)).days_distribution(now=MONDAY)

    assert [entry.day for entry in distribution] == [
        "sunday",
        "monday",
        "tuesday",
        "wednesday",
        "thursday",
        "friday",
        "saturday",
    ]
    assert {entry.day: entry.count for entry in distribution if entry.count} == {"sunday": 2, "wednesday": 1}


def test_get_includes_radiology_orders(session, organisation, patient, scoped_client) -> None:
    exam = RadiologyExamType(name="Chest X-ray", category="X-ray")
    session.add(exam)
    session.commit()
    client = scoped_client(organisation.id)
    visit = VisitService(client).create(VisitCreate(patient_id=patient.id))
    RadiologyService(client).order(visit.id, RadiologyOrderCreate(orders=[RadiologyOrderItem(exam_type_id=exam.id)]))

    detail = VisitService(client).get(visit.id)

    assert detail.id == visit.id
    assert [order.exam_type.name for order in detail.radiology_orders] == ["Chest X-ray"]
