"""Lab test ordering and results."""
from __future__ import annotations

from collections import defaultdict
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from clinic.core.scoping import ScopedClient
from clinic.core.tenant import AccessDeniedError
from clinic.db.models import LabOrderStatus, LabTestOrder, UserRole
from clinic.repositories.doctor import DoctorRepository
from clinic.repositories.lab import LabTestOrderRepository, LabTestTypeRepository
from clinic.repositories.patient import PatientRepository
from clinic.schemas.lab import (
    LabCategoryGroup,
    LabOrderCreate,
    LabOrderRead,
    LabResultUpdate,
    LabTestTypeCreate,
    LabTestTypeRead,
    PatientLabOrdersResponse,
)

from .exceptions import ConflictError, NotFoundError, ValidationError
from .periods import utc_now

UNCATEGORISED = "Uncategorised"


class LabService:
    """Orders are tenant-scoped; the test type catalogue is shared."""

    def __init__(self, client: ScopedClient) -> None:
        self.session = client.session
        self.context = client.context
        self.orders = LabTestOrderRepository(client)
        self.test_types = LabTestTypeRepository(client.session)
        self.patients = PatientRepository(client)
        self.doctors = DoctorRepository(client)

    def list_test_types(self) -> list[LabTestTypeRead]:
        return [LabTestTypeRead.model_validate(row) for row in self.test_types.list(limit=1000)]

    def register_test_type(self, payload: LabTestTypeCreate) -> LabTestTypeRead:
        if self.context is not None and self.context.role is not UserRole.ADMIN:
            raise AccessDeniedError("Only administrators can extend the lab test catalogue")
        test_type = self.test_types.add(self.test_types.model(**payload.model_dump()))
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError(f"Lab test {payload.name!r} already exists") from exc
        self.session.refresh(test_type)
        return LabTestTypeRead.model_validate(test_type)

    def order(self, payload: LabOrderCreate, now: datetime | None = None) -> list[LabOrderRead]:
        if self.patients.get(payload.patient_id) is None:
            raise ValidationError(f"Patient {payload.patient_id} does not exist")
        if payload.doctor_id is not None and self.doctors.get(payload.doctor_id) is None:
            raise ValidationError(f"Doctor {payload.doctor_id} does not exist")
        known = self.test_types.get_many(payload.test_type_ids)
        missing = [type_id for type_id in payload.test_type_ids if type_id not in known]
        if missing:
            raise ValidationError(f"Unknown lab test types: {', '.join(map(str, missing))}")

        ordered_at = now or utc_now()
        orders = self.orders.client.create_many(
            LabTestOrder,
            [
                {
                    "patient_id": payload.patient_id,
                    "doctor_id": payload.doctor_id,
                    "test_type_id": type_id,
                    "ordered_at": ordered_at,
                    "status": LabOrderStatus.PENDING,
                    "result_unit": known[type_id].default_unit,
                    "reference_range": known[type_id].default_reference_range,
                    "notes": payload.notes,
                }
                for type_id in payload.test_type_ids
            ],
        )
        self.session.commit()
        for order in orders:
            self.session.refresh(order)
        return [LabOrderRead.model_validate(order) for order in orders]

    def record_result(self, order_id: int, payload: LabResultUpdate) -> LabOrderRead:
        changes = payload.model_dump(exclude_none=True)
        changes["status"] = LabOrderStatus.COMPLETED
        if self.orders.update(order_id, **changes) == 0:
            raise NotFoundError("Lab order")
        order = self.orders.get(order_id)
        self.session.commit()
        self.session.refresh(order)
        return LabOrderRead.model_validate(order)

    def patient_orders(self, patient_id: int) -> PatientLabOrdersResponse:
        """Return a patient's orders grouped by test category, categories sorted."""

        if self.patients.get(patient_id) is None:
            raise NotFoundError("Patient")
        grouped: dict[str, list[LabOrderRead]] = defaultdict(list)
        for order in self.orders.list_for_patient(patient_id):
            category = order.test_type.category or UNCATEGORISED
            grouped[category].append(LabOrderRead.model_validate(order))
        return PatientLabOrdersResponse(
            patient_id=patient_id,
            categories=[LabCategoryGroup(category=name, orders=grouped[name]) for name in sorted(grouped)],
        )
