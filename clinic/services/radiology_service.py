"""Radiology exam ordering and results."""
from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime

from sqlalchemy.exc import IntegrityError

from clinic.core.scoping import ScopedClient
from clinic.core.tenant import AccessDeniedError
from clinic.db.base import as_utc
from clinic.db.models import RadiologyOrder, RadiologyOrderStatus, UserRole, VisitStatus
from clinic.repositories.patient import PatientRepository
from clinic.repositories.radiology import RadiologyExamTypeRepository, RadiologyOrderRepository
from clinic.repositories.visit import VisitRepository
from clinic.schemas.radiology import (
    PatientRadiologyOrdersResponse,
    RadiologyCategoryGroup,
    RadiologyExamTypeCreate,
    RadiologyExamTypeRead,
    RadiologyOrderCreate,
    RadiologyOrderRead,
    RadiologyOrderUpdate,
)

from .exceptions import ConflictError, NotFoundError, ValidationError
from .lab_service import UNCATEGORISED
from .periods import utc_now


class RadiologyService:
    """Orders hang off a visit and inherit its patient and doctor."""

    def __init__(self, client: ScopedClient) -> None:
        self.session = client.session
        self.context = client.context
        self.orders = RadiologyOrderRepository(client)
        self.exam_types = RadiologyExamTypeRepository(client.session)
        self.visits = VisitRepository(client)
        self.patients = PatientRepository(client)

    def list_exam_types(self) -> list[RadiologyExamTypeRead]:
        return [RadiologyExamTypeRead.model_validate(row) for row in self.exam_types.list()]

    def register_exam_type(self, payload: RadiologyExamTypeCreate) -> RadiologyExamTypeRead:
        if self.context is not None and self.context.role is not UserRole.ADMIN:
            raise AccessDeniedError("Only administrators can extend the radiology catalogue")
        exam_type = self.exam_types.add(self.exam_types.model(**payload.model_dump()))
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError(f"Radiology exam {payload.name!r} already exists") from exc
        self.session.refresh(exam_type)
        return RadiologyExamTypeRead.model_validate(exam_type)

    def _check_exam_types(self, type_ids: list[int]) -> None:
        known = self.exam_types.get_many(type_ids)
        missing = [type_id for type_id in type_ids if type_id not in known]
        if missing:
            raise ValidationError(f"Unknown radiology exam types: {', '.join(map(str, missing))}")

    def order(
        self, visit_id: int, payload: RadiologyOrderCreate, now: datetime | None = None
    ) -> list[RadiologyOrderRead]:
        visit = self.visits.get(visit_id)
        if visit is None:
            raise NotFoundError("Visit")
        if visit.status is VisitStatus.CANCELLED:
            raise ValidationError("Cannot order exams for a cancelled visit")
        self._check_exam_types([item.exam_type_id for item in payload.orders])

        ordered_at = now or utc_now()
        orders = self.orders.client.create_many(
            RadiologyOrder,
            [
                {
                    "visit_id": visit.id,
                    "patient_id": visit.patient_id,
                    "doctor_id": visit.doctor_id,
                    "exam_type_id": item.exam_type_id,
                    "ordered_at": ordered_at,
                    "status": RadiologyOrderStatus.PENDING,
                    "notes": item.notes,
                }
                for item in payload.orders
            ],
        )
        self.session.commit()
        for order in orders:
            self.session.refresh(order)
        return [RadiologyOrderRead.model_validate(order) for order in orders]

    def update(self, order_id: int, payload: RadiologyOrderUpdate, today: date | None = None) -> RadiologyOrderRead:
        """Apply the fields sent; recording a result completes the order and dates it."""

        changes = payload.model_dump(exclude_unset=True)
        if "exam_type_id" in changes:
            self._check_exam_types([changes["exam_type_id"]])
        if changes.get("result"):
            changes.setdefault("status", RadiologyOrderStatus.COMPLETED)
            if changes.get("result_date") is None:
                changes["result_date"] = today or as_utc(utc_now()).date()
        if self.orders.update(order_id, **changes) == 0:
            raise NotFoundError("Radiology order")
        order = self.orders.get(order_id)
        self.session.commit()
        self.session.refresh(order)
        return RadiologyOrderRead.model_validate(order)

    def delete(self, order_id: int) -> None:
        if self.orders.delete(order_id) == 0:
            raise NotFoundError("Radiology order")
        self.session.commit()

    def visit_orders(self, visit_id: int) -> list[RadiologyOrderRead]:
        if self.visits.get(visit_id) is None:
            raise NotFoundError("Visit")
        return [RadiologyOrderRead.model_validate(order) for order in self.orders.list_for_visit(visit_id)]

    def patient_orders(self, patient_id: int) -> PatientRadiologyOrdersResponse:
        """Return a patient's orders grouped by exam category, categories sorted."""

        if self.patients.get(patient_id) is None:
            raise NotFoundError("Patient")
        grouped: dict[str, list[RadiologyOrderRead]] = defaultdict(list)
        for order in self.orders.list_for_patient(patient_id):
            grouped[order.exam_type.category or UNCATEGORISED].append(RadiologyOrderRead.model_validate(order))
        return PatientRadiologyOrdersResponse(
            patient_id=patient_id,
            categories=[RadiologyCategoryGroup(category=name, orders=grouped[name]) for name in sorted(grouped)],
        )
