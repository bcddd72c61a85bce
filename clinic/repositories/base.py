"""Repository abstractions for database access."""
from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from clinic.core.scoping import ScopedClient, Where
from clinic.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """Plain repository for platform tables outside tenant isolation."""

    model: type[ModelT]

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, instance: ModelT) -> ModelT:
        self.session.add(instance)
        return instance

    def get(self, obj_id: int) -> ModelT | None:
        return self.session.get(self.model, obj_id)

    def list(self, offset: int = 0, limit: int = 100) -> Sequence[ModelT]:
        statement = self._base_query().offset(offset).limit(limit)
        return self.session.scalars(statement).all()

    def delete(self, instance: ModelT) -> None:
        self.session.delete(instance)

    def _base_query(self) -> Select[tuple[ModelT]]:
        return select(self.model).order_by(self.model.id)  # type: ignore[attr-defined]


class TenantScopedRepository(Generic[ModelT]):
    """Repository whose every statement goes through the scoped client."""

    model: type[ModelT]
    default_order: tuple[Any, ...] = ()

    def __init__(self, client: ScopedClient) -> None:
        self.client = client

    @property
    def session(self) -> Session:
        return self.client.session

    def get(self, obj_id: int) -> ModelT | None:
        return self.client.find_unique(self.model, obj_id)

    def list(
        self,
        where: Where = None,
        offset: int = 0,
        limit: int | None = 100,
        order_by: Sequence[Any] | None = None,
    ) -> list[ModelT]:
        return self.client.find_many(
            self.model,
            where,
            order_by=self.default_order if order_by is None else order_by,
            offset=offset,
            limit=limit,
        )

    def first(self, where: Where = None) -> ModelT | None:
        return self.client.find_first(self.model, where, order_by=self.default_order)

    def count(self, where: Where = None) -> int:
        return self.client.count(self.model, where)

    def create(self, **data: Any) -> ModelT:
        return self.client.create(self.model, data)

    def update(self, obj_id: int, **data: Any) -> int:
        return self.client.update(self.model, {"id": obj_id}, data)

    def delete(self, obj_id: int) -> int:
        return self.client.delete(self.model, {"id": obj_id})
