"""Tenant-scoping data-access client wrapped around a SQLAlchemy session.

Every read and write issued through :class:`ScopedClient` against a model that
declares ``__tenant_scope__`` is constrained to the caller's organisation:

* reads (many/first/count/sum) AND ``organisation_id = <context>`` into the filter;
* unique lookups run unfiltered and discard a foreign-organisation result;
* creates force ``organisation_id`` onto the payload;
* updates and deletes only ever match same-organisation rows.

Cross-organisation access is never reported as an error: it narrows to an empty
result, ``None`` or zero affected rows. A ``None`` context is the system context
and passes through untouched.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, TypeVar, Union

from sqlalchemy import ColumnElement, func, inspect as sa_inspect, select
from sqlalchemy.orm import Session

from clinic.db.base import Base
from clinic.db.models import TenantScopedModel, User, UserRole

from .access import WriteOperation, authorize_user_account_write, authorize_write
from .tenant import TenantContext, TenantContextRequiredError

logger = logging.getLogger(__name__)

ORGANISATION_COLUMN = "organisation_id"

ModelT = TypeVar("ModelT", bound=Base)


class Operation(str, Enum):
    """Data operations understood by the scoped client."""

    FIND_MANY = "find_many"
    FIND_FIRST = "find_first"
    FIND_UNIQUE = "find_unique"
    COUNT = "count"
    SUM = "sum"
    CREATE = "create"
    CREATE_MANY = "create_many"
    UPDATE = "update"
    DELETE = "delete"
    UPSERT = "upsert"


class InvalidFilterError(ValueError):
    """Raised when a filter names an unknown column or contradicts itself."""


@dataclass(frozen=True, slots=True)
class Filter:
    """Immutable AND-combination of column equalities and boolean clauses."""

    equals: Mapping[str, Any] = field(default_factory=dict)
    clauses: tuple[ColumnElement[bool], ...] = ()

    @classmethod
    def of(cls, where: "Where") -> "Filter":
        if where is None:
            return cls()
        if isinstance(where, Filter):
            return where
        if isinstance(where, Mapping):
            return cls(equals=dict(where))
        if isinstance(where, ColumnElement):
            return cls(clauses=(where,))
        return cls(clauses=tuple(where))

    def and_(self, *clauses: ColumnElement[bool], **equals: Any) -> "Filter":
        """Return a narrower filter; re-binding a column to another value is rejected."""

        for name, value in equals.items():
            if name in self.equals and self.equals[name] != value:
                raise InvalidFilterError(
                    f"Conflicting constraints on {name!r}: {self.equals[name]!r} and {value!r}"
                )
        return Filter(equals={**self.equals, **equals}, clauses=self.clauses + clauses)

    def scoped_to(self, organisation_id: int) -> "Filter":
        """Bind ``organisation_id``; the context value replaces any caller value."""

        requested = self.equals.get(ORGANISATION_COLUMN, organisation_id)
        if requested != organisation_id:
            logger.warning(
                "Filter organisation_id=%s replaced by context organisation %s", requested, organisation_id
            )
        return Filter(equals={**self.equals, ORGANISATION_COLUMN: organisation_id}, clauses=self.clauses)

    def criteria(self, model: type[Base]) -> list[ColumnElement[bool]]:
        criteria: list[ColumnElement[bool]] = []
        for name, value in self.equals.items():
            column = getattr(model, _require_column(model, name))
            criteria.append(column.is_(None) if value is None else column == value)
        criteria.extend(self.clauses)
        return criteria


Where = Union[Filter, Mapping[str, Any], ColumnElement[bool], Sequence[ColumnElement[bool]], None]


def tenant_scope_of(model: type[Base]) -> TenantScopedModel | None:
    tag = getattr(model, "__tenant_scope__", None)
    return tag if isinstance(tag, TenantScopedModel) else None


def _require_column(model: type[Base], name: str) -> str:
    if name not in sa_inspect(model).columns.keys():
        raise InvalidFilterError(f"{model.__name__} has no column {name!r}")
    return name


class ScopedClient:
    """Per-request data-access client enforcing organisation isolation."""

    def __init__(self, session: Session, context: TenantContext | None, *, strict: bool = False) -> None:
        self.session = session
        self.context = context
        self.strict = strict

    # -- scope resolution -------------------------------------------------

    def scope_for(self, model: type[Base]) -> int | None:
        """Return the organisation to enforce for ``model``, or ``None`` to pass through."""

        tag = tenant_scope_of(model)
        if tag is None:
            return None
        if self.context is None:
            logger.debug("System context: %s passes through unscoped", tag.value)
            return None
        if self.context.organisation_id is None:
            if self.strict:
                raise TenantContextRequiredError(f"Organisation required to access {tag.value} records")
            logger.debug("Context without organisation: %s passes through unscoped", tag.value)
            return None
        return self.context.organisation_id

    def _criteria(self, model: type[Base], where: Where, operation: Operation) -> list[ColumnElement[bool]]:
        scoped = Filter.of(where)
        organisation_id = self.scope_for(model)
        if organisation_id is not None:
            scoped = scoped.scoped_to(organisation_id)
            logger.debug("Scoped %s on %s to organisation %s", operation.value, model.__tablename__, organisation_id)
        return scoped.criteria(model)

    def _payload(self, model: type[Base], data: Mapping[str, Any], operation: Operation) -> dict[str, Any]:
        payload = dict(data)
        organisation_id = self.scope_for(model)
        if organisation_id is None:
            return payload
        requested = payload.get(ORGANISATION_COLUMN, organisation_id)
        if requested != organisation_id:
            logger.warning(
                "%s payload organisation_id=%s on %s replaced by context organisation %s",
                operation.value,
                requested,
                model.__tablename__,
                organisation_id,
            )
        payload[ORGANISATION_COLUMN] = organisation_id
        return payload

    def _authorize(
        self,
        model: type[Base],
        operation: WriteOperation,
        *,
        data: Mapping[str, Any] | None = None,
        targets: Iterable[Base] = (),
    ) -> None:
        authorize_write(self.context, model.__tablename__, operation)
        if model is User:
            new_role = (data or {}).get("role")
            authorize_user_account_write(
                self.context,
                operation,
                new_role=UserRole(new_role) if new_role is not None else None,
                existing_roles=[getattr(target, "role", None) for target in targets],
            )

    # -- reads ------------------------------------------------------------

    def find_many(
        self,
        model: type[ModelT],
        where: Where = None,
        *,
        order_by: Sequence[Any] = (),
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[ModelT]:
        return self._rows(model, where, Operation.FIND_MANY, order_by=order_by, offset=offset, limit=limit)

    def _rows(
        self,
        model: type[ModelT],
        where: Where,
        operation: Operation,
        *,
        order_by: Sequence[Any] = (),
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[ModelT]:
        statement = select(model).where(*self._criteria(model, where, operation))
        statement = statement.order_by(*order_by) if order_by else statement.order_by(*sa_inspect(model).primary_key)
        if offset:
            statement = statement.offset(offset)
        if limit is not None:
            statement = statement.limit(limit)
        return list(self.session.scalars(statement).all())

    def find_first(self, model: type[ModelT], where: Where = None, *, order_by: Sequence[Any] = ()) -> ModelT | None:
        rows = self._rows(model, where, Operation.FIND_FIRST, order_by=order_by, limit=1)
        return rows[0] if rows else None

    def find_unique(self, model: type[ModelT], key: Any) -> ModelT | None:
        """Look up one record by primary key or a mapping of unique columns.

        The lookup itself is not pre-filtered because unique constraints are
        store-wide; a record owned by another organisation is discarded after
        retrieval.
        """

        if isinstance(key, Mapping):
            statement = select(model).where(*Filter.of(key).criteria(model))
            record = self.session.scalars(statement).one_or_none()
        else:
            record = self.session.get(model, key)
        if record is None:
            return None
        organisation_id = self.scope_for(model)
        if organisation_id is not None and getattr(record, ORGANISATION_COLUMN) != organisation_id:
            logger.warning(
                "Suppressed %s on %s outside context organisation %s",
                Operation.FIND_UNIQUE.value,
                model.__tablename__,
                organisation_id,
            )
            return None
        return record

    def count(self, model: type[Base], where: Where = None) -> int:
        statement = select(func.count()).select_from(model).where(*self._criteria(model, where, Operation.COUNT))
        return int(self.session.scalar(statement) or 0)

    def sum(self, model: type[Base], column: str, where: Where = None) -> Decimal:
        target = getattr(model, _require_column(model, column))
        statement = select(func.coalesce(func.sum(target), 0)).select_from(model).where(
            *self._criteria(model, where, Operation.SUM)
        )
        return Decimal(str(self.session.scalar(statement) or 0))

    # -- writes -----------------------------------------------------------

    def create(self, model: type[ModelT], data: Mapping[str, Any]) -> ModelT:
        self._authorize(model, WriteOperation.CREATE, data=data)
        instance = model(**self._payload(model, data, Operation.CREATE))
        self.session.add(instance)
        self.session.flush()
        return instance

    def create_many(self, model: type[ModelT], rows: Iterable[Mapping[str, Any]]) -> list[ModelT]:
        payloads = [dict(row) for row in rows]
        for payload in payloads:
            self._authorize(model, WriteOperation.CREATE, data=payload)
        instances = [model(**self._payload(model, payload, Operation.CREATE_MANY)) for payload in payloads]
        self.session.add_all(instances)
        self.session.flush()
        return instances

    def update(self, model: type[Base], where: Where, data: Mapping[str, Any]) -> int:
        """Apply ``data`` to every in-scope match; return the affected-row count."""

        targets = self._rows(model, where, Operation.UPDATE)
        self._authorize(model, WriteOperation.UPDATE, data=data, targets=targets)
        self._apply(model, targets, data)
        return len(targets)

    def delete(self, model: type[Base], where: Where) -> int:
        """Delete every in-scope match; return the affected-row count."""

        targets = self._rows(model, where, Operation.DELETE)
        self._authorize(model, WriteOperation.DELETE, targets=targets)
        for target in targets:
            self.session.delete(target)
        self.session.flush()
        return len(targets)

    def upsert(
        self,
        model: type[ModelT],
        where: Where,
        create: Mapping[str, Any],
        update: Mapping[str, Any],
    ) -> ModelT:
        existing = next(iter(self._rows(model, where, Operation.UPSERT, limit=1)), None)
        if existing is None:
            return self.create(model, create)
        self._authorize(model, WriteOperation.UPDATE, data=update, targets=[existing])
        self._apply(model, [existing], update)
        return existing

    def _apply(self, model: type[Base], targets: Sequence[Base], data: Mapping[str, Any]) -> None:
        payload = dict(data)
        if ORGANISATION_COLUMN in payload:
            payload = self._payload(model, payload, Operation.UPDATE)
        for name in payload:
            _require_column(model, name)
        for target in targets:
            for name, value in payload.items():
                setattr(target, name, value)
        self.session.flush()


__all__ = [
    "Filter",
    "InvalidFilterError",
    "Operation",
    "ORGANISATION_COLUMN",
    "ScopedClient",
    "Where",
    "tenant_scope_of",
]
