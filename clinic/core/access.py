"""Role-based write rules applied by the scoped data-access client."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from clinic.db.models import UserRole

from .tenant import AccessDeniedError, TenantContext

logger = logging.getLogger(__name__)


class WriteOperation(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


MANAGERS = frozenset({UserRole.ADMIN, UserRole.CABINET_MANAGER})

# Models absent from this table accept writes from any role.
ROLE_ACCESS_RULES: dict[str, dict[WriteOperation, frozenset[UserRole]]] = {
    "doctor": {
        WriteOperation.CREATE: MANAGERS,
        WriteOperation.UPDATE: MANAGERS,
        WriteOperation.DELETE: MANAGERS,
    },
    "user": {
        WriteOperation.CREATE: MANAGERS,
        WriteOperation.UPDATE: MANAGERS,
        WriteOperation.DELETE: MANAGERS,
    },
}


def has_permission(model_name: str, operation: WriteOperation, role: UserRole) -> bool:
    rules = ROLE_ACCESS_RULES.get(model_name)
    if not rules:
        return True
    allowed = rules.get(operation)
    if allowed is None:
        return True
    return role in allowed


def can_create_admin_user(current_role: UserRole, new_role: UserRole | None) -> bool:
    if new_role is not UserRole.ADMIN:
        return True
    return current_role is UserRole.ADMIN


def can_modify_admin_user(current_role: UserRole, existing_role: UserRole | None) -> bool:
    if existing_role is not UserRole.ADMIN:
        return True
    return current_role is UserRole.ADMIN


def can_delete_user(current_role: UserRole, target_role: UserRole | None) -> bool:
    if target_role is UserRole.ADMIN:
        return current_role is UserRole.ADMIN
    return current_role in MANAGERS


def require_role(context: TenantContext) -> UserRole:
    if context.role is None:
        raise AccessDeniedError("User role not found")
    return context.role


def authorize_write(context: TenantContext | None, model_name: str, operation: WriteOperation) -> None:
    """Raise :class:`AccessDeniedError` unless ``context`` may write ``model_name``.

    ``None`` is the system context and is always allowed.
    """

    if context is None:
        return
    role = require_role(context)
    if not has_permission(model_name, operation, role):
        logger.warning(
            "Denied %s on %s for role %s (user=%s)", operation.value, model_name, role.value, context.user_id
        )
        raise AccessDeniedError(
            f"User with role {role.value} is not authorized to {operation.value} {model_name} records"
        )


def authorize_user_account_write(
    context: TenantContext | None,
    operation: WriteOperation,
    *,
    new_role: UserRole | None = None,
    existing_roles: Iterable[UserRole | None] = (),
) -> None:
    """Apply the admin-account rules on top of :func:`authorize_write`."""

    if context is None:
        return
    role = require_role(context)
    if operation is WriteOperation.CREATE and not can_create_admin_user(role, new_role):
        raise AccessDeniedError("Only administrators can create administrator accounts")
    for existing in existing_roles:
        if operation is WriteOperation.UPDATE:
            if not can_modify_admin_user(role, existing) or not can_create_admin_user(role, new_role):
                raise AccessDeniedError("Only administrators can modify administrator accounts")
        elif operation is WriteOperation.DELETE and not can_delete_user(role, existing):
            raise AccessDeniedError("User is not authorized to delete this account")
