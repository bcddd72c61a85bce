"""Unit tests for role-based write rules."""
from __future__ import annotations

import pytest

from clinic.core.access import (
    WriteOperation,
    authorize_user_account_write,
    authorize_write,
    can_create_admin_user,
    can_delete_user,
    can_modify_admin_user,
    has_permission,
)
from clinic.core.tenant import AccessDeniedError, TenantContext
from clinic.db.models import UserRole


@pytest.mark.parametrize("operation", list(WriteOperation))
def test_doctor_writes_restricted_to_managers(operation: WriteOperation) -> None:
    assert has_permission("doctor", operation, UserRole.ADMIN)
    assert has_permission("doctor", operation, UserRole.CABINET_MANAGER)
    assert not has_permission("doctor", operation, UserRole.DOCTOR)
    assert not has_permission("doctor", operation, UserRole.SECRETARY)


def test_unlisted_models_allow_every_role() -> None:
    for role in UserRole:
        assert has_permission("invoice", WriteOperation.DELETE, role)


def test_admin_account_rules() -> None:
    assert can_create_admin_user(UserRole.ADMIN, UserRole.ADMIN)
    assert not can_create_admin_user(UserRole.CABINET_MANAGER, UserRole.ADMIN)
    assert can_create_admin_user(UserRole.CABINET_MANAGER, UserRole.DOCTOR)

    assert not can_modify_admin_user(UserRole.CABINET_MANAGER, UserRole.ADMIN)
    assert can_modify_admin_user(UserRole.CABINET_MANAGER, UserRole.SECRETARY)

    assert can_delete_user(UserRole.ADMIN, UserRole.ADMIN)
    assert not can_delete_user(UserRole.CABINET_MANAGER, UserRole.ADMIN)
    assert can_delete_user(UserRole.CABINET_MANAGER, UserRole.DOCTOR)
    assert not can_delete_user(UserRole.DOCTOR, UserRole.SECRETARY)


def test_authorize_write_allows_system_context() -> None:
    authorize_write(None, "doctor", WriteOperation.DELETE)


def test_authorize_write_message_names_role_and_model() -> None:
    context = TenantContext(organisation_id=1, user_id=5, role=UserRole.SECRETARY)

    with pytest.raises(AccessDeniedError) as excinfo:
        authorize_write(context, "doctor", WriteOperation.UPDATE)

    assert str(excinfo.value) == "User with role SECRETARY is not authorized to update doctor records"


def test_promoting_to_admin_requires_admin() -> None:
    manager = TenantContext(organisation_id=1, role=UserRole.CABINET_MANAGER)

    with pytest.raises(AccessDeniedError):
        authorize_user_account_write(
            manager, WriteOperation.UPDATE, new_role=UserRole.ADMIN, existing_roles=[UserRole.DOCTOR]
        )

    authorize_user_account_write(
        TenantContext(organisation_id=1, role=UserRole.ADMIN),
        WriteOperation.UPDATE,
        new_role=UserRole.ADMIN,
        existing_roles=[UserRole.DOCTOR],
    )
