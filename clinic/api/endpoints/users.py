"""Staff account REST endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from clinic.api.dependencies import get_user_service
from clinic.api.errors import map_service_error
from clinic.schemas.user import UserCreate, UserRead, UserRoleUpdate
from clinic.services.exceptions import ServiceError
from clinic.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserRead])
def list_users(service: UserService = Depends(get_user_service)) -> list[UserRead]:
    try:
        return service.list()
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, service: UserService = Depends(get_user_service)) -> UserRead:
    try:
        return service.create(payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.patch("/{user_id}/role", response_model=UserRead)
def change_user_role(
    user_id: int,
    payload: UserRoleUpdate,
    service: UserService = Depends(get_user_service),
) -> UserRead:
    try:
        return service.change_role(user_id, payload.role)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, service: UserService = Depends(get_user_service)) -> Response:
    try:
        service.delete(user_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)
