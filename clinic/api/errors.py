"""HTTP exception helpers for service-layer and tenant-access errors."""
from __future__ import annotations

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from clinic.core.tenant import TenantAccessError
from clinic.services.exceptions import ConflictError, NotFoundError, ServiceError, ValidationError


def map_service_error(exc: ServiceError) -> HTTPException:
    """Translate service-layer errors into HTTP exceptions."""

    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal service error")


async def tenant_access_error_handler(request: Request, exc: TenantAccessError) -> JSONResponse:
    """Render role and tenant-context refusals as 403 responses."""

    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})
