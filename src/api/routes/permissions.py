from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.roles import (
    CreatePermissionCommand,
    CreatePermissionUseCase,
    DeletePermissionUseCase,
    ListPermissionsUseCase,
    PermissionResponse,
    UpdatePermissionCommand,
    UpdatePermissionUseCase,
)
from src.depends import get_unit_of_work, require_any_permission
from src.domain.entities import PermissionName

router = APIRouter(prefix="/permissions", tags=["Permissions"])

can_read_permissions = require_any_permission(
    [
        PermissionName.permissions_read.value,
        PermissionName.permissions_manage.value,
        PermissionName.admin_access.value,
    ]
)
can_manage_permissions = require_any_permission(
    [PermissionName.permissions_manage.value, PermissionName.admin_access.value]
)


class CreatePermissionRequest(BaseModel):
    name: str = Field(..., description="Permission name, e.g. users.create")
    description: Optional[str] = Field(None, max_length=255)


class UpdatePermissionRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = Field(None, max_length=255)
    is_active: Optional[bool] = None


@router.get(
    "", response_model=List[PermissionResponse], dependencies=[Depends(can_read_permissions)]
)
async def list_permissions(uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await ListPermissionsUseCase(uow).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PermissionResponse,
    dependencies=[Depends(can_manage_permissions)],
)
async def create_permission(
    request: CreatePermissionRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Raises:
        - 400 Bad Request: Name is not "resource.action"
        - 409 Conflict: Name taken
    """
    command = CreatePermissionCommand(**request.model_dump())
    result = await CreatePermissionUseCase(uow).execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put(
    "/{permission_id}",
    response_model=PermissionResponse,
    dependencies=[Depends(can_manage_permissions)],
)
async def update_permission(
    permission_id: int,
    request: UpdatePermissionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    command = UpdatePermissionCommand(**request.model_dump())
    result = await UpdatePermissionUseCase(uow).execute(permission_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/{permission_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(can_manage_permissions)],
)
async def delete_permission(permission_id: int, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await DeletePermissionUseCase(uow).execute(permission_id)
    if result.is_err():
        raise_for_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
