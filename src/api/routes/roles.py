from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.roles import (
    CreateRoleCommand,
    CreateRoleUseCase,
    DeleteRoleUseCase,
    GetRoleUseCase,
    ListRolesUseCase,
    RoleResponse,
    UpdateRoleCommand,
    UpdateRoleUseCase,
)
from src.depends import get_unit_of_work, require_any_permission
from src.domain.entities import PermissionName

router = APIRouter(prefix="/roles", tags=["Roles"])

can_read_roles = require_any_permission(
    [
        PermissionName.roles_read.value,
        PermissionName.roles_manage.value,
        PermissionName.admin_access.value,
    ]
)
can_manage_roles = require_any_permission(
    [PermissionName.roles_manage.value, PermissionName.admin_access.value]
)


class CreateRoleRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Unique role name")
    description: Optional[str] = Field(None, max_length=255)
    permission_ids: Optional[List[int]] = Field(None, description="Initial permission set")


class UpdateRoleRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    is_active: Optional[bool] = None
    permission_ids: Optional[List[int]] = Field(
        None, description="Replaces the whole permission set when provided"
    )


@router.get("", response_model=List[RoleResponse], dependencies=[Depends(can_read_roles)])
async def list_roles(uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await ListRolesUseCase(uow).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{role_id}", response_model=RoleResponse, dependencies=[Depends(can_read_roles)])
async def get_role(role_id: int, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Raises:
        - 404 Not Found: Unknown role
    """
    result = await GetRoleUseCase(uow).execute(role_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=RoleResponse,
    dependencies=[Depends(can_manage_roles)],
)
async def create_role(request: CreateRoleRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Raises:
        - 400 Bad Request: Unknown permission ids
        - 409 Conflict: Role name taken
    """
    command = CreateRoleCommand(**request.model_dump())
    result = await CreateRoleUseCase(uow).execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/{role_id}", response_model=RoleResponse, dependencies=[Depends(can_manage_roles)])
async def update_role(
    role_id: int, request: UpdateRoleRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Raises:
        - 400 Bad Request: Unknown permission ids
        - 403 Forbidden: Renaming or deactivating a system role
        - 404 Not Found: Unknown role
        - 409 Conflict: Role name taken
    """
    command = UpdateRoleCommand(**request.model_dump())
    result = await UpdateRoleUseCase(uow).execute(role_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(can_manage_roles)],
)
async def delete_role(role_id: int, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Raises:
        - 403 Forbidden: System roles ("admin", "user") cannot be deleted
        - 404 Not Found: Unknown role
    """
    result = await DeleteRoleUseCase(uow).execute(role_id)
    if result.is_err():
        raise_for_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
