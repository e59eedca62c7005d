from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import raise_for_error
from src.app.repositories.user_repository import UserFilters
from src.app.services.password_service import PasswordService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import (
    AssignRoleResponse,
    AssignRoleUseCase,
    CreateUserCommand,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserCommand,
    UpdateUserUseCase,
    UserPage,
    UserResponse,
)
from src.depends import get_password_service, get_unit_of_work, require_any_permission
from src.domain.entities import PermissionName

router = APIRouter(prefix="/users", tags=["User"])


def _users_guard(permission: PermissionName):
    # The specific permission, or either of the aggregates that cover user admin
    return require_any_permission(
        [
            permission.value,
            PermissionName.users_manage.value,
            PermissionName.admin_access.value,
        ]
    )


can_read_users = _users_guard(PermissionName.users_read)
can_create_users = _users_guard(PermissionName.users_create)
can_update_users = _users_guard(PermissionName.users_update)
can_delete_users = _users_guard(PermissionName.users_delete)
can_manage_users = require_any_permission(
    [PermissionName.users_manage.value, PermissionName.admin_access.value]
)


class CreateUserRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="Initial password")
    name: Optional[str] = Field(None, max_length=100)
    role_id: Optional[int] = Field(None, description="Defaults to the \"user\" role")


class UpdateUserRequest(BaseModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None


class AssignRoleRequest(BaseModel):
    role_id: int = Field(..., description="Role to assign")


@router.get("", response_model=UserPage, dependencies=[Depends(can_read_users)])
async def list_users(
    page: int = Query(1, description="1-based page number"),
    limit: int = Query(10, description="Page size, at most 100"),
    email: Optional[str] = Query(None, description="Substring of the email"),
    name: Optional[str] = Query(None, description="Substring of the name"),
    is_active: Optional[bool] = Query(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    filters = UserFilters(email=email, name=name, is_active=is_active)
    result = await ListUsersUseCase(uow).execute(page, limit, filters)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{user_id}", response_model=UserResponse, dependencies=[Depends(can_read_users)])
async def get_user(user_id: int, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Raises:
        - 404 Not Found: Unknown user
    """
    result = await GetUserUseCase(uow).execute(user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    dependencies=[Depends(can_create_users)],
)
async def create_user(
    request: CreateUserRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    passwords: PasswordService = Depends(get_password_service),
):
    """
    Create an account without logging it in.

    Raises:
        - 400 Bad Request: Weak password, inactive role
        - 404 Not Found: Unknown role
        - 409 Conflict: Email already exists
    """
    command = CreateUserCommand(**request.model_dump())
    result = await CreateUserUseCase(uow, passwords).execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/{user_id}", response_model=UserResponse, dependencies=[Depends(can_update_users)])
async def update_user(
    user_id: int, request: UpdateUserRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Update email, name or the active flag. Deactivated users are rejected
    on their next request.

    Raises:
        - 404 Not Found: Unknown user
        - 409 Conflict: Email already exists
    """
    command = UpdateUserCommand(**request.model_dump())
    result = await UpdateUserUseCase(uow).execute(user_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(can_delete_users)],
)
async def delete_user(user_id: int, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Raises:
        - 404 Not Found: Unknown user
    """
    result = await DeleteUserUseCase(uow).execute(user_id)
    if result.is_err():
        raise_for_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{user_id}/role",
    status_code=status.HTTP_200_OK,
    response_model=AssignRoleResponse,
    dependencies=[Depends(can_manage_users)],
)
async def assign_role(
    user_id: int,
    request: AssignRoleRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Assign a role to a user. Takes effect on the user's next request.

    Raises:
        - 400 Bad Request: Role is inactive
        - 403 Forbidden: Caller lacks users.manage / admin.access
        - 404 Not Found: Unknown user or role
    """
    result = await AssignRoleUseCase(uow).execute(user_id, request.role_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
