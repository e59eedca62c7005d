"""
Role & Permission Use Cases

Administration of the RBAC tables.
"""

from .initialize_roles_use_case import InitializeRolesUseCase
from .get_roles_use_case import ListRolesUseCase, GetRoleUseCase
from .create_role_use_case import CreateRoleUseCase
from .update_role_use_case import UpdateRoleUseCase
from .delete_role_use_case import DeleteRoleUseCase
from .permission_use_cases import (
    ListPermissionsUseCase,
    CreatePermissionUseCase,
    UpdatePermissionUseCase,
    DeletePermissionUseCase,
)
from .dtos import (
    CreateRoleCommand,
    UpdateRoleCommand,
    CreatePermissionCommand,
    UpdatePermissionCommand,
    RoleResponse,
    PermissionResponse,
    InitializeRolesResponse,
)

__all__ = [
    # Use Cases
    "InitializeRolesUseCase",
    "ListRolesUseCase",
    "GetRoleUseCase",
    "CreateRoleUseCase",
    "UpdateRoleUseCase",
    "DeleteRoleUseCase",
    "ListPermissionsUseCase",
    "CreatePermissionUseCase",
    "UpdatePermissionUseCase",
    "DeletePermissionUseCase",
    # DTOs
    "CreateRoleCommand",
    "UpdateRoleCommand",
    "CreatePermissionCommand",
    "UpdatePermissionCommand",
    "RoleResponse",
    "PermissionResponse",
    "InitializeRolesResponse",
]
