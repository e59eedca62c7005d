"""
Use Cases

Organized into domain folders:
- auth/: Authentication lifecycle
- roles/: Role and permission administration
- users/: User management
"""

from .auth import (
    RegisterUseCase,
    RegisterCommand,
    LoginUseCase,
    RefreshTokenUseCase,
    ForgotPasswordUseCase,
    ResetPasswordUseCase,
    ChangePasswordUseCase,
    LogoutUseCase,
    GetMeUseCase,
)
from .roles import (
    InitializeRolesUseCase,
    ListRolesUseCase,
    GetRoleUseCase,
    CreateRoleUseCase,
    UpdateRoleUseCase,
    DeleteRoleUseCase,
    ListPermissionsUseCase,
    CreatePermissionUseCase,
    UpdatePermissionUseCase,
    DeletePermissionUseCase,
)
from .users import (
    AssignRoleUseCase,
    ListUsersUseCase,
    GetUserUseCase,
    CreateUserUseCase,
    UpdateUserUseCase,
    DeleteUserUseCase,
    SeedAdminUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "RegisterCommand",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
    "ChangePasswordUseCase",
    "LogoutUseCase",
    "GetMeUseCase",
    # Roles & permissions
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
    # Users
    "AssignRoleUseCase",
    "ListUsersUseCase",
    "GetUserUseCase",
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "DeleteUserUseCase",
    "SeedAdminUseCase",
]
