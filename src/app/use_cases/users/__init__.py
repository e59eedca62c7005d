"""
User Management Use Cases
"""

from .assign_role_use_case import AssignRoleUseCase, AssignRoleResponse
from .get_users_use_case import ListUsersUseCase, GetUserUseCase
from .create_user_use_case import CreateUserUseCase
from .update_user_use_case import UpdateUserUseCase
from .delete_user_use_case import DeleteUserUseCase
from .seed_admin_use_case import SeedAdminUseCase
from .dtos import (
    CreateUserCommand,
    UpdateUserCommand,
    UserResponse,
    UserPage,
    Pagination,
    SeedAdminResponse,
)

__all__ = [
    # Use Cases
    "AssignRoleUseCase",
    "ListUsersUseCase",
    "GetUserUseCase",
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "DeleteUserUseCase",
    "SeedAdminUseCase",
    # DTOs
    "AssignRoleResponse",
    "CreateUserCommand",
    "UpdateUserCommand",
    "UserResponse",
    "UserPage",
    "Pagination",
    "SeedAdminResponse",
]
