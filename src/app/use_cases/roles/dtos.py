"""
Role & Permission Use Case DTOs
"""

from typing import List, Optional
from pydantic import BaseModel

from src.domain.entities import Permission, Role


# ============================================================================
# Command DTOs
# ============================================================================


class CreateRoleCommand(BaseModel):
    name: str
    description: Optional[str] = None
    permission_ids: Optional[List[int]] = None


class UpdateRoleCommand(BaseModel):
    """Fields left as None are not changed. permission_ids replaces the whole set."""

    name: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    permission_ids: Optional[List[int]] = None


class CreatePermissionCommand(BaseModel):
    name: str
    description: Optional[str] = None


class UpdatePermissionCommand(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


# ============================================================================
# Response DTOs
# ============================================================================


class PermissionResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool

    @classmethod
    def from_entity(cls, permission: Permission) -> "PermissionResponse":
        return cls(
            id=permission.id,
            name=permission.name,
            description=permission.description,
            is_active=permission.is_active,
        )


class RoleResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool
    permissions: List[str] = []

    @classmethod
    def from_entity(cls, role: Role, permissions: List[Permission]) -> "RoleResponse":
        return cls(
            id=role.id,
            name=role.name,
            description=role.description,
            is_active=role.is_active,
            permissions=[p.name for p in permissions],
        )


class InitializeRolesResponse(BaseModel):
    permissions_created: int
    roles_created: List[str]
