"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums and constants
from .enums import (
    DEFAULT_ROLE_DESCRIPTIONS,
    DEFAULT_ROLE_PERMISSIONS,
    SYSTEM_ROLES,
    PermissionName,
    RoleName,
)

# Export all entities
from .role_permission import RolePermission
from .permission import Permission
from .role import Role
from .user import User

__all__ = [
    # Enums / constants
    "RoleName",
    "PermissionName",
    "SYSTEM_ROLES",
    "DEFAULT_ROLE_PERMISSIONS",
    "DEFAULT_ROLE_DESCRIPTIONS",
    # Entities
    "User",
    "Role",
    "Permission",
    "RolePermission",
]
