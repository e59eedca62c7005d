"""
RBAC Domain Constants

Role names, the permission catalogue and the default grants seeded for
the two system roles.
"""

from enum import Enum


class RoleName(str, Enum):
    """System role names"""

    admin = "admin"
    user = "user"


# System roles can never be deleted
SYSTEM_ROLES = frozenset({RoleName.admin.value, RoleName.user.value})


class PermissionName(str, Enum):
    """Standard permissions, named "<resource>.<action>"."""

    users_read = "users.read"
    users_create = "users.create"
    users_update = "users.update"
    users_delete = "users.delete"
    users_manage = "users.manage"

    roles_read = "roles.read"
    roles_create = "roles.create"
    roles_update = "roles.update"
    roles_delete = "roles.delete"
    roles_manage = "roles.manage"

    permissions_read = "permissions.read"
    permissions_manage = "permissions.manage"

    admin_access = "admin.access"


# Aggregates like users.manage are granted literally; nothing expands them.
DEFAULT_ROLE_PERMISSIONS = {
    RoleName.admin.value: [
        PermissionName.admin_access.value,
        PermissionName.users_manage.value,
        PermissionName.roles_manage.value,
        PermissionName.permissions_manage.value,
    ],
    RoleName.user.value: [
        PermissionName.users_read.value,
    ],
}

DEFAULT_ROLE_DESCRIPTIONS = {
    RoleName.admin.value: "Administrator role with full access",
    RoleName.user.value: "Standard user role with basic permissions",
}
