"""
RolePermission Entity

Join table between roles and permissions. Replaced wholesale whenever a
role's permission set changes.
"""

from sqlmodel import Field, SQLModel


class RolePermission(SQLModel, table=True):
    """Association row; identity is the (role, permission) pair."""

    __tablename__ = "role_permissions"

    role_id: int = Field(foreign_key="roles.id", primary_key=True)
    permission_id: int = Field(foreign_key="permissions.id", primary_key=True)
