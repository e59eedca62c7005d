from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import Permission, Role


class IRoleRepository(ABC):
    """Role repository interface - application layer"""

    @abstractmethod
    async def get_all(self) -> List[Role]:
        """Get all active roles ordered by name"""
        pass

    @abstractmethod
    async def get_by_id(self, role_id: int) -> Optional[Role]:
        """Get role by ID"""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Role]:
        """Get role by unique name"""
        pass

    @abstractmethod
    async def create(self, role: Role, permission_ids: Optional[List[int]] = None) -> Role:
        """Create a role, optionally linking it to permissions.

        Raises DuplicateEntryError if the name is taken.
        """
        pass

    @abstractmethod
    async def update(self, role: Role) -> Role:
        """Update existing role. Raises DuplicateEntryError if the name is taken."""
        pass

    @abstractmethod
    async def replace_permissions(self, role_id: int, permission_ids: List[int]) -> None:
        """Delete every RolePermission row of the role, then recreate from the list"""
        pass

    @abstractmethod
    async def get_permissions(self, role_id: int) -> List[Permission]:
        """Get permissions linked to the role"""
        pass

    @abstractmethod
    async def has_permission(self, role_id: int, permission_name: str) -> bool:
        """Check if the role is linked to an active permission with this name"""
        pass

    @abstractmethod
    async def delete(self, role_id: int) -> None:
        """Soft-delete the role (is_active=False)"""
        pass
