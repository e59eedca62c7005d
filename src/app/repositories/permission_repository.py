from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import Permission


class IPermissionRepository(ABC):
    """Permission repository interface - application layer"""

    @abstractmethod
    async def get_all(self) -> List[Permission]:
        """Get all active permissions ordered by name"""
        pass

    @abstractmethod
    async def get_by_id(self, permission_id: int) -> Optional[Permission]:
        """Get permission by ID"""
        pass

    @abstractmethod
    async def get_by_ids(self, permission_ids: List[int]) -> List[Permission]:
        """Get every permission whose ID is in the list"""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Permission]:
        """Get permission by unique name"""
        pass

    @abstractmethod
    async def create(self, permission: Permission) -> Permission:
        """Create a new permission. Raises DuplicateEntryError if the name is taken."""
        pass

    @abstractmethod
    async def create_many(self, permissions: List[Permission]) -> int:
        """Create permissions whose names do not exist yet. Returns count created."""
        pass

    @abstractmethod
    async def update(self, permission: Permission) -> Permission:
        """Update existing permission. Raises DuplicateEntryError if the name is taken."""
        pass

    @abstractmethod
    async def delete(self, permission_id: int) -> None:
        """Soft-delete the permission (is_active=False)"""
        pass

    @abstractmethod
    async def unlink_from_roles(self, permission_id: int) -> None:
        """Remove the permission from every role that grants it"""
        pass
