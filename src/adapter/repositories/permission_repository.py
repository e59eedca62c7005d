from typing import List, Optional

from sqlalchemy import delete
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.integrity import flush_unique
from src.app.repositories.permission_repository import IPermissionRepository
from src.domain.base import utcnow
from src.domain.entities import Permission, RolePermission


class PermissionRepository(IPermissionRepository):
    """Permission repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(self) -> List[Permission]:
        """Get all active permissions ordered by name"""
        stmt = (
            select(Permission)
            .where(Permission.is_active == True)
            .order_by(Permission.name)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_id(self, permission_id: int) -> Optional[Permission]:
        """Get permission by ID"""
        stmt = select(Permission).where(Permission.id == permission_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_ids(self, permission_ids: List[int]) -> List[Permission]:
        if not permission_ids:
            return []
        stmt = select(Permission).where(Permission.id.in_(permission_ids))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_name(self, name: str) -> Optional[Permission]:
        """Get permission by unique name"""
        stmt = select(Permission).where(Permission.name == name)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, permission: Permission) -> Permission:
        """Create a new permission"""
        self.session.add(permission)
        await flush_unique(self.session)
        await self.session.refresh(permission)
        return permission

    async def create_many(self, permissions: List[Permission]) -> int:
        """Create permissions, skipping names that already exist"""
        names = [p.name for p in permissions]
        stmt = select(Permission.name).where(Permission.name.in_(names))
        result = await self.session.exec(stmt)
        existing = set(result.all())

        to_create = []
        for permission in permissions:
            if permission.name not in existing:
                existing.add(permission.name)
                to_create.append(permission)

        if to_create:
            self.session.add_all(to_create)
            await self.session.flush()
        return len(to_create)

    async def update(self, permission: Permission) -> Permission:
        """Update existing permission"""
        permission.updated_at = utcnow()
        self.session.add(permission)
        await flush_unique(self.session)
        await self.session.refresh(permission)
        return permission

    async def delete(self, permission_id: int) -> None:
        """Soft-delete the permission"""
        stmt = (
            update(Permission)
            .where(Permission.id == permission_id)
            .values(is_active=False, updated_at=utcnow())
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def unlink_from_roles(self, permission_id: int) -> None:
        """Drop every RolePermission row pointing at the permission"""
        await self.session.execute(
            delete(RolePermission).where(RolePermission.permission_id == permission_id)
        )
        await self.session.flush()
